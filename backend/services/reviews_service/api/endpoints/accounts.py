"""
Account, Location and Review Statistics Endpoints

Every route requires ``Authorization: Bearer <token>``. The token is relayed to
the Business Profile API; a missing or malformed header is rejected with 401
before any upstream call.

Endpoints:
    GET /accounts
        Accounts visible to the token.

    GET /accounts/{account_id}/locations
        Locations of an account (first upstream page).

    GET /accounts/{account_id}/locations/{location_id}/reviews-stats
        Review count and average rating of one location.

    GET /accounts/{account_id}/all-reviews-stats
        Review statistics of every location of an account plus account totals.

Error Handling:
    Upstream failures are answered with the upstream status code (500 when
    there is none) and ``{"success": false, "error": <upstream body>}``.
    In all-reviews-stats only a failure to list the locations does that; a
    failing location is reported on its own entry and the request succeeds.
"""

from fastapi import APIRouter, Depends

from common.security import get_bearer_token
from services.reviews_service.api.dependencies import get_review_stats_service
from services.reviews_service.api.models import (
    AccountsResponse,
    AllReviewsStatsResponse,
    ErrorResponse,
    LocationReviewStatsResponse,
    LocationsResponse,
)
from services.reviews_service.services import ReviewStatsService

router = APIRouter(
    prefix="/accounts",
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
        500: {"model": ErrorResponse, "description": "Upstream or internal failure"},
    },
)


@router.get("", response_model=AccountsResponse)
async def list_accounts(
    access_token: str = Depends(get_bearer_token),
    service: ReviewStatsService = Depends(get_review_stats_service),
) -> AccountsResponse:
    """List the Business Profile accounts of the authenticated user."""
    accounts = await service.list_accounts(access_token)
    return AccountsResponse(accounts=accounts)


@router.get("/{account_id}/locations", response_model=LocationsResponse)
async def list_locations(
    account_id: str,
    access_token: str = Depends(get_bearer_token),
    service: ReviewStatsService = Depends(get_review_stats_service),
) -> LocationsResponse:
    """List the locations of an account, as returned by upstream."""
    locations = await service.list_locations(account_id, access_token)
    return LocationsResponse(locations=locations)


@router.get(
    "/{account_id}/locations/{location_id}/reviews-stats",
    response_model=LocationReviewStatsResponse,
)
async def get_location_reviews_stats(
    account_id: str,
    location_id: str,
    access_token: str = Depends(get_bearer_token),
    service: ReviewStatsService = Depends(get_review_stats_service),
) -> LocationReviewStatsResponse:
    """
    Get the total review count and average rating of one location.

    Upstream failures are relayed as-is (status code and body).
    """
    stats = await service.get_location_review_stats(account_id, location_id, access_token)
    return LocationReviewStatsResponse(locationId=location_id, stats=stats)


@router.get(
    "/{account_id}/all-reviews-stats",
    response_model=AllReviewsStatsResponse,
    response_model_exclude_none=True,
)
async def get_all_reviews_stats(
    account_id: str,
    access_token: str = Depends(get_bearer_token),
    service: ReviewStatsService = Depends(get_review_stats_service),
) -> AllReviewsStatsResponse:
    """
    Get review statistics for every location of an account.

    Returns:
        AllReviewsStatsResponse containing:
            - accountId (str)
            - globalStats: totalLocations, totalReviews and
              averageRatingAcrossAllLocations (mean over all locations,
              failed ones counted as 0, rounded to 2 decimals)
            - locationStats: one entry per location in upstream order. Entries
              whose fetch failed have zeroed counters and an ``error`` field.
    """
    result = await service.get_account_review_stats(account_id, access_token)
    return AllReviewsStatsResponse(**result.model_dump())
