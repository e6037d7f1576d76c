"""
Review Statistics Request/Response Models

This module defines the Pydantic models returned by the reviews service. The
same models are produced by the service layer, so the numbers a caller sees are
exactly the numbers the totals were computed from.

Field names use camelCase to match the JSON consumed by automation platforms.

Models:
    - ReviewSummary: Review counters for one location
    - LocationStats: Review counters plus identity for one location of an account
    - GlobalStats: Totals across every location of an account
    - AccountReviewStats: Aggregation result for one account
    - AccountsResponse / LocationsResponse: Relayed upstream lists
    - LocationReviewStatsResponse / AllReviewsStatsResponse: Stats envelopes
    - ErrorResponse: Body of every failed request

Example:
    ```json
    {
        "success": true,
        "accountId": "123",
        "globalStats": {
            "totalLocations": 2,
            "totalReviews": 10,
            "averageRatingAcrossAllLocations": 2.25
        },
        "locationStats": [
            {"locationId": "L1", "locationName": "Main St", "address": "1 Main St",
             "totalReviewCount": 10, "averageRating": 4.5},
            {"locationId": "L2", "locationName": "Harbor", "address": "N/A",
             "totalReviewCount": 0, "averageRating": 0.0,
             "error": "Requested entity was not found."}
        ]
    }
    ```
"""

from typing import Any

from pydantic import BaseModel, Field


class ReviewSummary(BaseModel):
    """
    Review counters of a single location.

    Upstream omits both counters for locations without reviews, so each
    defaults to 0.
    """

    totalReviewCount: int = Field(0, ge=0, description="Total number of reviews")
    averageRating: float = Field(0.0, description="Average star rating")


class LocationStats(ReviewSummary):
    """
    Review statistics for one location of an account.

    Attributes:
        locationId: Last path segment of the location resource name.
        locationName: Display name, "N/A" when upstream has none.
        address: Address lines joined with ", ", "N/A" when absent.
        error: Only set when this location's review fetch failed. Counters are
            0 in that case.
    """

    locationId: str
    locationName: str
    address: str
    error: str | None = Field(None, description="Why the review fetch failed, if it did")


class GlobalStats(BaseModel):
    """
    Totals across every location of an account.

    Failed locations are included: they count as a location, add 0 reviews and
    weigh in the average with a rating of 0.
    """

    totalLocations: int
    totalReviews: int
    averageRatingAcrossAllLocations: float


class AccountReviewStats(BaseModel):
    """Aggregated review statistics for one account."""

    accountId: str
    globalStats: GlobalStats
    locationStats: list[LocationStats]


class AccountsResponse(BaseModel):
    success: bool = True
    accounts: list[dict[str, Any]]


class LocationsResponse(BaseModel):
    success: bool = True
    locations: list[dict[str, Any]]


class LocationReviewStatsResponse(BaseModel):
    success: bool = True
    locationId: str
    stats: ReviewSummary


class AllReviewsStatsResponse(AccountReviewStats):
    success: bool = True


class ErrorResponse(BaseModel):
    """
    Body returned for every failed request.

    ``error`` relays the upstream error body when there is one, otherwise a
    message. ``message`` is only present on authentication failures.
    """

    success: bool = False
    error: Any
    message: str | None = None
