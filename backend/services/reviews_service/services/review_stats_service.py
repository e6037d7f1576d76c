"""
Review Statistics Service - Core Business Logic

This module implements the review statistics operations of the reviews service:

    1. Relay operations
       - List accounts and list locations, relayed as returned by upstream
       - Review counters of a single location (upstream failures propagate)

    2. Account aggregation
       - List the account's locations (a failure here fails the request)
       - Fetch every location's review counters concurrently, bounded by a
         request-scoped semaphore and a per-location timeout
       - Record per-location failures on that location's entry instead of
         aborting, so every listed location appears exactly once, in order
       - Compute totals over the exact entries returned

Nothing is shared between requests: the access token and account are passed to
every call and each request opens its own HTTP client.

Example:
    ```python
    service = ReviewStatsService()
    result = await service.get_account_review_stats("1234567890", access_token)
    print(result.globalStats.totalReviews)
    ```
"""

import asyncio
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from common.config import ReviewsServiceSettings, get_settings
from common.exceptions import UpstreamError
from services.reviews_service.api.models import (
    AccountReviewStats,
    GlobalStats,
    LocationStats,
    ReviewSummary,
)
from services.reviews_service.clients import GMBClient

NOT_AVAILABLE = "N/A"
REVIEWS_UNAVAILABLE_MESSAGE = "Unable to retrieve reviews"
MISSING_RESOURCE_NAME_MESSAGE = "Location has no resource name"
MALFORMED_LOCATION_MESSAGE = "Malformed location record"


class ReviewStatsService:
    """
    Review statistics operations over the Business Profile API.

    Attributes:
        settings: Reviews service settings (upstream URL, timeouts, concurrency
            limit, review page size).
        transport: Optional httpx transport handed to every client. Left as None
            in production; tests pass an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: ReviewsServiceSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings("reviews-service")
        self.transport = transport

    def _client(self, access_token: str) -> GMBClient:
        return GMBClient(
            access_token,
            base_url=self.settings.GMB_API_BASE_URL,
            timeout=self.settings.UPSTREAM_TIMEOUT_SECONDS,
            transport=self.transport,
        )

    async def list_accounts(self, access_token: str) -> list[dict[str, Any]]:
        """Return the accounts visible to the token, or [] when upstream has none."""
        async with self._client(access_token) as client:
            body = await client.list_accounts()
        return body.get("accounts") or []

    async def list_locations(self, account_id: str, access_token: str) -> list[dict[str, Any]]:
        """Return the account's locations as upstream sent them (first page only)."""
        async with self._client(access_token) as client:
            body = await client.list_locations(account_id)
        _warn_if_truncated(account_id, body)
        return body.get("locations") or []

    async def get_location_review_stats(
        self, account_id: str, location_id: str, access_token: str
    ) -> ReviewSummary:
        """
        Return the review counters of one location.

        Unlike the per-location fetch of the account aggregation, upstream
        failures are not absorbed here.

        Raises:
            UpstreamError: If the upstream call fails or returns unusable counters.
        """
        location_name = f"accounts/{account_id}/locations/{location_id}"
        async with self._client(access_token) as client:
            body = await client.list_reviews(
                location_name, page_size=self.settings.REVIEWS_PAGE_SIZE
            )
        return parse_review_summary(body)

    async def get_account_review_stats(
        self, account_id: str, access_token: str
    ) -> AccountReviewStats:
        """
        Aggregate review statistics over every location of an account.

        Steps:
            1. List the account's locations (single upstream call).
            2. Fetch each location's counters concurrently and wait for all of
               them. Failures stay on their own entry.
            3. Keep the upstream location order.
            4. Compute the global totals from those entries.

        Returns:
            AccountReviewStats with one LocationStats per listed location. An
            account without locations yields an empty list and zeroed totals.

        Raises:
            UpstreamError: Only when listing the locations fails.
        """
        async with self._client(access_token) as client:
            body = await client.list_locations(account_id)
            _warn_if_truncated(account_id, body)
            locations = body.get("locations") or []

            logger.info(
                f"Fetching review stats for {len(locations)} locations of account {account_id}"
            )
            semaphore = asyncio.Semaphore(self.settings.MAX_CONCURRENT_LOCATION_FETCHES)
            location_stats = await asyncio.gather(
                *(
                    self.fetch_location_stats(client, location, semaphore)
                    for location in locations
                )
            )

        global_stats = compute_global_stats(location_stats)
        failed = sum(1 for stats in location_stats if stats.error)
        logger.info(
            f"Account {account_id}: {global_stats.totalLocations} locations, "
            f"{global_stats.totalReviews} reviews, {failed} failed"
        )
        return AccountReviewStats(
            accountId=account_id,
            globalStats=global_stats,
            locationStats=list(location_stats),
        )

    async def fetch_location_stats(
        self,
        client: GMBClient,
        location: Any,
        semaphore: asyncio.Semaphore,
    ) -> LocationStats:
        """
        Fetch the review counters of one location, never raising.

        The request waits for a semaphore slot, then gets
        LOCATION_FETCH_TIMEOUT_SECONDS to complete. Any failure (upstream error,
        timeout, unusable body, missing resource name, a record that is not an
        object) produces an entry with zeroed counters and an ``error`` message.
        """
        if not isinstance(location, dict):
            logger.warning(f"Skipping review fetch for a malformed location record: {location!r}")
            return LocationStats(
                locationId=NOT_AVAILABLE,
                locationName=NOT_AVAILABLE,
                address=NOT_AVAILABLE,
                error=MALFORMED_LOCATION_MESSAGE,
            )

        resource_name = _text(location.get("name")) or ""
        identity = {
            "locationId": location_id_from_name(resource_name),
            "locationName": location_display_name(location),
            "address": format_address(location),
        }

        if not resource_name:
            logger.warning(f"Skipping review fetch for a location without resource name: {location}")
            return LocationStats(**identity, error=MISSING_RESOURCE_NAME_MESSAGE)

        timeout = self.settings.LOCATION_FETCH_TIMEOUT_SECONDS
        try:
            async with semaphore:
                body = await asyncio.wait_for(
                    client.list_reviews(
                        resource_name, page_size=self.settings.REVIEWS_PAGE_SIZE
                    ),
                    timeout=timeout,
                )
            summary = parse_review_summary(body)
        except asyncio.TimeoutError:
            error = f"Timed out after {timeout:g}s while retrieving reviews"
        except UpstreamError as e:
            error = e.upstream_message or REVIEWS_UNAVAILABLE_MESSAGE
        else:
            return LocationStats(**identity, **summary.model_dump())

        logger.warning(f"Review fetch failed for location {identity['locationId']}: {error}")
        return LocationStats(**identity, error=error)


def parse_review_summary(body: dict[str, Any]) -> ReviewSummary:
    """
    Read the review counters from a ``reviews.list`` body.

    Missing or null counters become 0.

    Raises:
        UpstreamError: If a counter is present but unusable (not a number,
            negative count).
    """
    try:
        return ReviewSummary(
            totalReviewCount=body.get("totalReviewCount") or 0,
            averageRating=body.get("averageRating") or 0,
        )
    except ValidationError as e:
        raise UpstreamError(
            status_code=None,
            detail="Malformed review summary from upstream",
            internal_error=e,
        ) from e


def compute_global_stats(location_stats: list[LocationStats]) -> GlobalStats:
    """
    Compute account totals from the per-location entries.

    Every entry counts, including failed ones (0 reviews, rating 0). The
    average is rounded half up to two decimals and is 0 for no entries.
    """
    total_locations = len(location_stats)
    total_reviews = sum(stats.totalReviewCount for stats in location_stats)

    average = 0.0
    if total_locations:
        mean = sum(stats.averageRating for stats in location_stats) / total_locations
        average = float(Decimal(str(mean)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    return GlobalStats(
        totalLocations=total_locations,
        totalReviews=total_reviews,
        averageRatingAcrossAllLocations=average,
    )


def location_id_from_name(resource_name: str) -> str:
    """Return the last path segment of "accounts/{a}/locations/{l}"."""
    return resource_name.rstrip("/").rsplit("/", 1)[-1]


def location_display_name(location: dict[str, Any]) -> str:
    # v4 uses locationName, the Business Information API uses title
    return _text(location.get("locationName")) or _text(location.get("title")) or NOT_AVAILABLE


def format_address(location: dict[str, Any]) -> str:
    """
    Join the postal address lines of a location with ", ".

    Reads ``address`` (v4), then ``storefrontAddress`` (Business Information
    API). Anything that is not an object holding a list of lines gives "N/A".
    """
    for field in ("address", "storefrontAddress"):
        address = location.get(field)
        if not isinstance(address, dict):
            continue
        lines = address.get("addressLines")
        if isinstance(lines, list):
            joined = ", ".join(line for line in lines if _text(line))
            if joined:
                return joined
    return NOT_AVAILABLE


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _warn_if_truncated(account_id: str, body: dict[str, Any]) -> None:
    if body.get("nextPageToken"):
        logger.warning(
            f"Account {account_id} has more locations than the first page; "
            "only the first page is used"
        )
