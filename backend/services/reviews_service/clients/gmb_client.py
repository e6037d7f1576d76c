"""
Google Business Profile API Client

Thin asynchronous wrapper over the Business Profile (Google My Business) v4 REST
API. Every request carries the caller's OAuth access token; this client never
acquires or refreshes tokens.

Endpoints used:
    GET /accounts
    GET /accounts/{accountId}/locations
    GET /accounts/{accountId}/locations/{locationId}/reviews?pageSize=N

Every failure (non-2xx status, network error, timeout, unreadable body) is
raised as ``common.exceptions.UpstreamError`` so callers deal with a single
exception type.

Example:
    ```python
    async with GMBClient(access_token, base_url=settings.GMB_API_BASE_URL) as client:
        body = await client.list_locations("1234567890")
        for location in body.get("locations", []):
            print(location["name"])
    ```
"""

from typing import Any

import httpx
from loguru import logger

from common.exceptions import UpstreamError, extract_upstream_message

DEFAULT_BASE_URL = "https://mybusiness.googleapis.com/v4"


class GMBClient:
    """
    Async client for the Business Profile v4 API, bound to one access token.

    The underlying ``httpx.AsyncClient`` is opened by ``__aenter__`` and closed
    by ``__aexit__``, so one instance serves all the calls of a single request,
    including a concurrent fan-out.

    Attributes:
        base_url: API root, e.g. "https://mybusiness.googleapis.com/v4".
        timeout: httpx timeout (seconds) applied to each call.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._access_token = access_token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GMBClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def list_accounts(self) -> dict[str, Any]:
        """Return the raw ``accounts.list`` body."""
        return await self._get("/accounts")

    async def list_locations(self, account_id: str) -> dict[str, Any]:
        """Return the raw ``accounts.locations.list`` body (first page only)."""
        return await self._get(f"/accounts/{account_id}/locations")

    async def list_reviews(self, location_name: str, page_size: int = 1) -> dict[str, Any]:
        """
        Return the raw ``reviews.list`` body of one location.

        Args:
            location_name: Full resource name, "accounts/{a}/locations/{l}".
            page_size: Number of reviews requested. The summary counters
                (totalReviewCount, averageRating) come with any page, so 1 is
                enough when only the counters are needed.
        """
        return await self._get(
            f"/{location_name.strip('/')}/reviews", params={"pageSize": page_size}
        )

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if self._client is None:
            msg = "GMBClient must be used as an async context manager"
            raise RuntimeError(msg)

        logger.debug(f"GET {path} params={params}")
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Request to {path} failed: {e!r}")
            raise UpstreamError(
                status_code=None,
                detail=str(e) or e.__class__.__name__,
                internal_error=e,
            ) from e

        if not response.is_success:
            body = _decode_error_body(response)
            raise UpstreamError(
                status_code=response.status_code,
                detail=body,
                upstream_message=extract_upstream_message(body),
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(
                status_code=None,
                detail="Malformed response body from upstream",
                internal_error=e,
            ) from e

        if not isinstance(body, dict):
            raise UpstreamError(
                status_code=None, detail="Unexpected response body from upstream"
            )
        return body


def _decode_error_body(response: httpx.Response) -> Any:
    """Return the JSON error body, or the raw text when it isn't JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text or response.reason_phrase
