"""
Pytest configuration and fixtures for reviews service tests.
"""

import asyncio
import os
from dataclasses import dataclass
from typing import Any

import httpx
import pytest

# Set test environment variables before importing modules
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("ENVIRONMENT", "DEV")
os.environ.setdefault("GMB_API_BASE_URL", "https://gmb.test/v4")

from fastapi.testclient import TestClient  # noqa: E402

from common.config import ReviewsServiceSettings  # noqa: E402
from services.reviews_service.api.dependencies import get_review_stats_service  # noqa: E402
from services.reviews_service.main import app  # noqa: E402
from services.reviews_service.services import ReviewStatsService  # noqa: E402

BASE_PATH = "/v4"
ACCOUNT_ID = "123"
TOKEN = "ya29.test-token"

NOT_FOUND_BODY = {
    "error": {
        "code": 404,
        "message": "Requested entity was not found.",
        "status": "NOT_FOUND",
    }
}


@dataclass
class FakeRoute:
    status_code: int = 200
    json: Any = None
    content: bytes | None = None
    delay: float = 0.0
    network_error: bool = False


class FakeGMBApi:
    """
    In-memory stand-in for the Business Profile API.

    Routes are registered by path (without the /v4 prefix). Unknown paths answer
    with a Google style 404. Every request is recorded, and the number of
    requests in flight at the same time is tracked.
    """

    def __init__(self) -> None:
        self.routes: dict[str, FakeRoute] = {}
        self.requests: list[httpx.Request] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def add(self, path: str, **kwargs: Any) -> None:
        self.routes[f"{BASE_PATH}{path}"] = FakeRoute(**kwargs)

    def add_locations(self, account_id: str, locations: list[dict[str, Any]], **extra: Any) -> None:
        self.add(f"/accounts/{account_id}/locations", json={"locations": locations, **extra})

    def add_reviews(self, location_name: str, **kwargs: Any) -> None:
        self.add(f"/{location_name}/reviews", **kwargs)

    def requested_paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json=NOT_FOUND_BODY)

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if route.delay:
                await asyncio.sleep(route.delay)
            if route.network_error:
                raise httpx.ConnectError("Connection refused", request=request)
            if route.content is not None:
                return httpx.Response(route.status_code, content=route.content)
            return httpx.Response(route.status_code, json=route.json)
        finally:
            self.in_flight -= 1

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_location(location_id: str, name: str | None = None, address_lines: list[str] | None = None) -> dict[str, Any]:
    """Return a v4 location record of the test account."""
    location: dict[str, Any] = {"name": f"accounts/{ACCOUNT_ID}/locations/{location_id}"}
    if name is not None:
        location["locationName"] = name
    if address_lines is not None:
        location["address"] = {"addressLines": address_lines, "locality": "Springfield"}
    return location


@pytest.fixture
def fake_api() -> FakeGMBApi:
    """Return an empty fake Business Profile API."""
    return FakeGMBApi()


@pytest.fixture
def settings() -> ReviewsServiceSettings:
    """Return reviews service settings pointing at the fake API."""
    return ReviewsServiceSettings(
        GMB_API_BASE_URL="https://gmb.test/v4",
        LOCATION_FETCH_TIMEOUT_SECONDS=1.0,
        MAX_CONCURRENT_LOCATION_FETCHES=10,
    )


@pytest.fixture
def service(settings: ReviewsServiceSettings, fake_api: FakeGMBApi) -> ReviewStatsService:
    """Return a review stats service wired to the fake API."""
    return ReviewStatsService(settings, transport=fake_api.transport)


@pytest.fixture
def client(service: ReviewStatsService):
    """Return a test client whose upstream calls hit the fake API."""
    app.dependency_overrides[get_review_stats_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def account_id() -> str:
    return ACCOUNT_ID


@pytest.fixture
def location_factory():
    """Return the factory building v4 location records of the test account."""
    return make_location


@pytest.fixture
def not_found_body() -> dict[str, Any]:
    return NOT_FOUND_BODY
