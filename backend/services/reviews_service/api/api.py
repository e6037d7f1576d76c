"""
API Router Aggregation for the Reviews Service

This module aggregates the endpoint routers of the reviews service into a single
router included by the application under the API_PREFIX setting ("/api").

Endpoint groups:
    - Accounts: accounts, locations and review statistics

Attributes:
    api_router (APIRouter): Router containing all reviews service endpoints
    ENDPOINTS (dict[str, str]): Public endpoint listing served by GET /
"""

from fastapi import APIRouter

from services.reviews_service.api.endpoints import accounts

api_router = APIRouter()

# Tags are used for organizing endpoints in Swagger/OpenAPI documentation
api_router.include_router(accounts.router, tags=["accounts"])

ENDPOINTS = {
    "GET /api/accounts": "List all Business Profile accounts",
    "GET /api/accounts/:accountId/locations": "List all locations of an account",
    "GET /api/accounts/:accountId/locations/:locationId/reviews-stats": (
        "Review stats of a single location"
    ),
    "GET /api/accounts/:accountId/all-reviews-stats": (
        "Review stats of every location of an account"
    ),
}
