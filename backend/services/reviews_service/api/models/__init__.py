"""
Reviews Service API Models Package

All models use Pydantic BaseModel for validation, serialization and OpenAPI
schema generation.
"""

from .reviews import (
    AccountReviewStats,
    AccountsResponse,
    AllReviewsStatsResponse,
    ErrorResponse,
    GlobalStats,
    LocationReviewStatsResponse,
    LocationsResponse,
    LocationStats,
    ReviewSummary,
)

__all__ = [
    "AccountReviewStats",
    "AccountsResponse",
    "AllReviewsStatsResponse",
    "ErrorResponse",
    "GlobalStats",
    "LocationReviewStatsResponse",
    "LocationsResponse",
    "LocationStats",
    "ReviewSummary",
]
