"""
Shared API dependencies for the reviews service.
"""

from functools import lru_cache

from services.reviews_service.services import ReviewStatsService


@lru_cache(maxsize=1)
def get_review_stats_service() -> ReviewStatsService:
    """
    Get cached review statistics service instance.
    The service holds only settings, so one instance serves every request.
    """
    return ReviewStatsService()
