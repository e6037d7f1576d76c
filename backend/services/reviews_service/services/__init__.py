"""
Reviews Service Business Logic Package
"""

from .review_stats_service import ReviewStatsService

__all__ = ["ReviewStatsService"]
