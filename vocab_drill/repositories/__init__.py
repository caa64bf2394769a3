"""Repositories module for data access layer."""

from .review_stat_repository import (
    ReviewStatRepository,
    get_review_stat_repository,
    reset_review_stat_repository,
)

__all__ = [
    "ReviewStatRepository",
    "get_review_stat_repository",
    "reset_review_stat_repository",
]
