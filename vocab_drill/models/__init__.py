"""Models module for Pydantic schemas."""

from .item import Item
from .review_stat import ReviewStatRecord

__all__ = [
    "Item",
    "ReviewStatRecord",
]
