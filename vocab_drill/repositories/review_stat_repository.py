"""Repository for the persisted map of item id -> review stat."""

from __future__ import annotations

import json
import logging
from typing import Mapping

from pydantic import ValidationError

from vocab_drill.config import get_settings
from vocab_drill.db import KeyValueStore, StorageError, get_key_value_store
from vocab_drill.models import ReviewStatRecord
from vocab_drill.srs.sm2 import ReviewStat

logger = logging.getLogger(__name__)


class ReviewStatRepository:
    """Load and save all review stats as one JSON blob under a fixed key.

    Nothing here raises on bad data or an unavailable medium: unreadable
    state loads as an empty map, and failed writes are reported through
    the return value.
    """

    def __init__(self, kv_store: KeyValueStore, key: str | None = None):
        self._kv_store = kv_store
        self._key = key or get_settings().stats_key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> dict[str, ReviewStat]:
        """Read all valid stats. Invalid entries are dropped one by one."""
        try:
            raw = self._kv_store.get(self._key)
        except StorageError:
            logger.warning("Review stat storage unavailable, starting with no stats", exc_info=True)
            return {}

        if raw is None:
            return {}

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Stored review stats under %r are not valid JSON: %s", self._key, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Stored review stats under %r are not an object, ignoring", self._key)
            return {}

        stats: dict[str, ReviewStat] = {}
        dropped = 0
        for item_id, value in data.items():
            if not isinstance(value, dict):
                dropped += 1
                continue
            try:
                record = ReviewStatRecord.model_validate(value)
            except ValidationError as e:
                logger.debug("Dropping review stat for %r: %s", item_id, e)
                dropped += 1
                continue
            stats[item_id] = record.to_stat()

        if dropped:
            logger.warning("Dropped %d invalid review stat record(s) under %r", dropped, self._key)
        return stats

    def save(self, stats: Mapping[str, ReviewStat]) -> bool:
        """Persist the whole map. Returns False if the medium rejected the write."""
        payload = {}
        for item_id, stat in stats.items():
            try:
                payload[item_id] = ReviewStatRecord.from_stat(stat).model_dump()
            except ValidationError as e:
                logger.warning("Not saving invalid review stat for %r: %s", item_id, e)

        blob = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        try:
            self._kv_store.set(self._key, blob)
        except StorageError:
            logger.warning("Failed to save %d review stat(s)", len(payload), exc_info=True)
            return False
        return True

    def reset(self) -> bool:
        """Delete every stored stat."""
        try:
            self._kv_store.delete(self._key)
        except StorageError:
            logger.warning("Failed to reset review stats under %r", self._key, exc_info=True)
            return False
        logger.info("Review stats under %r reset", self._key)
        return True


# Singleton instance
_review_stat_repository: ReviewStatRepository | None = None


def get_review_stat_repository() -> ReviewStatRepository:
    """Get the review stat repository singleton for the configured backend."""
    global _review_stat_repository
    if _review_stat_repository is None:
        _review_stat_repository = ReviewStatRepository(get_key_value_store())
    return _review_stat_repository


def reset_review_stat_repository() -> None:
    """Reset the repository singleton (for testing)."""
    global _review_stat_repository
    _review_stat_repository = None
