"""Single write path for a learner's review stats.

The controller owns the in-memory stat map, composes sessions from a
snapshot of it, and persists every answer through the repository. All
read-modify-write cycles on the map happen under one lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Sequence

from vocab_drill.config import get_settings
from vocab_drill.models import Item
from vocab_drill.repositories import ReviewStatRepository
from vocab_drill.srs.grading import is_success
from vocab_drill.srs.session import ReviewSummary, start_session, summarize_pool
from vocab_drill.srs.shuffle import RandomSource
from vocab_drill.srs.sm2 import ReviewStat, advance
from vocab_drill.srs.time import utc_now_ms

from .session_store import LearningSession, SessionStore, get_session_store, new_learning_session

logger = logging.getLogger(__name__)


class ReviewController:
    """Drive learning sessions for one learner."""

    def __init__(
        self,
        repository: ReviewStatRepository,
        user_id: str = "default",
        session_store: SessionStore | None = None,
        rng: RandomSource | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self._repository = repository
        self._user_id = user_id
        self._session_store = session_store or get_session_store()
        self._rng = rng
        self._clock = clock or utc_now_ms
        self._stats: dict[str, ReviewStat] | None = None
        self._lock = threading.Lock()
        self.last_save_succeeded = True

    @property
    def user_id(self) -> str:
        return self._user_id

    def _loaded(self) -> dict[str, ReviewStat]:
        # Caller must hold self._lock
        if self._stats is None:
            self._stats = self._repository.load()
            logger.info("Loaded %d review stat(s) for user %s", len(self._stats), self._user_id)
        return self._stats

    @property
    def stats(self) -> dict[str, ReviewStat]:
        """Snapshot of the current stats."""
        with self._lock:
            return dict(self._loaded())

    def stat_for(self, item_id: str) -> ReviewStat | None:
        with self._lock:
            return self._loaded().get(item_id)

    def start_session(
        self,
        pool: Sequence[Item],
        target_count: int | None = None,
        deck_id: str = "default",
        now: int | None = None,
    ) -> LearningSession:
        """Compose a new session for `deck_id`, replacing any active one."""
        if target_count is None:
            target_count = get_settings().session_size
        if now is None:
            now = self._clock()

        items = start_session(pool, self.stats, target_count, now=now, rng=self._rng)
        session = new_learning_session(self._user_id, deck_id, items, now)
        self._session_store.put(self._user_id, deck_id, session)

        logger.info(
            "Started session %s for user %s: %d of %d item(s)",
            session.session_id,
            self._user_id,
            len(items),
            len(pool),
        )
        return session

    def current_session(self, deck_id: str = "default") -> LearningSession | None:
        return self._session_store.get(self._user_id, deck_id)

    def _record_locked(self, item_id: str, quality: Any, now: int) -> ReviewStat:
        # Caller must hold self._lock
        stats = self._loaded()
        new_stat = advance(stats.get(item_id), quality, now=now)
        stats[item_id] = new_stat
        self.last_save_succeeded = self._repository.save(stats)

        logger.debug(
            "Recorded answer for %s: quality=%r reps=%d interval=%dd ef=%.2f",
            item_id,
            quality,
            new_stat.repetitions,
            new_stat.interval_days,
            new_stat.ease_factor,
        )
        if not self.last_save_succeeded:
            logger.warning("Review stat for %s kept in memory only", item_id)
        return new_stat

    def record_answer(self, item_id: str, quality: Any, now: int | None = None) -> ReviewStat:
        """Advance one item's stat and persist the whole map.

        A failed save leaves the new stat in memory and sets
        `last_save_succeeded` to False.
        """
        if now is None:
            now = self._clock()
        with self._lock:
            return self._record_locked(item_id, quality, now)

    def answer_current(self, quality: Any, deck_id: str = "default", now: int | None = None) -> ReviewStat | None:
        """Record an answer for the active session's current item.

        Returns None when there is no active session, it is finished, or the
        current item was already answered. The check and the update run under
        one lock, so concurrent answers to the same position count once.
        """
        if now is None:
            now = self._clock()

        with self._lock:
            session = self.current_session(deck_id)
            if session is None or session.finished or session.answered:
                return None

            item = session.current_item
            stat = self._record_locked(item.id, quality, now)
            session.mark_answered(is_success(quality))
            self._session_store.put(self._user_id, deck_id, session)
        return stat

    def summary(self, pool: Sequence[Item], now: int | None = None) -> ReviewSummary:
        if now is None:
            now = self._clock()
        return summarize_pool(pool, self.stats, now=now)

    def reset(self) -> bool:
        """Forget every review stat, in memory and in storage."""
        with self._lock:
            self._stats = {}
            ok = self._repository.reset()
        logger.info("Review stats reset for user %s", self._user_id)
        return ok
