"""TTL-based store for in-progress learning sessions."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass

from cachetools import TTLCache

from vocab_drill.config import get_settings
from vocab_drill.models import Item


@dataclass
class LearningSession:
    """A composed session and the learner's position in it.

    The item order is fixed when the session starts; only the cursor and
    the score move.

    Attributes:
        session_id: Stable ID (deterministic UUID per user_id, deck_id, created_at)
        created_at: Epoch milliseconds when the session was composed
        items: Presentation order, never changed after creation
        position: Index of the current item
        correct_count: Number of successful answers so far
        answered: Whether the current item has been answered
    """

    session_id: str
    created_at: int
    items: tuple[Item, ...] = ()
    position: int = 0
    correct_count: int = 0
    answered: bool = False

    @property
    def finished(self) -> bool:
        return self.position >= len(self.items)

    @property
    def current_item(self) -> Item | None:
        if self.finished:
            return None
        return self.items[self.position]

    @property
    def remaining(self) -> int:
        return max(0, len(self.items) - self.position)

    def mark_answered(self, success: bool) -> bool:
        """Record the answer to the current item.

        Returns False (and changes nothing) if the session is finished or the
        current item was already answered.
        """
        if self.finished or self.answered:
            return False
        self.answered = True
        if success:
            self.correct_count += 1
        return True

    def move_next(self) -> None:
        """Advance to the next item."""
        if self.finished:
            return
        self.position += 1
        self.answered = False


def _generate_session_id(user_id: str, deck_id: str, created_at: int) -> str:
    """Generate a deterministic session ID.

    Uses UUID5 with a fixed namespace so the same inputs always produce the
    same ID.
    """
    namespace = uuid.UUID('6ba7b810-9dad-11d1-80b4-00c04fd430c8')
    combined = f"{user_id}:{deck_id}:{created_at}"
    return str(uuid.uuid5(namespace, combined))


def new_learning_session(user_id: str, deck_id: str, items: tuple[Item, ...], created_at: int) -> LearningSession:
    return LearningSession(
        session_id=_generate_session_id(user_id, deck_id, created_at),
        created_at=created_at,
        items=tuple(items),
    )


class SessionStore:
    """Thread-safe TTL-based session store.

    Stores LearningSession keyed by (user_id, deck_id).
    Sessions expire after TTL seconds of inactivity (sliding window).
    """

    # Default TTL: 30 minutes
    DEFAULT_TTL_SECONDS = 30 * 60
    # Max sessions to cache
    MAX_SESSIONS = 10000

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, maxsize: int = MAX_SESSIONS, timer=None):
        kwargs = {"timer": timer} if timer is not None else {}
        self._cache: TTLCache[tuple[str, str], LearningSession] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds, **kwargs
        )
        self._lock = threading.Lock()

    def _make_key(self, user_id: str, deck_id: str) -> tuple[str, str]:
        return (user_id, deck_id)

    def get(self, user_id: str, deck_id: str) -> LearningSession | None:
        """Get the session for a user and deck.

        Returns None if no session exists or it has expired.
        Accessing the session refreshes its TTL (sliding window).
        """
        key = self._make_key(user_id, deck_id)
        with self._lock:
            session = self._cache.get(key)
            if session is not None:
                # Re-set to refresh TTL (sliding window)
                self._cache[key] = session
            return session

    def put(self, user_id: str, deck_id: str, session: LearningSession) -> None:
        """Store a session, replacing any previous one (also refreshes TTL)."""
        key = self._make_key(user_id, deck_id)
        with self._lock:
            self._cache[key] = session

    def reset(self, user_id: str, deck_id: str) -> None:
        """Remove the session for a user and deck."""
        key = self._make_key(user_id, deck_id)
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all sessions (for testing)."""
        with self._lock:
            self._cache.clear()


# Singleton instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the singleton session store instance."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(ttl_seconds=get_settings().session_ttl_seconds)
    return _session_store


def reset_session_store() -> None:
    """Reset the session store (for testing)."""
    global _session_store
    _session_store = None
