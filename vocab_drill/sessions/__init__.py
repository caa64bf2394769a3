"""Learning session state and the review controller."""

from .session_store import (
    LearningSession,
    SessionStore,
    get_session_store,
    new_learning_session,
    reset_session_store,
)
from .controller import ReviewController

__all__ = [
    "LearningSession",
    "SessionStore",
    "get_session_store",
    "new_learning_session",
    "reset_session_store",
    "ReviewController",
]
