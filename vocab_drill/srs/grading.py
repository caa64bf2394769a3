"""Map learner answers to SM-2 qualities.

The scheduler only understands qualities in [0, 5]. Presentation layers talk
in grade names or plain right/wrong answers; the helpers here translate.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from .sm2 import PASSING_QUALITY, Quality, clamp_quality

logger = logging.getLogger(__name__)


Grade = Literal["again", "hard", "good", "easy"]

_GRADE_TO_QUALITY: dict[str, Quality] = {
    "again": Quality.AGAIN,
    "hard": Quality.HARD,
    "good": Quality.GOOD,
    "easy": Quality.EASY,
}


def quality_for_grade(grade: Grade | str) -> Quality:
    """Return the quality for a grade name. Unknown names count as "again"."""
    quality = _GRADE_TO_QUALITY.get(str(grade).strip().lower())
    if quality is None:
        logger.warning("Unknown grade %r treated as 'again'", grade)
        return Quality.AGAIN
    return quality


def quality_for_answer(correct: bool) -> Quality:
    """Quality for a multiple-choice answer.

    Rules:
    - correct → "good"
    - wrong → "again"
    """
    return Quality.GOOD if correct else Quality.AGAIN


def is_success(quality: Any) -> bool:
    return clamp_quality(quality) >= PASSING_QUALITY
