"""SM-2 review state and its transition function.

This is a simplified SM-2: four answer grades, an easiness factor bounded to
[1.3, 2.5], and the classic 1 / 6 / interval * EF progression.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .time import DAY_MS, utc_now_ms

logger = logging.getLogger(__name__)

MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3


class Quality(IntEnum):
    """Answer grades exposed to learners."""

    AGAIN = 1
    HARD = 3
    GOOD = 4
    EASY = 5


@dataclass(frozen=True)
class ReviewStat:
    ease_factor: float
    repetitions: int
    interval_days: int
    due_at: int
    last_reviewed_at: int

    def is_valid(self) -> bool:
        """Check the scheduling invariants."""
        return (
            math.isfinite(self.ease_factor)
            and MIN_EASE_FACTOR <= self.ease_factor <= MAX_EASE_FACTOR
            and self.repetitions >= 0
            and self.interval_days >= 0
            and self.due_at == self.last_reviewed_at + self.interval_days * DAY_MS
        )


DEFAULT_STAT = ReviewStat(
    ease_factor=MAX_EASE_FACTOR,
    repetitions=0,
    interval_days=0,
    due_at=0,
    last_reviewed_at=0,
)


def round_half_up(x: float) -> int:
    """Round a non-negative number to the nearest integer, ties away from zero."""
    return int(math.floor(x + 0.5))


def clamp_quality(value: Any) -> int:
    """Coerce an arbitrary answer quality into an integer in [0, 5].

    Never raises: NaN, non-numeric objects and unparsable strings are
    treated as 0 (a failed recall); infinities clamp to the nearest bound.
    """
    if isinstance(value, int):
        return max(MIN_QUALITY, min(MAX_QUALITY, int(value)))

    try:
        q = float(value)
    except OverflowError:
        # Huge numerics such as Fraction(10**400)
        return MAX_QUALITY if value > 0 else MIN_QUALITY
    except (TypeError, ValueError):
        logger.debug("Non-numeric quality %r treated as %d", value, MIN_QUALITY)
        return MIN_QUALITY

    if math.isnan(q):
        return MIN_QUALITY

    q = max(float(MIN_QUALITY), min(float(MAX_QUALITY), q))
    return round_half_up(q)


def _clamp_ease_factor(ef: float) -> float:
    return max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, ef))


def advance(previous: ReviewStat | None, quality: Any, now: int | None = None) -> ReviewStat:
    """Return the review state that follows answering an item with `quality`.

    previous: the item's current state, or None for a never-reviewed item
    quality: any value; clamped to an integer in [0, 5]
    now: review instant in epoch milliseconds (defaults to the wall clock)

    Rules:
    - if q < 3: repetitions = 0, intervalDays = 1
    - else:
        repetitions += 1
        if repetitions == 1: intervalDays = 1
        if repetitions == 2: intervalDays = 6
        else: intervalDays = round(previousIntervalDays * previousEF)
    - EF' = EF + (0.1 - (5-q)*(0.08 + (5-q)*0.02)), clamped to [1.3, 2.5],
      applied on both branches
    - dueAt = lastReviewedAt + intervalDays days

    `previous` is never modified.
    """
    q = clamp_quality(quality)
    base = previous if previous is not None else DEFAULT_STAT

    if q < PASSING_QUALITY:
        repetitions = 0
        interval = 1
    else:
        repetitions = base.repetitions + 1
        if repetitions == 1:
            interval = 1
        elif repetitions == 2:
            interval = 6
        else:
            interval = round_half_up(base.interval_days * base.ease_factor)

    ef = base.ease_factor + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    ef = _clamp_ease_factor(ef)

    last = utc_now_ms() if now is None else int(now)

    return ReviewStat(
        ease_factor=ef,
        repetitions=repetitions,
        interval_days=interval,
        due_at=last + interval * DAY_MS,
        last_reviewed_at=last,
    )


def is_due(stat: ReviewStat | None, now: int | None = None) -> bool:
    """Whether an item should be reviewed at `now`. Never-reviewed items are always due."""
    if stat is None:
        return True
    if now is None:
        now = utc_now_ms()
    return stat.due_at <= now
