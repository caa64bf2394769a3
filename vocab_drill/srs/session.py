"""Session composition: pick and order the items of one learning session."""

from __future__ import annotations

import logging
from typing import Mapping, NamedTuple, Protocol, Sequence, TypeVar

from .shuffle import RandomSource, shuffle
from .sm2 import ReviewStat
from .time import utc_now_ms

logger = logging.getLogger(__name__)


class SchedulableItem(Protocol):
    @property
    def id(self) -> str: ...


class RangedItem(SchedulableItem, Protocol):
    @property
    def ordinal(self) -> int: ...


ItemT = TypeVar("ItemT", bound=SchedulableItem)
RangedT = TypeVar("RangedT", bound=RangedItem)


class SessionBuckets(NamedTuple):
    """Disjoint partition of a pool by review state, in pool order."""

    due: list
    fresh: list
    other: list


class ReviewSummary(NamedTuple):
    due_count: int
    new_count: int
    total_count: int


def partition_pool(
    pool: Sequence[ItemT],
    stats: Mapping[str, ReviewStat],
    now: int,
) -> SessionBuckets:
    """Split `pool` into due, never-reviewed and not-yet-due items."""
    due: list[ItemT] = []
    fresh: list[ItemT] = []
    other: list[ItemT] = []

    for item in pool:
        stat = stats.get(item.id)
        if stat is None:
            fresh.append(item)
        elif stat.due_at <= now:
            due.append(item)
        else:
            other.append(item)

    return SessionBuckets(due=due, fresh=fresh, other=other)


def start_session(
    pool: Sequence[ItemT],
    stats: Mapping[str, ReviewStat],
    target_count: int,
    now: int | None = None,
    rng: RandomSource | None = None,
) -> tuple[ItemT, ...]:
    """Compose the ordered item list for a new session.

    Due items come first, then never-reviewed items, then items that are not
    due yet; each group is shuffled on its own. The result is cut to
    `target_count`. `stats` is read, never modified.
    """
    if not pool or target_count <= 0:
        return ()

    if now is None:
        now = utc_now_ms()

    buckets = partition_pool(pool, stats, now)
    ordered = shuffle(buckets.due, rng) + shuffle(buckets.fresh, rng) + shuffle(buckets.other, rng)

    logger.debug(
        "Composed session: due=%d fresh=%d other=%d target=%d",
        len(buckets.due),
        len(buckets.fresh),
        len(buckets.other),
        target_count,
    )
    return tuple(ordered[:target_count])


def summarize_pool(
    pool: Sequence[SchedulableItem],
    stats: Mapping[str, ReviewStat],
    now: int | None = None,
) -> ReviewSummary:
    """Count due and never-reviewed items in a pool."""
    if now is None:
        now = utc_now_ms()
    buckets = partition_pool(pool, stats, now)
    return ReviewSummary(
        due_count=len(buckets.due),
        new_count=len(buckets.fresh),
        total_count=len(pool),
    )


def filter_by_ordinal_range(pool: Sequence[RangedT], start: int, end: int) -> list[RangedT]:
    """Keep items whose ordinal lies in [start, end]."""
    if start > end:
        logger.warning("Invalid ordinal range: start %d > end %d", start, end)
        return []
    return [item for item in pool if start <= item.ordinal <= end]
