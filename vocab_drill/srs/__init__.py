"""SRS helpers (SM-2 state, shuffling and session composition)."""

from .sm2 import (
    DEFAULT_STAT,
    Quality,
    ReviewStat,
    advance,
    clamp_quality,
    is_due,
    round_half_up,
)
from .shuffle import (
    RandomSource,
    SeededRandom,
    pick_random,
    shuffle,
    shuffle_in_place,
    shuffle_seeded,
    validate_shuffle,
)
from .session import (
    ReviewSummary,
    SessionBuckets,
    filter_by_ordinal_range,
    partition_pool,
    start_session,
    summarize_pool,
)
from .grading import Grade, is_success, quality_for_answer, quality_for_grade
from .time import DAY_MS, utc_now, utc_now_ms, datetime_to_ms, ms_to_datetime, ms_to_iso_z, add_days_ms

__all__ = [
    "DEFAULT_STAT",
    "Quality",
    "ReviewStat",
    "advance",
    "clamp_quality",
    "is_due",
    "round_half_up",
    "RandomSource",
    "SeededRandom",
    "pick_random",
    "shuffle",
    "shuffle_in_place",
    "shuffle_seeded",
    "validate_shuffle",
    "ReviewSummary",
    "SessionBuckets",
    "filter_by_ordinal_range",
    "partition_pool",
    "start_session",
    "summarize_pool",
    "Grade",
    "is_success",
    "quality_for_answer",
    "quality_for_grade",
    "DAY_MS",
    "utc_now",
    "utc_now_ms",
    "datetime_to_ms",
    "ms_to_datetime",
    "ms_to_iso_z",
    "add_days_ms",
]
