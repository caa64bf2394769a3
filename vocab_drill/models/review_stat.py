"""Persisted form of a review stat.

One record per item id inside the stored blob:
{"ef": 2.5, "reps": 3, "interval": 15, "dueAt": 1704067200000, "last": 1702771200000}
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vocab_drill.srs.sm2 import MAX_EASE_FACTOR, MIN_EASE_FACTOR, ReviewStat
from vocab_drill.srs.time import DAY_MS


class ReviewStatRecord(BaseModel):
    """Validated wire record. Extra fields are ignored; bools never pass as numbers."""

    model_config = ConfigDict(strict=True, extra="ignore")

    ef: float = Field(..., ge=MIN_EASE_FACTOR, le=MAX_EASE_FACTOR, allow_inf_nan=False)
    reps: int = Field(..., ge=0)
    interval: int = Field(..., ge=0)
    dueAt: int
    last: int

    @model_validator(mode="after")
    def _due_at_matches_interval(self) -> "ReviewStatRecord":
        expected = self.last + self.interval * DAY_MS
        if self.dueAt != expected:
            raise ValueError(f"dueAt {self.dueAt} does not equal last + interval days ({expected})")
        return self

    @classmethod
    def from_stat(cls, stat: ReviewStat) -> "ReviewStatRecord":
        return cls(
            ef=stat.ease_factor,
            reps=stat.repetitions,
            interval=stat.interval_days,
            dueAt=stat.due_at,
            last=stat.last_reviewed_at,
        )

    def to_stat(self) -> ReviewStat:
        return ReviewStat(
            ease_factor=self.ef,
            repetitions=self.reps,
            interval_days=self.interval,
            due_at=self.dueAt,
            last_reviewed_at=self.last,
        )
