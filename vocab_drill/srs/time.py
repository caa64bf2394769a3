"""UTC time helpers for SRS scheduling.

Review instants are stored as integer milliseconds since the Unix epoch.
ISO strings produced by this module are UTC and end with 'Z', with second precision:
YYYY-MM-DDTHH:MM:SSZ
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

DAY_MS = 24 * 60 * 60 * 1000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def utc_now_ms() -> int:
    """Return current time as integer milliseconds since the epoch."""
    return datetime_to_ms(utc_now())


def datetime_to_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt.astimezone(timezone.utc) - _EPOCH
    return delta // timedelta(milliseconds=1)


def ms_to_datetime(ms: int) -> datetime:
    """Convert epoch milliseconds to a timezone-aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=ms)


def ms_to_iso_z(ms: int) -> str:
    """Format epoch milliseconds as UTC ISO string with second precision and trailing 'Z'."""
    dt = ms_to_datetime(ms).replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


def add_days_ms(ms: int, days: int) -> int:
    return ms + days * DAY_MS
