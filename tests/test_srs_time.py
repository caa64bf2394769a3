"""Unit tests for SRS time helpers."""

from datetime import datetime, timezone

from vocab_drill.srs.time import DAY_MS, add_days_ms, datetime_to_ms, ms_to_datetime, ms_to_iso_z, utc_now_ms


def test_datetime_to_ms_epoch_and_known_instant():
    assert datetime_to_ms(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0
    assert datetime_to_ms(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1_704_067_200_000


def test_naive_datetime_is_utc():
    assert datetime_to_ms(datetime(2024, 1, 1)) == 1_704_067_200_000


def test_ms_to_datetime_is_utc_aware():
    dt = ms_to_datetime(1_704_067_200_500)
    assert dt.tzinfo is not None
    assert dt == datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)


def test_ms_to_iso_z_second_precision():
    assert ms_to_iso_z(1_704_067_200_999) == "2024-01-01T00:00:00Z"


def test_add_days_ms_rollover():
    start = datetime_to_ms(datetime(2025, 12, 30, tzinfo=timezone.utc))
    assert ms_to_iso_z(add_days_ms(start, 4)) == "2026-01-03T00:00:00Z"
    assert add_days_ms(start, 1) - start == DAY_MS


def test_utc_now_ms_is_recent():
    assert utc_now_ms() > 1_704_067_200_000
