"""Tests for the app-timezone helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from app.utils import (
    app_day_bounds,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    resolve_timezone,
)

TOKYO = ZoneInfo("Asia/Tokyo")


def test_resolve_timezone_accepts_names_and_fixed_offsets() -> None:
    assert resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")
    assert resolve_timezone("UTC+9") == timezone(timedelta(hours=9))
    assert resolve_timezone("GMT-03:30") == timezone(-timedelta(hours=3, minutes=30))
    assert resolve_timezone("Mars/Olympus") == TOKYO
    assert resolve_timezone("") == TOKYO


def test_naive_values_are_read_as_local_time() -> None:
    stored = datetime(2026, 5, 12, 9, 0)

    assert ensure_app_timezone(stored) == datetime(2026, 5, 12, 9, 0, tzinfo=TOKYO)
    assert ensure_app_naive_datetime(
        datetime(2026, 5, 12, 0, 0, tzinfo=timezone.utc)
    ) == datetime(2026, 5, 12, 9, 0)
    assert ensure_app_timezone(None) is None


def test_day_bounds_cover_the_local_calendar_day() -> None:
    start, end = app_day_bounds(date(2026, 5, 12))

    assert start == datetime(2026, 5, 12, tzinfo=TOKYO)
    assert end - start == timedelta(days=1)
