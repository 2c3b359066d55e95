"""Time helpers anchored to the organisation's local timezone.

Due dates, digest windows and notification timestamps are all compared
against the local calendar day, so every value is normalized to
``APP_TIMEZONE`` before it is used.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

DEFAULT_TIMEZONE: Final[str] = "Asia/Tokyo"
# Fixed offsets such as ``UTC+9`` or ``GMT-03:30``.
_FIXED_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _parse_fixed_offset(value: str) -> tzinfo | None:
    match = _FIXED_OFFSET.match(value)
    if match is None:
        return None
    offset = timedelta(hours=int(match["hours"]), minutes=int(match["minutes"] or 0))
    return timezone(-offset if match["sign"] == "-" else offset)


def resolve_timezone(tz_name: str | None) -> tzinfo:
    """Turn an IANA name or fixed offset into a tzinfo; unknown names map to Tokyo."""

    tz_name = (tz_name or "").strip() or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return _parse_fixed_offset(tz_name) or ZoneInfo(DEFAULT_TIMEZONE)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    return resolve_timezone(get_settings().app_timezone)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the app timezone.

    Naive values come from the database and are already local time.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Local wall-clock time without tzinfo, the form stored in ``DateTime()`` columns.

    SQLite drops offsets on write, so columns hold local time and are
    re-localized by :func:`ensure_app_timezone` when read back.
    """

    local = ensure_app_timezone(value)
    return local.replace(tzinfo=None) if local is not None else None


def now_in_app_naive_datetime() -> datetime:
    """Column default for creation and update timestamps."""

    return datetime.now(tz=get_app_timezone()).replace(tzinfo=None)


def app_day_bounds(day: date | None = None) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` of ``day`` (today by default) in the app timezone."""

    if day is None:
        day = now_in_app_timezone().date()
    start = datetime.combine(day, time.min, tzinfo=get_app_timezone())
    return start, start + timedelta(days=1)
