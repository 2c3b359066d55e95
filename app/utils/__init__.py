"""Utility helpers for reusable functionality."""

from .datetime import (
    app_day_bounds,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    resolve_timezone,
)

__all__ = [
    "app_day_bounds",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "resolve_timezone",
]
