"""Domain entity holding a user's notification preferences."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_REMINDER_MAX_COUNT = 3
REMINDER_MAX_COUNT_RANGE = (1, 10)


@dataclass
class NotificationSettings:
    """Per-user toggles for notification kinds and delivery channels.

    Digest preferences are kept on the user profile and are not part of
    these settings.
    """

    id: str | None
    user_id: str
    deadline_notification: bool = True
    assignee_change_notification: bool = True
    mention_notification: bool = True
    status_change_notification: bool = True
    reminder_max_count: int = DEFAULT_REMINDER_MAX_COUNT
    email_notification: bool = True
    push_notification: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "DEFAULT_REMINDER_MAX_COUNT",
    "NotificationSettings",
    "REMINDER_MAX_COUNT_RANGE",
]
