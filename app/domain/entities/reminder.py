"""Domain entity representing a scheduled reminder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .notification_intent import Channel
from .user_profile import UserProfile


@dataclass
class Reminder:
    """A reminder that producers hand to the notification dispatcher."""

    id: str
    title: str | None
    message: str | None = None
    channel: Channel = Channel.IN_APP
    type: str = "custom"
    status: str = "pending"
    user_id: str | None = None
    user: UserProfile | None = None
    task_id: str | None = None
    project_id: str | None = None
    scheduled_at: datetime | None = None
    sent_at: datetime | None = None
    is_read: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)


__all__ = ["Reminder"]
