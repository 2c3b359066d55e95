"""Domain entity representing a persisted in-app notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Kind of in-app notification; drives how the client renders it."""

    DEADLINE = "deadline"
    SYSTEM = "system"
    MENTION = "mention"
    ASSIGNMENT = "assignment"
    STATUS_CHANGE = "status_change"


@dataclass
class InAppNotification:
    """Notification shown to one user inside the web client."""

    id: str | None
    user_id: str
    type: str
    title: str
    message: str = ""
    link_url: str | None = None
    task_id: str | None = None
    project_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None


__all__ = ["InAppNotification", "NotificationKind"]
