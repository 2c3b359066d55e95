"""Ephemeral description of a notification to deliver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .project import Project
    from .reminder import Reminder
    from .task import Task
    from .user_profile import UserProfile


class Channel(str, Enum):
    """Delivery medium requested for a notification."""

    EMAIL = "email"
    IN_APP = "in_app"
    SLACK = "slack"
    TEAMS = "teams"
    WEBHOOK = "webhook"


@dataclass
class NotificationIntent:
    """What to send, to whom and through which channel. Never persisted."""

    channel: Channel | str
    recipients: list["UserProfile"] = field(default_factory=list)
    reminder: "Reminder | None" = None
    task: "Task | None" = None
    project: "Project | None" = None
    escalation_reason: str | None = None
    escalation_level: str | None = None
    additional_info: str | None = None


__all__ = ["Channel", "NotificationIntent"]
