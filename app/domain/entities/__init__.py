"""Domain entities exposed by the application."""

from .digest import (
    DigestNotification,
    DigestRunResult,
    DigestSnapshot,
    DigestStats,
    DigestTask,
)
from .in_app_notification import InAppNotification, NotificationKind
from .notification_channel import NotificationChannel
from .notification_intent import Channel, NotificationIntent
from .notification_settings import (
    DEFAULT_REMINDER_MAX_COUNT,
    REMINDER_MAX_COUNT_RANGE,
    NotificationSettings,
)
from .project import Project
from .reminder import Reminder
from .task import CLOSED_TASK_STATUSES, Task, TaskPriority, TaskStatus
from .user_profile import DEFAULT_DIGEST_TIME, UserProfile

__all__ = [
    "CLOSED_TASK_STATUSES",
    "Channel",
    "DEFAULT_DIGEST_TIME",
    "DEFAULT_REMINDER_MAX_COUNT",
    "DigestNotification",
    "DigestRunResult",
    "DigestSnapshot",
    "DigestStats",
    "DigestTask",
    "InAppNotification",
    "NotificationChannel",
    "NotificationIntent",
    "NotificationKind",
    "NotificationSettings",
    "Project",
    "REMINDER_MAX_COUNT_RANGE",
    "Reminder",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "UserProfile",
]
