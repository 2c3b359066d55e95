"""Repository implementations for infrastructure layer."""

from .in_app_notification_repository import InAppNotificationRepository
from .notification_channel_repository import NotificationChannelRepository
from .notification_settings_repository import NotificationSettingsRepository
from .project_repository import ProjectRepository
from .task_repository import TaskRepository
from .user_profile_repository import UserProfileRepository

__all__ = [
    "InAppNotificationRepository",
    "NotificationChannelRepository",
    "NotificationSettingsRepository",
    "ProjectRepository",
    "TaskRepository",
    "UserProfileRepository",
]
