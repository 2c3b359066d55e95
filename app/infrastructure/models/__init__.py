"""ORM models used by the application infrastructure."""

from .in_app_notification import InAppNotificationModel
from .notification_channel import NotificationChannelModel
from .notification_settings import NotificationSettingsModel
from .project import ProjectModel
from .task import TaskModel
from .user_profile import UserProfileModel

__all__ = [
    "InAppNotificationModel",
    "NotificationChannelModel",
    "NotificationSettingsModel",
    "ProjectModel",
    "TaskModel",
    "UserProfileModel",
]
