from .digest import DigestSettingsRead, DigestSettingsUpdate
from .notification import (
    MarkAllReadResponse,
    MarkReadResponse,
    NotificationListResponse,
    NotificationRead,
    UnreadCountResponse,
)
from .notification_channel import (
    NotificationChannelCreate,
    NotificationChannelRead,
    NotificationChannelUpdate,
)
from .notification_settings import NotificationSettingsRead, NotificationSettingsUpdate

__all__ = [
    "DigestSettingsRead",
    "DigestSettingsUpdate",
    "MarkAllReadResponse",
    "MarkReadResponse",
    "NotificationChannelCreate",
    "NotificationChannelRead",
    "NotificationChannelUpdate",
    "NotificationListResponse",
    "NotificationSettingsRead",
    "NotificationSettingsUpdate",
    "NotificationRead",
    "UnreadCountResponse",
]
