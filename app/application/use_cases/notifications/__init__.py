"""Notification dispatch, digest and in-app use cases."""

from .channels import (
    EXTERNAL_CHANNEL_TYPES,
    create_notification_channel,
    delete_notification_channel,
    list_notification_channels,
    update_notification_channel,
)
from .content import CONTENT_RULES, InAppContent, build_in_app_content
from .digest import DEFAULT_BATCH_SIZE, DigestService, DigestSettings
from .dispatcher import CHANNEL_ROUTES, NotificationDispatcher
from .in_app import (
    MAX_PAGE_SIZE,
    NotificationPage,
    get_unread_count,
    list_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from .port import BackgroundNotificationPort, NotificationPort
from .settings import get_notification_settings, update_notification_settings

__all__ = [
    "BackgroundNotificationPort",
    "CHANNEL_ROUTES",
    "CONTENT_RULES",
    "DEFAULT_BATCH_SIZE",
    "DigestService",
    "DigestSettings",
    "EXTERNAL_CHANNEL_TYPES",
    "InAppContent",
    "MAX_PAGE_SIZE",
    "NotificationDispatcher",
    "NotificationPage",
    "NotificationPort",
    "build_in_app_content",
    "create_notification_channel",
    "delete_notification_channel",
    "get_notification_settings",
    "get_unread_count",
    "list_notification_channels",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "update_notification_channel",
    "update_notification_settings",
]
