"""Realtime notification helpers for the infrastructure layer."""

from .gateway import (
    NOTIFICATION_EVENT,
    UNREAD_COUNT_EVENT,
    NotificationGateway,
    extract_token,
    serialize_notification,
)
from .publisher import BackgroundTasks, RealtimePublisher
from .registry import ConnectionRegistry, InMemoryConnectionRegistry, PushConnection
from .store import DigestStore, NotificationStore, SqlAlchemyNotificationStore

__all__ = [
    "BackgroundTasks",
    "ConnectionRegistry",
    "DigestStore",
    "InMemoryConnectionRegistry",
    "NOTIFICATION_EVENT",
    "NotificationGateway",
    "NotificationStore",
    "PushConnection",
    "RealtimePublisher",
    "SqlAlchemyNotificationStore",
    "UNREAD_COUNT_EVENT",
    "extract_token",
    "serialize_notification",
]
