"""Aggregate application use cases."""

from .notifications import BackgroundNotificationPort, DigestService, NotificationDispatcher

__all__ = [
    "BackgroundNotificationPort",
    "DigestService",
    "NotificationDispatcher",
]
