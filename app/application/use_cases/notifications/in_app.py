"""Use cases for reading and acknowledging in-app notifications."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import InAppNotification
from app.infrastructure.repositories import InAppNotificationRepository

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class NotificationPage:
    notifications: Sequence[InAppNotification]
    total: int
    unread_count: int


def list_notifications(
    session: Session,
    *,
    user_id: str,
    limit: int = 20,
    offset: int = 0,
    unread_only: bool = False,
) -> NotificationPage:
    """Return a page of the user's notifications, newest first."""

    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    if offset < 0:
        raise ValueError("offset must not be negative")

    repository = InAppNotificationRepository(session)
    notifications, total = repository.list_for_user(
        user_id, limit=limit, offset=offset, unread_only=unread_only
    )
    return NotificationPage(
        notifications=notifications,
        total=total,
        unread_count=repository.count_unread(user_id),
    )


def get_unread_count(session: Session, *, user_id: str) -> int:
    return InAppNotificationRepository(session).count_unread(user_id)


def mark_notification_as_read(session: Session, *, user_id: str, notification_id: str) -> bool:
    """Mark one notification as read; only the owner can do so."""

    return InAppNotificationRepository(session).mark_as_read(notification_id, user_id=user_id)


def mark_all_notifications_as_read(session: Session, *, user_id: str) -> int:
    return InAppNotificationRepository(session).mark_all_as_read(user_id)


__all__ = [
    "MAX_PAGE_SIZE",
    "NotificationPage",
    "get_unread_count",
    "list_notifications",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
]
