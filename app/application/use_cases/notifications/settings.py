"""Use cases for reading and updating a user's notification settings."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import REMINDER_MAX_COUNT_RANGE, NotificationSettings
from app.infrastructure.repositories import (
    NotificationSettingsRepository,
    UserProfileRepository,
)

logger = logging.getLogger(__name__)


def get_notification_settings(session: Session, *, user_id: str) -> NotificationSettings:
    """Return the settings of ``user_id``, creating the defaults on first read."""

    repository = NotificationSettingsRepository(session)
    settings = repository.get_by_user_id(user_id)
    if settings is not None:
        return settings

    if UserProfileRepository(session).get(user_id) is None:
        raise ValueError("User not found")
    settings = repository.create(NotificationSettings(id=None, user_id=user_id))
    logger.info("Created default notification settings for user %s", user_id)
    return settings


def update_notification_settings(
    session: Session, *, user_id: str, updates: dict[str, Any]
) -> NotificationSettings:
    """Apply the provided fields; omitted fields keep their current value."""

    reminder_max_count = updates.get("reminder_max_count")
    if reminder_max_count is not None:
        low, high = REMINDER_MAX_COUNT_RANGE
        if not low <= reminder_max_count <= high:
            raise ValueError(f"reminder_max_count must be between {low} and {high}")

    get_notification_settings(session, user_id=user_id)
    changes = {name: value for name, value in updates.items() if value is not None}
    updated = NotificationSettingsRepository(session).update(user_id, changes)
    if updated is None:
        raise ValueError("Notification settings not found")
    logger.info("Updated notification settings for user %s", user_id)
    return updated


__all__ = ["get_notification_settings", "update_notification_settings"]
