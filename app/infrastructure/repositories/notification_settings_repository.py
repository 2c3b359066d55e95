"""Persistence helpers for per-user notification settings."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import NotificationSettings
from app.infrastructure.models import NotificationSettingsModel
from app.utils import ensure_app_timezone

UPDATABLE_FIELDS = (
    "deadline_notification",
    "assignee_change_notification",
    "mention_notification",
    "status_change_notification",
    "reminder_max_count",
    "email_notification",
    "push_notification",
)


class NotificationSettingsRepository:
    """Provide lookup, creation and update of :class:`NotificationSettings`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user_id(self, user_id: str) -> NotificationSettings | None:
        model = (
            self.session.query(NotificationSettingsModel)
            .filter(NotificationSettingsModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, settings: NotificationSettings) -> NotificationSettings:
        model = NotificationSettingsModel(user_id=settings.user_id)
        for name in UPDATABLE_FIELDS:
            setattr(model, name, getattr(settings, name))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user_id: str, updates: dict[str, Any]) -> NotificationSettings | None:
        model = (
            self.session.query(NotificationSettingsModel)
            .filter(NotificationSettingsModel.user_id == user_id)
            .first()
        )
        if model is None:
            return None
        for name in UPDATABLE_FIELDS:
            if name in updates:
                setattr(model, name, updates[name])
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationSettingsModel) -> NotificationSettings:
        return NotificationSettings(
            id=model.id,
            user_id=model.user_id,
            deadline_notification=model.deadline_notification,
            assignee_change_notification=model.assignee_change_notification,
            mention_notification=model.mention_notification,
            status_change_notification=model.status_change_notification,
            reminder_max_count=model.reminder_max_count,
            email_notification=model.email_notification,
            push_notification=model.push_notification,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationSettingsRepository"]
