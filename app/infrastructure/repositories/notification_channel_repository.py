"""Persistence helpers for external notification channel bindings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import NotificationChannel
from app.infrastructure.models import NotificationChannelModel, ProjectModel
from app.utils import ensure_app_timezone

_UPDATABLE_FIELDS = ("name", "channel_id", "is_active", "config")


class NotificationChannelRepository:
    """Provide CRUD operations for :class:`NotificationChannel` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, channel_id: str) -> NotificationChannel | None:
        model = self.session.get(NotificationChannelModel, channel_id)
        return self._to_entity(model) if model else None

    def list(
        self,
        *,
        project_id: str | None = None,
        channel_type: str | None = None,
        organization_id: str | None = None,
        active_only: bool = False,
    ) -> Sequence[NotificationChannel]:
        query = self.session.query(NotificationChannelModel)
        if project_id:
            query = query.filter(NotificationChannelModel.project_id == project_id)
        if channel_type:
            query = query.filter(NotificationChannelModel.type == channel_type)
        if active_only:
            query = query.filter(NotificationChannelModel.is_active.is_(True))
        if organization_id:
            query = query.join(
                ProjectModel, NotificationChannelModel.project_id == ProjectModel.id
            ).filter(ProjectModel.organization_id == organization_id)
        query = query.order_by(NotificationChannelModel.created_at.asc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, channel: NotificationChannel) -> NotificationChannel:
        model = NotificationChannelModel(
            name=channel.name,
            type=channel.type,
            channel_id=channel.channel_id,
            project_id=channel.project_id,
            is_active=channel.is_active,
            created_by_id=channel.created_by_id,
            config=channel.config or None,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, channel_id: str, updates: dict[str, Any]) -> NotificationChannel | None:
        model = self.session.get(NotificationChannelModel, channel_id)
        if model is None:
            return None
        for name in _UPDATABLE_FIELDS:
            if name in updates:
                setattr(model, name, updates[name])
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, channel_id: str) -> bool:
        deleted = (
            self.session.query(NotificationChannelModel)
            .filter(NotificationChannelModel.id == channel_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted > 0

    @staticmethod
    def _to_entity(model: NotificationChannelModel) -> NotificationChannel:
        return NotificationChannel(
            id=model.id,
            name=model.name,
            type=model.type,
            channel_id=model.channel_id,
            project_id=model.project_id,
            is_active=model.is_active,
            created_by_id=model.created_by_id,
            config=dict(model.config or {}),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationChannelRepository"]
