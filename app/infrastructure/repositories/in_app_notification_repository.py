"""Persistence helpers for in-app notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import InAppNotification
from app.infrastructure.models import InAppNotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class InAppNotificationRepository:
    """Provide create, query and read-state operations for :class:`InAppNotification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: InAppNotification) -> InAppNotification:
        model = InAppNotificationModel(
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message or "",
            link_url=notification.link_url,
            task_id=notification.task_id,
            project_id=notification.project_id,
            notification_metadata=notification.metadata or None,
            is_read=notification.is_read,
            created_at=(
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            ),
        )
        if notification.id is not None:
            model.id = notification.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False,
    ) -> tuple[Sequence[InAppNotification], int]:
        """Return a page of notifications for ``user_id`` and the total matching count."""

        query = self.session.query(InAppNotificationModel).filter(
            InAppNotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(InAppNotificationModel.is_read.is_(False))
        total = query.count()
        page = (
            query.order_by(
                InAppNotificationModel.created_at.desc(), InAppNotificationModel.id.desc()
            )
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in page], total

    def list_unread_for_user(
        self, user_id: str, *, limit: int | None = 10
    ) -> Sequence[InAppNotification]:
        query = (
            self.session.query(InAppNotificationModel)
            .filter(InAppNotificationModel.user_id == user_id)
            .filter(InAppNotificationModel.is_read.is_(False))
            .order_by(
                InAppNotificationModel.created_at.desc(), InAppNotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(InAppNotificationModel)
            .filter(InAppNotificationModel.user_id == user_id)
            .filter(InAppNotificationModel.is_read.is_(False))
            .count()
        )

    def mark_as_read(self, notification_id: str, *, user_id: str) -> bool:
        updated = (
            self.session.query(InAppNotificationModel)
            .filter(
                InAppNotificationModel.id == notification_id,
                InAppNotificationModel.user_id == user_id,
            )
            .update({InAppNotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated > 0

    def mark_all_as_read(self, user_id: str) -> int:
        updated = (
            self.session.query(InAppNotificationModel)
            .filter(
                InAppNotificationModel.user_id == user_id,
                InAppNotificationModel.is_read.is_(False),
            )
            .update({InAppNotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: InAppNotificationModel) -> InAppNotification:
        return InAppNotification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message or "",
            link_url=model.link_url,
            task_id=model.task_id,
            project_id=model.project_id,
            metadata=dict(model.notification_metadata or {}),
            is_read=model.is_read,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["InAppNotificationRepository"]
