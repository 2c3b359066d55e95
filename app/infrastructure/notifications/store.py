"""Async store adapters over the synchronous SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from functools import partial
from typing import Any, Protocol, TypeVar

import anyio
from sqlalchemy.orm import Session

from app.domain.entities import InAppNotification, Task, TaskStatus, UserProfile
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import (
    InAppNotificationRepository,
    TaskRepository,
    UserProfileRepository,
)

T = TypeVar("T")


class NotificationStore(Protocol):
    """Persistence needed by the notification dispatcher."""

    async def create_in_app_notification(self, fields: dict[str, Any]) -> InAppNotification: ...

    async def get_unread_count(self, user_id: str) -> int: ...

    async def find_user_profiles_by_ids(
        self, ids: Sequence[str], organization_id: str | None = None
    ) -> list[UserProfile]: ...

    async def get_user_profile(self, user_id: str) -> UserProfile | None: ...


class DigestStore(Protocol):
    """Queries needed to assemble daily digests."""

    async def list_active_users(self) -> list[UserProfile]: ...

    async def list_tasks_due_between(
        self, user: UserProfile, start: datetime, end: datetime, limit: int
    ) -> list[Task]: ...

    async def list_overdue_tasks(
        self, user: UserProfile, before: datetime, limit: int
    ) -> list[Task]: ...

    async def list_unread_notifications(
        self, user_id: str, limit: int
    ) -> list[InAppNotification]: ...

    async def count_tasks(self, user: UserProfile, status: TaskStatus | None = None) -> int: ...

    async def get_user_profile(self, user_id: str) -> UserProfile | None: ...

    async def update_user_metadata(
        self, user_id: str, values: dict[str, Any]
    ) -> UserProfile: ...


class SqlAlchemyNotificationStore:
    """Run repository calls in worker threads, one session per call."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal) -> None:
        self._session_factory = session_factory

    async def _run(self, operation: Callable[[Session], T]) -> T:
        return await anyio.to_thread.run_sync(partial(self._in_session, operation))

    def _in_session(self, operation: Callable[[Session], T]) -> T:
        session = self._session_factory()
        try:
            return operation(session)
        finally:
            session.close()

    async def create_in_app_notification(self, fields: dict[str, Any]) -> InAppNotification:
        notification = InAppNotification(id=None, **fields)
        return await self._run(
            lambda session: InAppNotificationRepository(session).create(notification)
        )

    async def get_unread_count(self, user_id: str) -> int:
        return await self._run(
            lambda session: InAppNotificationRepository(session).count_unread(user_id)
        )

    async def find_user_profiles_by_ids(
        self, ids: Sequence[str], organization_id: str | None = None
    ) -> list[UserProfile]:
        if not ids:
            return []
        return await self._run(
            lambda session: list(
                UserProfileRepository(session).list_by_ids(
                    list(ids), organization_id=organization_id
                )
            )
        )

    async def get_user_profile(self, user_id: str) -> UserProfile | None:
        return await self._run(lambda session: UserProfileRepository(session).get(user_id))

    async def list_active_users(self) -> list[UserProfile]:
        return await self._run(
            lambda session: list(UserProfileRepository(session).list_active())
        )

    async def list_tasks_due_between(
        self, user: UserProfile, start: datetime, end: datetime, limit: int
    ) -> list[Task]:
        return await self._run(
            lambda session: list(
                TaskRepository(session).list_open_due_between(
                    user.id,
                    start,
                    end,
                    organization_id=user.organization_id,
                    limit=limit,
                )
            )
        )

    async def list_overdue_tasks(
        self, user: UserProfile, before: datetime, limit: int
    ) -> list[Task]:
        return await self._run(
            lambda session: list(
                TaskRepository(session).list_open_due_before(
                    user.id,
                    before,
                    organization_id=user.organization_id,
                    limit=limit,
                )
            )
        )

    async def list_unread_notifications(
        self, user_id: str, limit: int
    ) -> list[InAppNotification]:
        return await self._run(
            lambda session: list(
                InAppNotificationRepository(session).list_unread_for_user(user_id, limit=limit)
            )
        )

    async def count_tasks(self, user: UserProfile, status: TaskStatus | None = None) -> int:
        return await self._run(
            lambda session: TaskRepository(session).count_assigned(
                user.id, organization_id=user.organization_id, status=status
            )
        )

    async def update_user_metadata(
        self, user_id: str, values: dict[str, Any]
    ) -> UserProfile:
        return await self._run(
            lambda session: UserProfileRepository(session).update_metadata(user_id, values)
        )


__all__ = ["DigestStore", "NotificationStore", "SqlAlchemyNotificationStore"]
