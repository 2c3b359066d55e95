"""Daily digest of due tasks, overdue tasks and unread notifications."""

from __future__ import annotations

import asyncio
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime

from app.domain.entities import (
    DigestNotification,
    DigestRunResult,
    DigestSnapshot,
    DigestStats,
    DigestTask,
    InAppNotification,
    Task,
    TaskStatus,
    UserProfile,
)
from app.infrastructure.email import EmailService
from app.infrastructure.notifications import DigestStore
from app.utils import app_day_bounds, ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DIGEST_SECTION_LIMIT = 10

_SENT = "sent"
_SKIPPED = "skipped"
_FAILED = "failed"

_DIGEST_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True)
class DigestSettings:
    enabled: bool
    time: str


def _to_digest_task(task: Task, today_start: datetime | None = None) -> DigestTask:
    days_overdue = None
    due_date = ensure_app_timezone(task.due_date)
    if today_start is not None and due_date is not None:
        # Whole days between the due time and midnight of today.
        days_overdue = (today_start - due_date).days
    return DigestTask(
        id=task.id,
        title=task.title,
        priority=task.priority,
        due_date=due_date,
        project_name=task.project_name,
        days_overdue=days_overdue,
    )


def _completion_rate(completed: int, total: int) -> int:
    """Percentage of completed tasks, halves rounded up."""

    if not total:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def _to_digest_notification(notification: InAppNotification) -> DigestNotification:
    return DigestNotification(
        id=notification.id or "",
        type=notification.type,
        title=notification.title,
        message=notification.message,
        created_at=notification.created_at,
    )


class DigestService:
    """Build and email one digest per eligible user."""

    def __init__(
        self,
        store: DigestStore,
        email_service: EmailService,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self._store = store
        self._email_service = email_service
        self._batch_size = batch_size

    async def send_daily_digest(self) -> DigestRunResult:
        """Email today's digest to every active user who has not opted out."""

        logger.info("Starting daily digest")
        users = await self._store.list_active_users()
        eligible = [user for user in users if user.digest_enabled]
        sent = 0
        skipped = len(users) - len(eligible)
        failed = 0

        for start in range(0, len(eligible), self._batch_size):
            batch = eligible[start : start + self._batch_size]
            outcomes = await asyncio.gather(*(self._send_user_digest(user) for user in batch))
            sent += outcomes.count(_SENT)
            skipped += outcomes.count(_SKIPPED)
            failed += outcomes.count(_FAILED)

        logger.info("Daily digest complete: %d sent, %d skipped", sent, skipped)
        if failed:
            logger.warning("Daily digest failed for %d users", failed)
        return DigestRunResult(sent=sent, skipped=skipped, failed=failed)

    async def _send_user_digest(self, user: UserProfile) -> str:
        try:
            snapshot = await self.generate_user_digest(user)
            if snapshot.is_empty():
                return _SKIPPED
            if await self._email_service.send_digest_email(user, snapshot):
                return _SENT
            logger.error("Digest email to user %s was not delivered", user.id)
            return _FAILED
        except Exception:
            logger.exception("Failed to send digest to user %s", user.id)
            return _FAILED

    async def generate_user_digest(
        self, user: UserProfile, now: datetime | None = None
    ) -> DigestSnapshot:
        """Collect the pending work of ``user`` as of ``now``."""

        now = ensure_app_timezone(now) if now else now_in_app_timezone()
        today_start, tomorrow_start = app_day_bounds(now.date())

        today_tasks, overdue_tasks, unread, total, completed = await asyncio.gather(
            self._store.list_tasks_due_between(
                user, today_start, tomorrow_start, DIGEST_SECTION_LIMIT
            ),
            self._store.list_overdue_tasks(user, today_start, DIGEST_SECTION_LIMIT),
            self._store.list_unread_notifications(user.id, DIGEST_SECTION_LIMIT),
            self._store.count_tasks(user),
            self._store.count_tasks(user, TaskStatus.COMPLETED),
        )

        return DigestSnapshot(
            today_tasks=[_to_digest_task(task) for task in today_tasks],
            overdue_tasks=[_to_digest_task(task, today_start) for task in overdue_tasks],
            unread_notifications=[_to_digest_notification(item) for item in unread],
            stats=DigestStats(
                total_tasks=total,
                completed_tasks=completed,
                completion_rate=_completion_rate(completed, total),
            ),
        )

    async def get_digest_settings(self, user_id: str) -> DigestSettings:
        user = await self._store.get_user_profile(user_id)
        if user is None:
            raise ValueError("User not found")
        return DigestSettings(enabled=user.digest_enabled, time=user.digest_time)

    async def update_digest_settings(
        self, user_id: str, enabled: bool, time: str | None = None
    ) -> DigestSettings:
        """Store the digest preferences in the user's metadata."""

        values: dict[str, object] = {"digestEnabled": enabled}
        if time is not None:
            if not _DIGEST_TIME_PATTERN.match(time):
                raise ValueError("Digest time must use the HH:MM format")
            values["digestTime"] = time
        user = await self._store.update_user_metadata(user_id, values)
        return DigestSettings(enabled=user.digest_enabled, time=user.digest_time)


__all__ = ["DEFAULT_BATCH_SIZE", "DigestService", "DigestSettings"]
