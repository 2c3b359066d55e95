"""Value objects describing a user's daily digest."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DigestTask:
    id: str
    title: str
    priority: str
    due_date: datetime | None
    project_name: str | None = None
    days_overdue: int | None = None


@dataclass(frozen=True)
class DigestNotification:
    id: str
    type: str
    title: str
    message: str
    created_at: datetime | None


@dataclass(frozen=True)
class DigestStats:
    total_tasks: int
    completed_tasks: int
    completion_rate: int


@dataclass
class DigestSnapshot:
    """Pending work of one user, computed at send time."""

    today_tasks: list[DigestTask] = field(default_factory=list)
    overdue_tasks: list[DigestTask] = field(default_factory=list)
    unread_notifications: list[DigestNotification] = field(default_factory=list)
    stats: DigestStats = field(default_factory=lambda: DigestStats(0, 0, 0))

    def is_empty(self) -> bool:
        return not (
            self.today_tasks or self.overdue_tasks or self.unread_notifications
        )


@dataclass(frozen=True)
class DigestRunResult:
    """Totals of one digest run."""

    sent: int
    skipped: int
    failed: int = 0


__all__ = [
    "DigestNotification",
    "DigestRunResult",
    "DigestSnapshot",
    "DigestStats",
    "DigestTask",
]
