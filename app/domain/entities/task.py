"""Domain entity representing a project task."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    WAITING = "waiting"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.CRITICAL: 4,
}

CLOSED_TASK_STATUSES: frozenset[str] = frozenset(
    {TaskStatus.COMPLETED.value, TaskStatus.CANCELLED.value}
)


@dataclass
class Task:
    """Unit of work assigned to a user inside a project."""

    id: str
    title: str
    status: str = TaskStatus.TODO.value
    priority: str = TaskPriority.MEDIUM.value
    description: str | None = None
    due_date: datetime | None = None
    project_id: str | None = None
    assignee_id: str | None = None
    project_name: str | None = None


__all__ = [
    "CLOSED_TASK_STATUSES",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
