"""Persistence layer for tasks assigned to users."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import case
from sqlalchemy.orm import Query, Session

from app.domain.entities import CLOSED_TASK_STATUSES, Task, TaskPriority, TaskStatus
from app.infrastructure.models import ProjectModel, TaskModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone

_PRIORITY_ORDER = case(
    {priority.value: priority.rank for priority in TaskPriority},
    value=TaskModel.priority,
    else_=0,
)


class TaskRepository:
    """Filtered task queries used to build digests."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, task: Task) -> Task:
        model = TaskModel(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=ensure_app_naive_datetime(task.due_date),
            project_id=task.project_id,
            assignee_id=task.assignee_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_open_due_between(
        self,
        assignee_id: str,
        start: datetime,
        end: datetime,
        *,
        organization_id: str | None = None,
        limit: int = 10,
    ) -> Sequence[Task]:
        query = (
            self._assigned(assignee_id, organization_id)
            .filter(TaskModel.status.notin_(sorted(CLOSED_TASK_STATUSES)))
            .filter(TaskModel.due_date >= ensure_app_naive_datetime(start))
            .filter(TaskModel.due_date < ensure_app_naive_datetime(end))
            .order_by(_PRIORITY_ORDER.desc(), TaskModel.due_date.asc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_open_due_before(
        self,
        assignee_id: str,
        before: datetime,
        *,
        organization_id: str | None = None,
        limit: int = 10,
    ) -> Sequence[Task]:
        query = (
            self._assigned(assignee_id, organization_id)
            .filter(TaskModel.status.notin_(sorted(CLOSED_TASK_STATUSES)))
            .filter(TaskModel.due_date < ensure_app_naive_datetime(before))
            .order_by(TaskModel.due_date.asc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_assigned(
        self,
        assignee_id: str,
        *,
        organization_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> int:
        query = self._assigned(assignee_id, organization_id)
        if status is not None:
            query = query.filter(TaskModel.status == status.value)
        return query.count()

    def _assigned(self, assignee_id: str, organization_id: str | None) -> Query:
        query = self.session.query(TaskModel).filter(TaskModel.assignee_id == assignee_id)
        if organization_id:
            query = query.join(ProjectModel, TaskModel.project_id == ProjectModel.id).filter(
                ProjectModel.organization_id == organization_id
            )
        return query

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            status=model.status,
            priority=model.priority,
            description=model.description,
            due_date=ensure_app_timezone(model.due_date),
            project_id=model.project_id,
            assignee_id=model.assignee_id,
            project_name=model.project.name if model.project else None,
        )


__all__ = ["TaskRepository"]
