"""Persistence layer for projects."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Project
from app.infrastructure.models import ProjectModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class ProjectRepository:
    """Read access to :class:`Project` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, project_id: str) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def create(self, project: Project) -> Project:
        model = ProjectModel(
            id=project.id,
            name=project.name,
            description=project.description,
            status=project.status,
            priority=project.priority,
            end_date=ensure_app_naive_datetime(project.end_date),
            progress=project.progress,
            organization_id=project.organization_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            description=model.description,
            status=model.status,
            priority=model.priority,
            end_date=ensure_app_timezone(model.end_date),
            progress=model.progress,
            organization_id=model.organization_id,
        )


__all__ = ["ProjectRepository"]
