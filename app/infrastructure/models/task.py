"""SQLAlchemy model for tasks."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base

from ._ids import new_id


class TaskModel(Base):
    """Database representation of a project task."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="todo", index=True)
    priority = Column(String(20), nullable=False, default="medium")
    due_date = Column(DateTime(), nullable=True, index=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=True, index=True)
    assignee_id = Column(
        String(36), ForeignKey("user_profiles.id"), nullable=True, index=True
    )

    project = relationship("ProjectModel", lazy="joined")


__all__ = ["TaskModel"]
