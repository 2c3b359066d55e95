"""SQLAlchemy model for projects."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base

from ._ids import new_id


class ProjectModel(Base):
    """Database representation of a collaboration project."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), nullable=False, default="planning")
    priority = Column(String(20), nullable=False, default="medium")
    end_date = Column(DateTime(), nullable=True)
    progress = Column(Integer, nullable=False, default=0)
    organization_id = Column(String(36), nullable=True, index=True)


__all__ = ["ProjectModel"]
