"""SQLAlchemy model for external notification channel bindings."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_id


class NotificationChannelModel(Base):
    """Database representation of a project's external channel."""

    __tablename__ = "notification_channels"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)
    channel_id = Column(String(255), nullable=False)
    project_id = Column(
        String(36), ForeignKey("projects.id"), nullable=False, index=True
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_by_id = Column(String(36), nullable=True)
    config = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    project = relationship("ProjectModel", lazy="joined")


__all__ = ["NotificationChannelModel"]
