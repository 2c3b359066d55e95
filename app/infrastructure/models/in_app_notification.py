"""SQLAlchemy model for persisted in-app notifications."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_id


class InAppNotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "in_app_notifications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36), ForeignKey("user_profiles.id"), nullable=False, index=True
    )
    type = Column(String(30), nullable=False, default="system")
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False, default="")
    link_url = Column(String(500), nullable=True)
    task_id = Column(String(36), nullable=True)
    project_id = Column(String(36), nullable=True)
    notification_metadata = Column("metadata", JSON, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["InAppNotificationModel"]
