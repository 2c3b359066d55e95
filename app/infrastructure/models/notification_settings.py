"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_id


class NotificationSettingsModel(Base):
    """Database representation of a user's notification settings."""

    __tablename__ = "notification_settings"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36), ForeignKey("user_profiles.id"), nullable=False, unique=True
    )
    deadline_notification = Column(Boolean, nullable=False, default=True)
    assignee_change_notification = Column(Boolean, nullable=False, default=True)
    mention_notification = Column(Boolean, nullable=False, default=True)
    status_change_notification = Column(Boolean, nullable=False, default=True)
    reminder_max_count = Column(Integer, nullable=False, default=3)
    email_notification = Column(Boolean, nullable=False, default=True)
    push_notification = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["NotificationSettingsModel"]
