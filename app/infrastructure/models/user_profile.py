"""SQLAlchemy model for the user profile table."""

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_id


class UserProfileModel(Base):
    """Database representation of a platform user."""

    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    organization_id = Column(String(36), nullable=True, index=True)
    # ``metadata`` is reserved by SQLAlchemy's declarative API.
    profile_metadata = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserProfileModel"]
