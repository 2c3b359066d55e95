"""Persistence layer for user profiles."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import UserProfile
from app.infrastructure.models import UserProfileModel
from app.utils import ensure_app_timezone


class UserProfileRepository:
    """Provide read and preference operations for :class:`UserProfile` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> UserProfile | None:
        model = self.session.get(UserProfileModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, profile: UserProfile) -> UserProfile:
        model = UserProfileModel(
            id=profile.id,
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            is_active=profile.is_active,
            organization_id=profile.organization_id,
            profile_metadata=dict(profile.metadata or {}),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_active(self) -> Sequence[UserProfile]:
        query = (
            self.session.query(UserProfileModel)
            .filter(UserProfileModel.is_active.is_(True))
            .order_by(UserProfileModel.created_at.asc(), UserProfileModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_ids(
        self, user_ids: Sequence[str], *, organization_id: str | None = None
    ) -> list[UserProfile]:
        if not user_ids:
            return []

        query = self.session.query(UserProfileModel).filter(
            UserProfileModel.id.in_(set(user_ids))
        )
        if organization_id:
            query = query.filter(UserProfileModel.organization_id == organization_id)
        found = {model.id: self._to_entity(model) for model in query.all()}
        # Preserve caller order; unknown ids are dropped.
        return [found[user_id] for user_id in dict.fromkeys(user_ids) if user_id in found]

    def update_metadata(self, user_id: str, values: dict[str, Any]) -> UserProfile:
        model = self.session.get(UserProfileModel, user_id)
        if model is None:
            raise ValueError("User not found")
        metadata = dict(model.profile_metadata or {})
        metadata.update(values)
        model.profile_metadata = metadata
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserProfileModel) -> UserProfile:
        return UserProfile(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            is_active=model.is_active,
            organization_id=model.organization_id,
            metadata=dict(model.profile_metadata or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserProfileRepository"]
