"""Endpoints for the authenticated user's notification settings."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    get_notification_settings as get_settings_uc,
    update_notification_settings as update_settings_uc,
)
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user_id
from app.interfaces.api.schemas import NotificationSettingsRead, NotificationSettingsUpdate

router = APIRouter(prefix="/notification-settings", tags=["notification-settings"])


def _translate_error(exc: ValueError) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    if str(exc).endswith("not found"):
        status_code = status.HTTP_404_NOT_FOUND
    return HTTPException(status_code=status_code, detail=str(exc))


@router.get("", response_model=NotificationSettingsRead)
def get_notification_settings(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> NotificationSettingsRead:
    """Return the caller's settings, creating the defaults on first access."""

    try:
        settings = get_settings_uc(db, user_id=user_id)
    except ValueError as exc:
        raise _translate_error(exc) from exc
    return NotificationSettingsRead.model_validate(settings)


@router.api_route("", methods=["PUT", "PATCH"], response_model=NotificationSettingsRead)
def update_notification_settings(
    settings_in: NotificationSettingsUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> NotificationSettingsRead:
    try:
        settings = update_settings_uc(
            db, user_id=user_id, updates=settings_in.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise _translate_error(exc) from exc
    return NotificationSettingsRead.model_validate(settings)
