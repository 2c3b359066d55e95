"""Endpoints to configure the external notification channels of projects."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    create_notification_channel as create_channel_uc,
    delete_notification_channel as delete_channel_uc,
    list_notification_channels as list_channels_uc,
    update_notification_channel as update_channel_uc,
)
from app.domain.entities import NotificationChannel, UserProfile
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user_profile
from app.interfaces.api.schemas import (
    NotificationChannelCreate,
    NotificationChannelRead,
    NotificationChannelUpdate,
)

router = APIRouter(prefix="/notification-channels", tags=["notification-channels"])


def _to_read_model(channel: NotificationChannel) -> NotificationChannelRead:
    return NotificationChannelRead.model_validate(channel)


def _not_found_or_bad_request(exc: ValueError) -> HTTPException:
    status_code = status.HTTP_400_BAD_REQUEST
    if str(exc).endswith("not found"):
        status_code = status.HTTP_404_NOT_FOUND
    return HTTPException(status_code=status_code, detail=str(exc))


@router.get("", response_model=list[NotificationChannelRead])
def list_notification_channels(
    project_id: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user_profile),
) -> list[NotificationChannelRead]:
    channels = list_channels_uc(
        db, organization_id=current_user.organization_id, project_id=project_id
    )
    return [_to_read_model(channel) for channel in channels]


@router.post("", response_model=NotificationChannelRead, status_code=status.HTTP_201_CREATED)
def create_notification_channel(
    channel_in: NotificationChannelCreate,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user_profile),
) -> NotificationChannelRead:
    try:
        channel = create_channel_uc(
            db,
            organization_id=current_user.organization_id,
            name=channel_in.name,
            type=channel_in.type,
            channel_id=channel_in.channel_id,
            project_id=channel_in.project_id,
            created_by_id=current_user.id,
            is_active=channel_in.is_active,
            config=channel_in.config,
        )
    except ValueError as exc:
        raise _not_found_or_bad_request(exc) from exc
    return _to_read_model(channel)


@router.patch("/{channel_id}", response_model=NotificationChannelRead)
def update_notification_channel(
    channel_id: str,
    channel_in: NotificationChannelUpdate,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user_profile),
) -> NotificationChannelRead:
    try:
        channel = update_channel_uc(
            db,
            channel_id=channel_id,
            organization_id=current_user.organization_id,
            updates=channel_in.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise _not_found_or_bad_request(exc) from exc
    return _to_read_model(channel)


@router.delete("/{channel_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification_channel(
    channel_id: str,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user_profile),
) -> Response:
    try:
        delete_channel_uc(
            db, channel_id=channel_id, organization_id=current_user.organization_id
        )
    except ValueError as exc:
        raise _not_found_or_bad_request(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
