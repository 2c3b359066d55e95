"""Endpoints and websocket handler for in-app notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    MAX_PAGE_SIZE,
    get_unread_count as get_unread_count_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from app.container import NotificationServices
from app.domain.entities import InAppNotification
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user_id, get_notification_services
from app.interfaces.api.schemas import (
    DigestSettingsRead,
    DigestSettingsUpdate,
    MarkAllReadResponse,
    MarkReadResponse,
    NotificationListResponse,
    NotificationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: InAppNotification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or "",
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        link_url=notification.link_url,
        task_id=notification.task_id,
        project_id=notification.project_id,
        metadata=notification.metadata or {},
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> NotificationListResponse:
    """Return a page of the authenticated user's notifications, newest first."""

    try:
        page = list_notifications_uc(
            db, user_id=user_id, limit=limit, offset=offset, unread_only=unread_only
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in page.notifications],
        total=page.total,
        unread_count=page.unread_count,
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> UnreadCountResponse:
    return UnreadCountResponse(count=get_unread_count_uc(db, user_id=user_id))


@router.post("/read-all", response_model=MarkAllReadResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    services: NotificationServices = Depends(get_notification_services),
) -> MarkAllReadResponse:
    count = mark_all_notifications_as_read(db, user_id=user_id)
    services.publisher.publish_unread_count(user_id, 0)
    return MarkAllReadResponse(success=True, count=count)


@router.post("/{notification_id}/read", response_model=MarkReadResponse)
def mark_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    services: NotificationServices = Depends(get_notification_services),
) -> MarkReadResponse:
    """Mark one of the caller's notifications as read and push the new counter."""

    success = mark_notification_as_read(db, user_id=user_id, notification_id=notification_id)
    if success:
        services.publisher.publish_unread_count(
            user_id, get_unread_count_uc(db, user_id=user_id)
        )
    return MarkReadResponse(success=success)


@router.get("/digest-settings", response_model=DigestSettingsRead)
async def get_digest_settings(
    user_id: str = Depends(get_current_user_id),
    services: NotificationServices = Depends(get_notification_services),
) -> DigestSettingsRead:
    try:
        digest_settings = await services.digest_service.get_digest_settings(user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return DigestSettingsRead(enabled=digest_settings.enabled, time=digest_settings.time)


@router.put("/digest-settings", response_model=DigestSettingsRead)
async def update_digest_settings(
    settings_in: DigestSettingsUpdate,
    user_id: str = Depends(get_current_user_id),
    services: NotificationServices = Depends(get_notification_services),
) -> DigestSettingsRead:
    try:
        digest_settings = await services.digest_service.update_digest_settings(
            user_id, settings_in.enabled, settings_in.time
        )
    except ValueError as exc:
        status_code = status.HTTP_400_BAD_REQUEST
        if str(exc) == "User not found":
            status_code = status.HTTP_404_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc
    return DigestSettingsRead(enabled=digest_settings.enabled, time=digest_settings.time)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    services: NotificationServices = websocket.app.state.notifications
    await services.gateway.serve(websocket)
