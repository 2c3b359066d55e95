"""Use cases for configuring external notification channels of a project."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Channel, NotificationChannel
from app.infrastructure.repositories import NotificationChannelRepository, ProjectRepository

EXTERNAL_CHANNEL_TYPES = frozenset(
    {Channel.SLACK.value, Channel.TEAMS.value, Channel.WEBHOOK.value}
)


def _ensure_project_in_organization(
    session: Session, project_id: str, organization_id: str | None
) -> None:
    project = ProjectRepository(session).get(project_id)
    if project is None:
        raise ValueError("Project not found")
    if not organization_id or project.organization_id != organization_id:
        raise ValueError("Project not found")


def _get_scoped_channel(
    session: Session, channel_id: str, organization_id: str | None
) -> NotificationChannel:
    channel = NotificationChannelRepository(session).get(channel_id)
    if channel is None:
        raise ValueError("Notification channel not found")
    if not organization_id:
        raise ValueError("Notification channel not found")
    project = ProjectRepository(session).get(channel.project_id)
    if project is None or project.organization_id != organization_id:
        raise ValueError("Notification channel not found")
    return channel


def list_notification_channels(
    session: Session,
    *,
    organization_id: str | None,
    project_id: str | None = None,
) -> Sequence[NotificationChannel]:
    """Return channels visible to the caller's organization."""

    # Callers outside any organization see no channels.
    if not organization_id:
        return []
    return NotificationChannelRepository(session).list(
        project_id=project_id, organization_id=organization_id
    )


def create_notification_channel(
    session: Session,
    *,
    organization_id: str | None,
    name: str,
    type: str,
    channel_id: str,
    project_id: str,
    created_by_id: str | None = None,
    is_active: bool = True,
    config: dict[str, Any] | None = None,
) -> NotificationChannel:
    if type not in EXTERNAL_CHANNEL_TYPES:
        raise ValueError(f"Unsupported channel type: {type}")
    _ensure_project_in_organization(session, project_id, organization_id)

    channel = NotificationChannel(
        id=None,
        name=name,
        type=type,
        channel_id=channel_id,
        project_id=project_id,
        is_active=is_active,
        created_by_id=created_by_id,
        config=config or {},
    )
    return NotificationChannelRepository(session).create(channel)


def update_notification_channel(
    session: Session,
    *,
    channel_id: str,
    organization_id: str | None,
    updates: dict[str, Any],
) -> NotificationChannel:
    _get_scoped_channel(session, channel_id, organization_id)
    updated = NotificationChannelRepository(session).update(channel_id, updates)
    if updated is None:
        raise ValueError("Notification channel not found")
    return updated


def delete_notification_channel(
    session: Session, *, channel_id: str, organization_id: str | None
) -> None:
    _get_scoped_channel(session, channel_id, organization_id)
    if not NotificationChannelRepository(session).delete(channel_id):
        raise ValueError("Notification channel not found")


__all__ = [
    "EXTERNAL_CHANNEL_TYPES",
    "create_notification_channel",
    "delete_notification_channel",
    "list_notification_channels",
    "update_notification_channel",
]
