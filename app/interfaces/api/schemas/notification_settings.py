"""Schemas for per-user notification settings."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    deadline_notification: bool
    assignee_change_notification: bool
    mention_notification: bool
    status_change_notification: bool
    reminder_max_count: int
    email_notification: bool
    push_notification: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationSettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    deadline_notification: bool | None = None
    assignee_change_notification: bool | None = None
    mention_notification: bool | None = None
    status_change_notification: bool | None = None
    reminder_max_count: int | None = Field(
        default=None, ge=1, le=10, description="Maximum reminders sent per task"
    )
    email_notification: bool | None = None
    push_notification: bool | None = None
