"""Schemas for project notification channel configuration."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ExternalChannelType = Literal["slack", "teams", "webhook"]


class NotificationChannelBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    channel_id: str = Field(..., min_length=1, max_length=255)
    is_active: bool = True
    config: dict[str, Any] = Field(default_factory=dict)


class NotificationChannelCreate(NotificationChannelBase):
    model_config = ConfigDict(extra="forbid")

    type: ExternalChannelType
    project_id: str = Field(..., min_length=1)


class NotificationChannelUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    channel_id: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None
    config: dict[str, Any] | None = None


class NotificationChannelRead(NotificationChannelBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    project_id: str
    created_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
