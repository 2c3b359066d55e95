"""Domain entity describing an external notification channel binding."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class NotificationChannel:
    """Project-scoped configuration for an external channel (Slack, Teams, ...)."""

    id: str | None
    name: str
    type: str
    channel_id: str
    project_id: str
    is_active: bool = True
    created_by_id: str | None = None
    config: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = ["NotificationChannel"]
