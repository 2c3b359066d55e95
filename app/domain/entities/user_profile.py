"""Domain entity representing a platform user profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DEFAULT_DIGEST_TIME = "07:00"


@dataclass
class UserProfile:
    """Identity and preference data of a user who can receive notifications."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool = True
    organization_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def full_name(self) -> str | None:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else None

    @property
    def display_name(self) -> str:
        """Return the name used to greet the user in messages."""

        return self.full_name or self.email

    @property
    def digest_enabled(self) -> bool:
        """Digests are enabled unless explicitly switched off."""

        return (self.metadata or {}).get("digestEnabled") is not False

    @property
    def digest_time(self) -> str:
        return (self.metadata or {}).get("digestTime") or DEFAULT_DIGEST_TIME


__all__ = ["DEFAULT_DIGEST_TIME", "UserProfile"]
