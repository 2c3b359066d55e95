"""Domain entity representing a collaboration project."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Project:
    """Subset of project attributes used by notifications."""

    id: str
    name: str
    description: str | None = None
    status: str = "planning"
    priority: str = "medium"
    end_date: datetime | None = None
    progress: int = 0
    organization_id: str | None = None


__all__ = ["Project"]
