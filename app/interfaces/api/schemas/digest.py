"""Schemas for the daily digest preferences."""

from pydantic import BaseModel, Field


class DigestSettingsRead(BaseModel):
    enabled: bool
    time: str


class DigestSettingsUpdate(BaseModel):
    enabled: bool
    time: str | None = Field(
        default=None,
        pattern=r"^([01]\d|2[0-3]):[0-5]\d$",
        description="Preferred delivery time in HH:MM",
    )
