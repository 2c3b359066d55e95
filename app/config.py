"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

# Origins accepted by the realtime gateway outside of production.
DEVELOPMENT_WS_ORIGINS: tuple[str, ...] = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./partner_hub.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    environment: str = Field(
        default="development",
        description="Deployment environment name (development, staging, production)",
    )
    app_timezone: str = Field(
        default="Asia/Tokyo",
        description="Timezone used to compute day boundaries and schedule jobs",
    )
    app_base_url: str = Field(
        default="http://localhost:5173",
        description="Public URL of the web client, used to build links in emails",
    )
    auth_jwt_secret: str = Field(
        description="Shared secret used to verify identity provider access tokens",
        min_length=1,
    )
    auth_jwt_algorithm: str = Field(
        default="HS256", description="Signing algorithm of the access tokens"
    )
    auth_jwt_audience: str | None = Field(
        default=None,
        description="Expected ``aud`` claim; audience is not checked when unset",
    )
    ws_allowed_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to open realtime connections in production",
    )
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEVELOPMENT_WS_ORIGINS),
        description="Origins allowed by the HTTP CORS middleware",
    )
    email_enabled: bool = Field(
        default=False,
        description="When false emails are written to the log instead of being sent",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    email_from_name: str = Field(
        default="Partner Collaboration Platform",
        description="Display name used as the sender of transactional messages",
    )
    digest_scheduler_enabled: bool = Field(
        default=True, description="Register the daily digest job on startup"
    )
    digest_hour: int = Field(default=7, ge=0, le=23)
    digest_minute: int = Field(default=0, ge=0, le=59)
    digest_batch_size: int = Field(default=50, gt=0)

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def websocket_allowed_origins(self) -> list[str]:
        """Return the origin allow-list enforced by the realtime gateway."""

        if self.is_production:
            return list(self.ws_allowed_origins)
        return list(DEVELOPMENT_WS_ORIGINS)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = [
    "DEVELOPMENT_WS_ORIGINS",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
