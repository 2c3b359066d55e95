"""Wiring of the notification services shared by the HTTP and websocket layers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    BackgroundNotificationPort,
    DigestService,
    NotificationDispatcher,
)
from app.config import Settings, get_settings
from app.infrastructure.database import SessionLocal
from app.infrastructure.email import EmailService
from app.infrastructure.notifications import (
    BackgroundTasks,
    InMemoryConnectionRegistry,
    NotificationGateway,
    RealtimePublisher,
    SqlAlchemyNotificationStore,
)
from app.infrastructure.scheduler import DigestScheduler
from app.infrastructure.security import JwtTokenVerifier, TokenVerifier


@dataclass
class NotificationServices:
    token_verifier: TokenVerifier
    gateway: NotificationGateway
    store: SqlAlchemyNotificationStore
    email_service: EmailService
    dispatcher: NotificationDispatcher
    port: BackgroundNotificationPort
    publisher: RealtimePublisher
    digest_service: DigestService
    scheduler: DigestScheduler


def build_notification_services(
    settings: Settings | None = None,
    *,
    session_factory: Callable[[], Session] = SessionLocal,
    token_verifier: TokenVerifier | None = None,
) -> NotificationServices:
    """Assemble the notification services for one application instance."""

    settings = settings or get_settings()
    token_verifier = token_verifier or JwtTokenVerifier.from_settings(settings)
    background_tasks = BackgroundTasks()

    gateway = NotificationGateway(
        InMemoryConnectionRegistry(),
        token_verifier,
        settings.websocket_allowed_origins(),
    )
    store = SqlAlchemyNotificationStore(session_factory)
    email_service = EmailService(settings)
    dispatcher = NotificationDispatcher(email_service, store, gateway)
    digest_service = DigestService(
        store, email_service, batch_size=settings.digest_batch_size
    )

    return NotificationServices(
        token_verifier=token_verifier,
        gateway=gateway,
        store=store,
        email_service=email_service,
        dispatcher=dispatcher,
        port=BackgroundNotificationPort(dispatcher, background_tasks),
        publisher=RealtimePublisher(gateway, background_tasks),
        digest_service=digest_service,
        scheduler=DigestScheduler(digest_service.send_daily_digest, settings),
    )


__all__ = ["NotificationServices", "build_notification_services"]
