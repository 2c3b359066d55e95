"""Fire-and-forget entry point for code that produces notifications."""

from __future__ import annotations

import logging
from typing import Protocol

from app.domain.entities import NotificationIntent
from app.infrastructure.notifications import BackgroundTasks

from .dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


class NotificationPort(Protocol):
    """Producers hand intents over without waiting for delivery."""

    def notify(self, intent: NotificationIntent) -> None: ...


class BackgroundNotificationPort:
    """Schedule each dispatch on the event loop and log its outcome."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        tasks: BackgroundTasks | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._tasks = tasks or BackgroundTasks()

    def notify(self, intent: NotificationIntent) -> None:
        self._tasks.spawn(self._dispatch, intent)

    async def _dispatch(self, intent: NotificationIntent) -> None:
        delivered = await self._dispatcher.send_notification(intent)
        if not delivered:
            logger.warning(
                "Notification via %s was not delivered to any of %d recipients",
                intent.channel,
                len(intent.recipients),
            )

    async def drain(self) -> None:
        """Wait for every scheduled dispatch to finish."""

        await self._tasks.drain()


__all__ = ["BackgroundNotificationPort", "NotificationPort"]
