"""Helpers to schedule realtime pushes from sync or async code."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from anyio import from_thread

from .gateway import NotificationGateway

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Keep strong references to fire-and-forget tasks until they finish."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def spawn(self, factory: Callable[..., Awaitable[Any]], *args: Any) -> None:
        """Start ``factory(*args)`` on the running loop, or from a worker thread."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run_sync(self._create_task, factory, args)
        else:
            self._create_task(factory, args, loop=loop)

    def _create_task(
        self,
        factory: Callable[..., Awaitable[Any]],
        args: tuple[Any, ...],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        loop = loop or asyncio.get_running_loop()
        task = loop.create_task(factory(*args))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background notification task failed", exc_info=exc)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until every spawned task has finished."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class RealtimePublisher:
    """Push unread counters without blocking the caller.

    Sync route handlers run in worker threads; the push is handed back to
    the event loop that owns the websocket connections.
    """

    def __init__(self, gateway: NotificationGateway, tasks: BackgroundTasks | None = None) -> None:
        self._gateway = gateway
        self._tasks = tasks or BackgroundTasks()

    def publish_unread_count(self, user_id: str, count: int) -> None:
        if not user_id:
            return
        self._tasks.spawn(self._gateway.send_unread_count, user_id, count)

    async def drain(self) -> None:
        await self._tasks.drain()


__all__ = ["BackgroundTasks", "RealtimePublisher"]
