"""Cron trigger for the daily digest job."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import Settings, get_settings
from app.utils import resolve_timezone

logger = logging.getLogger(__name__)

DAILY_DIGEST_JOB_ID = "daily_digest"


class DigestScheduler:
    """Run the daily digest once a day inside the application's event loop."""

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        settings: Settings | None = None,
    ) -> None:
        self._job = job
        self._settings = settings or get_settings()
        self._scheduler: AsyncIOScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def build_trigger(self) -> CronTrigger:
        return CronTrigger(
            hour=self._settings.digest_hour,
            minute=self._settings.digest_minute,
            timezone=resolve_timezone(self._settings.app_timezone),
        )

    def start(self) -> None:
        """Start the scheduler unless it is disabled or already running."""

        if not self._settings.digest_scheduler_enabled:
            logger.info("Daily digest scheduler disabled via settings")
            return
        if self.running:
            logger.info("Daily digest scheduler already running, skipping start")
            return

        scheduler = AsyncIOScheduler(timezone=resolve_timezone(self._settings.app_timezone))
        scheduler.add_job(
            self._job,
            trigger=self.build_trigger(),
            id=DAILY_DIGEST_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info(
            "Daily digest scheduled at %02d:%02d %s",
            self._settings.digest_hour,
            self._settings.digest_minute,
            self._settings.app_timezone,
        )

    def shutdown(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Daily digest scheduler stopped")


__all__ = ["DAILY_DIGEST_JOB_ID", "DigestScheduler"]
