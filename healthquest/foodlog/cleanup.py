# -*- coding: utf-8 -*-
"""Food log — periodic stale-entry cleanup running inside the app event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from ..config import settings
from .models import CleanupResult
from .storage import delete_stale_food_logs

logger = logging.getLogger(__name__)


class CleanupScheduler:
    """Runs ``cleanup`` once after ``initial_delay`` seconds, then every ``interval`` seconds."""

    def __init__(
        self,
        cleanup: Callable[[], CleanupResult] = delete_stale_food_logs,
        *,
        interval: Optional[float] = None,
        initial_delay: Optional[float] = None,
    ) -> None:
        self.cleanup = cleanup
        self.interval = settings.foodlog_cleanup_interval_sec if interval is None else interval
        self.initial_delay = (
            settings.foodlog_cleanup_initial_delay_sec if initial_delay is None else initial_delay
        )
        self.runs = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info("Starting scheduled food log cleanup (every %.0f seconds)", self.interval)
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def run_once(self) -> Optional[CleanupResult]:
        try:
            result = await asyncio.to_thread(self.cleanup)
        except Exception as exc:
            logger.error("Scheduled food log cleanup failed: %s", exc, exc_info=True)
            return None
        finally:
            self.runs += 1
        logger.info("Food log cleanup completed: %d deleted before %s", result.deleted, result.cutoff)
        return result

    async def _run(self) -> None:
        try:
            await asyncio.sleep(self.initial_delay)
            while True:
                await self.run_once()
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            logger.info("Food log cleanup scheduler stopped")
            raise
