"""Periodic status refresh."""

import asyncio
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from . import config
from .checker import StatusChecker

logger = logging.getLogger(__name__)


class Poller:
    """Runs the status checker now and then every interval seconds.

    Checks run in the threadpool so the event loop keeps serving requests.
    """

    def __init__(self, checker: StatusChecker, interval: Optional[float] = None):
        self.checker = checker
        self.interval = config.POLL_INTERVAL if interval is None else interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the refresh loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="status-poller")
        logger.info(f"Status poller started (every {self.interval:g}s)")

    async def stop(self) -> None:
        """Cancel the refresh loop. A check already in a worker thread still finishes."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Status poller stopped")

    async def _loop(self) -> None:
        while True:
            await run_in_threadpool(self.checker.check)
            await asyncio.sleep(self.interval)
