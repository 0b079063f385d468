"""
Periodic Ticker

Drives the evaluate-tick use case from an asyncio task.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from libs.result import Result

logger = logging.getLogger(__name__)


class PeriodicTicker:
    """
    Calls ``tick`` every ``interval`` seconds until stopped.

    A tick that returns an error or raises is logged and the loop carries on;
    nothing here retries or catches up, the next tick re-derives everything.
    """

    def __init__(self, tick: Callable[[], Awaitable[Result]], interval: float):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.tick = tick
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self._run(), name="brick-ticker")
        logger.info("Ticker started: every %ss", self.interval)

    async def stop(self) -> None:
        if not self.running:
            return
        self._stopping.set()
        await self._task
        self._task = None
        logger.info("Ticker stopped")

    async def _run(self) -> None:
        while not self._stopping.is_set():
            await self.run_once()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

    async def run_once(self) -> None:
        try:
            result = await self.tick()
        except Exception:
            logger.exception("Tick failed")
            return
        if result.is_err():
            logger.warning("Tick returned %s: %s", result.error.code, result.error.message)
