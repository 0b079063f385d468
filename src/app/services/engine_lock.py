"""
Engine Lock

One mutual-exclusion domain for everything that can change which session is
enforced. User operations wait for it; the periodic tick waits only for a
bounded time and skips the cycle if it cannot get in.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class TickSkipped(Exception):
    """The engine lock could not be acquired within the tick timeout"""


class EngineLock:
    def __init__(self) -> None:
        self._global = asyncio.Lock()

    @property
    def locked(self) -> bool:
        return self._global.locked()

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[None]:
        async with self._global:
            yield

    @asynccontextmanager
    async def exclusive_within(self, timeout: float) -> AsyncIterator[None]:
        try:
            await asyncio.wait_for(self._global.acquire(), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise TickSkipped(f"Engine busy for more than {timeout}s") from exc
        try:
            yield
        finally:
            self._global.release()

