"""Concurrency and spacing limits for outbound provider calls."""
import asyncio
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog

logger = structlog.get_logger()

T = TypeVar("T")


class RateLimiter:
    """Bounds in-flight calls and the spacing between call starts.

    Callers wait in arrival order: first for a concurrency slot, then for
    their start time. Tasks are never rejected.
    """

    def __init__(
        self,
        max_concurrent: int,
        min_interval: float = 0.0,
        name: str = "",
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self.max_concurrent = max_concurrent
        self.min_interval = min_interval
        self.name = name
        self._clock = clock
        self._slots = asyncio.Semaphore(max_concurrent)
        self._start_lock = asyncio.Lock()
        self._next_start = 0.0
        self._running = 0
        self._queued = 0

    @property
    def running(self) -> int:
        return self._running

    @property
    def queued(self) -> int:
        return self._queued

    async def _wait_turn(self) -> None:
        # Reserve a start time under the lock, sleep outside it.
        async with self._start_lock:
            now = self._clock()
            start = max(now, self._next_start)
            self._next_start = start + self.min_interval
        delay = start - now
        if delay > 0:
            await asyncio.sleep(delay)

    async def schedule(
        self, task: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        """Run task once both limits allow it and return its result."""
        self._queued += 1
        try:
            await self._slots.acquire()
        finally:
            self._queued -= 1
        try:
            await self._wait_turn()
            self._running += 1
            try:
                return await task(*args, **kwargs)
            finally:
                self._running -= 1
        finally:
            self._slots.release()
