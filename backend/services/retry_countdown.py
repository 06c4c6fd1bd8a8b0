"""One-second countdown until a rate-limited request may be retried.

States: idle (``seconds_remaining is None``) or counting ``n > 0``. Each tick
decrements; reaching zero returns to idle and fires ``on_expire``. Arming
again replaces the running countdown, ``cancel()`` forces idle at once.
"""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RetryCountdown:
    def __init__(
        self,
        on_change: Callable[[int | None], None] | None = None,
        on_expire: Callable[[], None] | None = None,
        interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._on_change = on_change
        self._on_expire = on_expire
        self._interval = interval
        self._sleep = sleep
        self._seconds_remaining: int | None = None
        self._task: asyncio.Task | None = None

    @property
    def seconds_remaining(self) -> int | None:
        return self._seconds_remaining

    @property
    def is_counting(self) -> bool:
        return self._seconds_remaining is not None

    def arm(self, seconds: int) -> None:
        """Start counting down from ``seconds``. Needs a running event loop."""
        if seconds <= 0:
            self.cancel()
            return
        self._stop_task()
        logger.info("Retry countdown armed: %ds", seconds)
        self._set(seconds)
        self._task = asyncio.get_running_loop().create_task(self._run())

    def cancel(self) -> None:
        self._stop_task()
        if self._seconds_remaining is not None:
            self._set(None)

    def tick(self) -> None:
        if self._seconds_remaining is None:
            return
        self._set(self._seconds_remaining - 1)
        if self._seconds_remaining <= 0:
            self._expire()

    async def wait(self) -> None:
        """Block until the running countdown finishes or is cancelled."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _run(self) -> None:
        while self._seconds_remaining is not None:
            await self._sleep(self._interval)
            self.tick()

    def _expire(self) -> None:
        self._stop_task()
        self._set(None)
        if self._on_expire is not None:
            self._on_expire()

    def _stop_task(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def _set(self, value: int | None) -> None:
        self._seconds_remaining = value
        if self._on_change is not None:
            self._on_change(value)
