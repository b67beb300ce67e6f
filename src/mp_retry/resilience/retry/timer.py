"""Resilience – timer services that deliver delayed retry messages."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class TimerService(Protocol):
    """Port: after *delay* seconds, call ``deliver(message)`` exactly once."""

    def schedule(self, delay: float, message: Any, deliver: Callable[[Any], Any]) -> None: ...


class AsyncioTimerService:
    """One sleeping task per scheduled message on the running event loop.

    Must be used from inside a running loop.  ``aclose`` cancels timers that
    have not fired yet, so a torn-down host receives nothing.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def schedule(self, delay: float, message: Any, deliver: Callable[[Any], Any]) -> None:
        async def _fire() -> None:
            await asyncio.sleep(delay)
            try:
                deliver(message)
            except Exception:
                logger.exception("retry.timer_delivery_failed message=%s", type(message).__name__)

        loop = asyncio.get_running_loop()
        task = loop.create_task(_fire())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    async def aclose(self) -> None:
        tasks = list(self._tasks)
        self.cancel_all()
        await asyncio.gather(*tasks, return_exceptions=True)


__all__ = ["AsyncioTimerService", "TimerService"]
