"""Repeating timers for autoplay."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_every(self, seconds: float, callback: Callable[[], None]) -> TimerHandle: ...


class _RepeatingTimer:
    """Re-arms `loop.call_later` after each tick until cancelled."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        seconds: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._seconds = seconds
        self._callback = callback
        self._cancelled = False
        self._pending: asyncio.TimerHandle | None = None
        self._arm()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _arm(self) -> None:
        self._pending = self._loop.call_later(self._seconds, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Autoplay tick failed")
        if not self._cancelled:
            self._arm()

    def cancel(self) -> None:
        self._cancelled = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


class AsyncioScheduler:
    """Schedule callbacks on the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_every(self, seconds: float, callback: Callable[[], None]) -> _RepeatingTimer:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingTimer(loop, seconds, callback)


__all__ = ["AsyncioScheduler", "Scheduler", "TimerHandle"]
