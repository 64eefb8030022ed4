"""Cancellable callback scheduling.

Everything time-based in the wizard (simulation stages, countdown ticks)
is a scheduled callback on a single event loop, never a blocking wait.
The :class:`Scheduler` interface keeps the SDK independent of the loop
so tests can drive time by hand.

``TimerHandle.cancel()`` is idempotent: cancelling a handle that already
fired or was already cancelled does nothing.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class TimerHandle:
    """A pending callback that can be cancelled at most once."""

    def __init__(self) -> None:
        self.cancelled = False
        self.fired = False
        self._on_cancel: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def bind(self, on_cancel: Callable[[], None]) -> None:
        """Attach the backend-specific cancellation hook."""
        self._on_cancel = on_cancel

    def cancel(self) -> None:
        if not self.pending:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()

    def _fire(self, callback: Callable[[], None]) -> None:
        if not self.pending:
            return
        self.fired = True
        callback()


class Scheduler(ABC):
    """Interface for scheduling delayed callbacks on one event loop."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...


class LoopScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop.

    Args:
        loop: the loop to schedule on; defaults to the running loop at the
            time of each ``call_later`` call
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop if self._loop is not None else asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle()
        loop = self._get_loop()
        inner = loop.call_later(max(0.0, delay), handle._fire, callback)
        handle.bind(inner.cancel)
        return handle
