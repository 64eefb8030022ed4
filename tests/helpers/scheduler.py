"""Virtual-clock scheduler for driving timers by hand in tests.

``ManualScheduler`` implements the SDK ``Scheduler`` interface without an
event loop: callbacks only run inside :meth:`advance`, in due-time order,
so stage ordering and cancellation can be asserted deterministically.
"""

import heapq
import itertools
from typing import Callable

from redemption_wizard.scheduler import Scheduler, TimerHandle


class ManualScheduler(Scheduler):
    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, TimerHandle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle()
        heapq.heappush(
            self._queue, (self._now + max(0.0, delay), next(self._seq), handle, callback),
        )
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that can still fire."""
        return sum(1 for _, _, h, _ in self._queue if h.pending)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every callback that comes due."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            self._now = due
            handle._fire(callback)
        self._now = target
