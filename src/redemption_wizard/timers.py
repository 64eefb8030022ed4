"""Session countdowns and the timer group torn down with a session.

Two countdowns run while the wizard is open:

  - payment window: 15 minutes, restarts from the top when it hits zero
  - urgency countdown: stops at zero

Both tick once per second through the :class:`Scheduler`.  They only
track the remaining time; refreshing the display is the page's concern.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from redemption_wizard.constants import (
    COUNTDOWN_TICK_SECONDS,
    PAYMENT_WINDOW_SECONDS,
    URGENCY_COUNTDOWN_SECONDS,
)
from redemption_wizard.formatting import format_countdown
from redemption_wizard.scheduler import Scheduler, TimerHandle

if TYPE_CHECKING:
    from redemption_wizard.simulator import SimulationRun

logger = logging.getLogger(__name__)


class Countdown:
    """A per-second countdown.

    Args:
        scheduler: scheduler used for the ticks
        total_seconds: starting value
        repeat: restart at ``total_seconds`` when reaching zero instead of
            stopping
    """

    def __init__(self, scheduler: Scheduler, total_seconds: int, *, repeat: bool = False) -> None:
        self._scheduler = scheduler
        self.total_seconds = total_seconds
        self.repeat = repeat
        self.remaining = total_seconds
        self._handle: TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.pending

    @property
    def display(self) -> str:
        return format_countdown(self.remaining)

    def start(self) -> None:
        if self.running:
            return
        self._schedule()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()

    def _schedule(self) -> None:
        self._handle = self._scheduler.call_later(COUNTDOWN_TICK_SECONDS, self._tick)

    def _tick(self) -> None:
        self.remaining -= 1
        if self.remaining <= 0:
            if not self.repeat:
                self.remaining = 0
                return
            self.remaining = self.total_seconds
        self._schedule()


class SessionTimers:
    """Every timer owned by one session, cancelled together.

    ``stop_all()`` runs when the session is torn down or reaches its
    terminal state; calling it again is a no-op.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        payment_window_seconds: int = PAYMENT_WINDOW_SECONDS,
        urgency_seconds: int = URGENCY_COUNTDOWN_SECONDS,
    ) -> None:
        self.scheduler = scheduler
        self.payment_window = Countdown(scheduler, payment_window_seconds, repeat=True)
        self.urgency = Countdown(scheduler, urgency_seconds)
        self.simulation: SimulationRun | None = None
        self.stopped = False

    def start(self) -> None:
        if self.stopped:
            return
        self.payment_window.start()
        self.urgency.start()

    def stop_countdowns(self) -> None:
        self.payment_window.cancel()
        self.urgency.cancel()

    def stop_all(self) -> None:
        if self.stopped:
            return
        self.stopped = True
        self.stop_countdowns()
        if self.simulation is not None:
            self.simulation.cancel()
        logger.debug("Session timers stopped")
