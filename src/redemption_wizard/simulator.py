"""PaymentSimulator — staged, cancellable completion of a redemption.

There is no payment network behind this: the simulator walks a fixed
state machine on scheduled callbacks and always reaches ``done``.

    idle ──► stage1 ──(3000ms)──► stage2 ──(2000ms)──► stage3 ──(2000ms)──► done

Each stage emits a (title, detail) :class:`StatusUpdate`.  Reaching
``done`` runs the completion handler, which is the only place outside the
state machine that writes to the session: it sets the protocol code,
moves the session to ``StepId.SUCCESS`` and stops the session timers.
Listeners then receive a :class:`CompletionRecord`.  A listener that
raises is logged and skipped; the run keeps going either way.

Only one delayed callback is pending at any time, so a single
:meth:`SimulationRun.cancel` drops the whole remaining chain.

Usage::

    simulator = PaymentSimulator(LoopScheduler(), catalog)
    run = simulator.run(session, timers)
    run.subscribe(on_status=print)
    record = await run.wait()
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from redemption_wizard.constants import (
    PROTOCOL_PREFIX,
    PROTOCOL_SUFFIX_DIGITS,
    STAGE_DURATIONS_MS,
)
from redemption_wizard.masking import mask_key
from redemption_wizard.messages import MessageCatalog
from redemption_wizard.models.enums import SimulationStage, StepId
from redemption_wizard.models.session import (
    CompletionRecord,
    FormSession,
    StatusUpdate,
)
from redemption_wizard.scheduler import Scheduler, TimerHandle
from redemption_wizard.timers import SessionTimers

logger = logging.getLogger(__name__)

StatusListener = Callable[[StatusUpdate], None]
CompletionListener = Callable[[CompletionRecord], None]

# Stages that emit a status update, in order.
_STAGES: tuple[SimulationStage, ...] = (
    SimulationStage.STAGE1,
    SimulationStage.STAGE2,
    SimulationStage.STAGE3,
)


def wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_protocol_code(timestamp_ms: int, prefix: str = PROTOCOL_PREFIX) -> str:
    """Prefix plus the last 6 decimal digits of the timestamp.

    No collision check: two completions 10^6 ms apart share a suffix.
    """
    suffix = str(timestamp_ms)[-PROTOCOL_SUFFIX_DIGITS:].rjust(PROTOCOL_SUFFIX_DIGITS, "0")
    return f"{prefix}{suffix}"


def issue_protocol_code(
    session: FormSession,
    clock: Callable[[], int] = wall_clock_ms,
    prefix: str = PROTOCOL_PREFIX,
) -> str:
    """Return the session's protocol code, generating it on first call only."""
    if session.protocol_code is not None:
        return session.protocol_code
    return generate_protocol_code(clock(), prefix)


class SimulationRun:
    """Handle on one in-flight simulated payment.

    Created by :meth:`PaymentSimulator.run`; callers observe it through
    :meth:`subscribe`, :meth:`wait`, or by polling ``stage``/``updates``.
    """

    def __init__(
        self,
        simulator: PaymentSimulator,
        session: FormSession,
        timers: SessionTimers | None,
    ) -> None:
        self._simulator = simulator
        self._session = session
        self._timers = timers
        self.stage = SimulationStage.IDLE
        self.updates: list[StatusUpdate] = []
        self.completion: CompletionRecord | None = None
        self.cancelled = False
        self._handle: TimerHandle | None = None
        self._status_listeners: list[StatusListener] = []
        self._completion_listeners: list[CompletionListener] = []
        self._waiters: list[asyncio.Future] = []

    @property
    def done(self) -> bool:
        return self.stage is SimulationStage.DONE

    @property
    def active(self) -> bool:
        return not (self.done or self.cancelled)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(
        self,
        on_status: StatusListener | None = None,
        on_complete: CompletionListener | None = None,
    ) -> None:
        """Register listeners.  Late subscribers do not get past events."""
        if on_status is not None:
            self._status_listeners.append(on_status)
        if on_complete is not None:
            self._completion_listeners.append(on_complete)

    async def wait(self) -> CompletionRecord | None:
        """Wait until the run completes; ``None`` if it was cancelled."""
        if not self.active:
            return self.completion
        future = asyncio.get_running_loop().create_future()
        self._waiters.append(future)
        return await future

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Drop the pending stage chain.  No-op once done or cancelled."""
        if not self.active:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
        self._resolve_waiters()
        logger.info(
            "Simulation cancelled: session_id=%s, stage=%s",
            self._session.session_id, self.stage.value,
        )

    def _start(self) -> None:
        self._advance(0)

    def _advance(self, index: int) -> None:
        """Enter stage ``index`` and schedule whatever comes after it."""
        if not self.active:
            return
        stage = _STAGES[index]
        self.stage = stage
        text = self._simulator.catalog.stage_text(stage)
        update = StatusUpdate(stage=stage, title=text.title, detail=text.detail)
        self.updates.append(update)
        logger.debug("Simulation %s: %s", stage.value, update.title)

        delay = self._simulator.stage_durations_ms[index] / 1000
        if index + 1 < len(_STAGES):
            self._handle = self._simulator.scheduler.call_later(
                delay, lambda: self._advance(index + 1),
            )
        else:
            self._handle = self._simulator.scheduler.call_later(delay, self._complete)
        self._notify(self._status_listeners, update)

    def _complete(self) -> None:
        """Completion handler: freeze the session and notify listeners."""
        if not self.active:
            return
        session = self._session
        code = issue_protocol_code(session, self._simulator.clock, self._simulator.protocol_prefix)
        record = CompletionRecord(
            prize_amount=session.prize.prize_amount,
            masked_key=mask_key(session.payment_key),
            protocol_code=code,
        )

        session.protocol_code = code
        session.step = StepId.SUCCESS
        session.submitting = False
        session.touch()

        self.stage = SimulationStage.DONE
        self.completion = record
        if self._timers is not None:
            self._timers.stop_all()

        logger.info(
            "Simulation done: session_id=%s, protocol_code=%s",
            session.session_id, code,
        )
        self._notify(self._completion_listeners, record)
        self._resolve_waiters()

    def _notify(self, listeners: list, payload: StatusUpdate | CompletionRecord) -> None:
        """Call every listener; a failing one is logged and skipped."""
        for listener in list(listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception(
                    "Simulation listener failed: session_id=%s, stage=%s",
                    self._session.session_id, self.stage.value,
                )

    def _resolve_waiters(self) -> None:
        for future in self._waiters:
            if not future.done():
                future.set_result(self.completion)
        self._waiters.clear()


class PaymentSimulator:
    """Starts simulated payment runs.

    Args:
        scheduler: scheduler used for the stage delays
        catalog: message catalog for the stage texts
        stage_durations_ms: delays after stage 1, stage 2 and stage 3
        clock: millisecond wall clock used for the protocol code
        protocol_prefix: literal prefix of generated protocol codes
    """

    def __init__(
        self,
        scheduler: Scheduler,
        catalog: MessageCatalog,
        *,
        stage_durations_ms: tuple[int, int, int] = STAGE_DURATIONS_MS,
        clock: Callable[[], int] = wall_clock_ms,
        protocol_prefix: str = PROTOCOL_PREFIX,
    ) -> None:
        if len(stage_durations_ms) != len(_STAGES):
            raise ValueError(
                f"Expected {len(_STAGES)} stage durations, got {len(stage_durations_ms)}"
            )
        self.scheduler = scheduler
        self.catalog = catalog
        self.stage_durations_ms = tuple(stage_durations_ms)
        self.clock = clock
        self.protocol_prefix = protocol_prefix

    def run(
        self,
        session: FormSession,
        timers: SessionTimers | None = None,
        *,
        on_status: StatusListener | None = None,
        on_complete: CompletionListener | None = None,
    ) -> SimulationRun:
        """Start a run for ``session`` and emit the stage 1 status at once.

        The session must be on the confirmation step with terms accepted
        and no run in flight; the state machine checks this before calling.
        """
        if session.step is not StepId.CONFIRMATION or not session.terms_accepted:
            raise ValueError(
                f"Payment simulation is only valid during the confirmation step: "
                f"session_id={session.session_id}, step={session.step.value}"
            )
        if timers is not None and timers.simulation is not None and timers.simulation.active:
            raise ValueError(
                f"Payment simulation already running: session_id={session.session_id}"
            )

        run = SimulationRun(self, session, timers)
        run.subscribe(on_status=on_status, on_complete=on_complete)
        if timers is not None:
            timers.simulation = run
        logger.info("Simulation started: session_id=%s", session.session_id)
        run._start()
        return run
