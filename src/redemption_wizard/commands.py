"""WizardController — the command interface in front of the state machine.

``handle(runtime, event)`` replaces the page's DOM callbacks: every user
action arrives as a :data:`WizardEvent`, is applied through the
:class:`FormStateMachine`, and comes back as a :class:`Transition`.
Rendering is a separate projection of the session
(:func:`redemption_wizard.render.project`), so nothing here knows about
the page layout.

A :class:`SessionRuntime` is what one page load owns: the session record
plus its timers.  ``teardown()`` is the unload hook.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from redemption_wizard.messages import MessageCatalog
from redemption_wizard.models.enums import CandidateField, GuardReason, StepId
from redemption_wizard.models.events import (
    BackEvent,
    EnterKeyEvent,
    EnterValueEvent,
    FieldFeedback,
    GoToEvent,
    NextEvent,
    SelectKeyTypeEvent,
    SetTermsEvent,
    SubmitEvent,
    Transition,
    WizardEvent,
)
from redemption_wizard.models.session import (
    FieldResult,
    FormSession,
    GuardResult,
    PrefillContext,
)
from redemption_wizard.scheduler import Scheduler
from redemption_wizard.simulator import SimulationRun
from redemption_wizard.state_machine import FormStateMachine
from redemption_wizard.timers import SessionTimers

logger = logging.getLogger(__name__)

# Rejections announced to the user; the rest only disable controls.
_NOTIFIED_REASONS = {
    GuardReason.REQUIREMENTS_NOT_MET,
    GuardReason.TERMS_NOT_ACCEPTED,
    GuardReason.SUBMISSION_IN_PROGRESS,
    GuardReason.WRONG_STEP,
}


@dataclass
class SessionRuntime:
    """A live session and the timers scheduled on its behalf."""

    session: FormSession
    timers: SessionTimers

    @property
    def simulation(self) -> SimulationRun | None:
        return self.timers.simulation

    def teardown(self) -> None:
        """Cancel every pending timer.  Safe to call more than once."""
        self.timers.stop_all()


class WizardController:
    """Dispatches wizard events to the state machine.

    Args:
        machine: the :class:`FormStateMachine` applying transitions
        catalog: message catalog for field and notification texts
        scheduler: scheduler for the session countdowns
    """

    def __init__(
        self,
        machine: FormStateMachine,
        catalog: MessageCatalog,
        scheduler: Scheduler,
    ) -> None:
        self.machine = machine
        self.catalog = catalog
        self.scheduler = scheduler

    # ==================================================================
    # Session lifecycle
    # ==================================================================

    def open(
        self,
        prefill: PrefillContext | None = None,
        *,
        session_id: str | None = None,
        start_timers: bool = True,
    ) -> SessionRuntime:
        """Create a session and start its countdowns (one page load)."""
        session = self.machine.create_session(prefill, session_id=session_id)
        timers = SessionTimers(self.scheduler)
        if start_timers:
            timers.start()
        return SessionRuntime(session=session, timers=timers)

    # ==================================================================
    # Dispatch
    # ==================================================================

    def handle(self, runtime: SessionRuntime, event: WizardEvent) -> Transition:
        session = runtime.session
        machine = self.machine

        if isinstance(event, EnterValueEvent):
            return self._field_transition(
                event.type, session, machine.enter_raw_value(session, event.field, event.value),
            )
        if isinstance(event, SelectKeyTypeEvent):
            result = machine.set_key_type(session, event.key_type)
        elif isinstance(event, SetTermsEvent):
            result = machine.set_terms_accepted(session, event.accepted)
        elif isinstance(event, GoToEvent):
            result = machine.go_to(session, event.step)
        elif isinstance(event, NextEvent):
            result = machine.next_step(session)
        elif isinstance(event, BackEvent):
            result = machine.previous_step(session)
        elif isinstance(event, SubmitEvent):
            result = machine.confirm_and_submit(session, runtime.timers)
        elif isinstance(event, EnterKeyEvent):
            return self._enter_key(runtime)
        else:
            raise ValueError(f"Unsupported wizard event: {event!r}")

        return self._guard_transition(event.type, result)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _enter_key(self, runtime: SessionRuntime) -> Transition:
        """Enter advances a valid step (or submits on step 3), else does nothing."""
        session = runtime.session
        if session.step is StepId.SUCCESS or not self.machine.can_advance(session):
            reason = (
                GuardReason.SESSION_FROZEN if session.frozen
                else GuardReason.REQUIREMENTS_NOT_MET
            )
            return Transition(event="enter_key", accepted=False, step=session.step, reason=reason)
        if session.step is StepId.CONFIRMATION:
            result = self.machine.confirm_and_submit(session, runtime.timers)
        else:
            result = self.machine.next_step(session)
        return self._guard_transition("enter_key", result)

    def _guard_transition(self, event_type: str, result: GuardResult) -> Transition:
        notification = None
        if not result.accepted and result.reason in _NOTIFIED_REASONS:
            notification = self.catalog.guard_message(result.reason)
        if not result.accepted:
            logger.debug(
                "Event rejected: event=%s, step=%d, reason=%s",
                event_type, result.step, result.reason.value if result.reason else None,
            )
        return Transition(
            event=event_type,
            accepted=result.accepted,
            step=result.step,
            reason=result.reason,
            failed_step=result.failed_step,
            notification=notification,
        )

    def _field_transition(
        self, event_type: str, session: FormSession, result: FieldResult,
    ) -> Transition:
        message = None
        if result.raw.strip():
            if result.field is CandidateField.PAYMENT_KEY:
                message = self.catalog.key_message(session.payment_key.type, valid=result.valid)
            else:
                message = self.catalog.field_message(result.field, valid=result.valid)
        return Transition(
            event=event_type,
            accepted=result.rejected is None,
            step=session.step,
            reason=result.rejected,
            field=FieldFeedback(field=result.field, valid=result.valid, message=message),
        )
