"""FormStateMachine — step-gated navigation over a redemption session.

Stateless engine pattern: the machine holds only collaborators, and every
operation receives the :class:`FormSession` it acts on.  Nothing is kept
between calls.

Steps:
    1  Personal Data  — display name, document id, phone, email
    2  Payment Key    — key type + key value
    3  Confirmation   — terms acceptance, then confirm_and_submit
    4  Success        — terminal; the session is frozen

Moving backward is always allowed.  Moving forward requires the
requirement of the current step (and of every step skipped over) to
hold; otherwise the caller gets a :class:`GuardResult` naming the step
that failed.  Guard rejections are expected user-facing states, so they
are returned, not raised.
"""

from __future__ import annotations

import logging
from typing import Callable

from redemption_wizard.models.enums import (
    CandidateField,
    GuardReason,
    KeyType,
    StepId,
)
from redemption_wizard.models.session import (
    FieldResult,
    FormSession,
    GuardResult,
    PrefillContext,
    PrizeContext,
)
from redemption_wizard.simulator import (
    CompletionListener,
    PaymentSimulator,
    StatusListener,
)
from redemption_wizard.timers import SessionTimers
from redemption_wizard.validators import validate_field, validate_payment_key

logger = logging.getLogger(__name__)

# Steps reachable through go_to; SUCCESS is only entered on completion.
_NAVIGABLE_STEPS = (StepId.PERSONAL_DATA, StepId.PAYMENT_KEY, StepId.CONFIRMATION)


class FormStateMachine:
    """Owns the transition rules of the redemption wizard.

    Args:
        simulator: the :class:`PaymentSimulator` started by
            :meth:`confirm_and_submit`
    """

    def __init__(self, simulator: PaymentSimulator) -> None:
        self._simulator = simulator
        self._requirements: dict[StepId, Callable[[FormSession], bool]] = {
            StepId.PERSONAL_DATA: lambda s: s.candidate.complete,
            StepId.PAYMENT_KEY: lambda s: s.payment_key.valid,
            StepId.CONFIRMATION: lambda s: s.terms_accepted,
        }

    # ==================================================================
    # Session lifecycle
    # ==================================================================

    def create_session(
        self,
        prefill: PrefillContext | None = None,
        *,
        session_id: str | None = None,
    ) -> FormSession:
        """Create a fresh session at step 1.

        Prefilled prize data replaces the display defaults; a prefilled
        name is entered exactly like typed input.
        """
        prize = PrizeContext()
        if prefill is not None:
            if prefill.prize:
                prize.prize_amount = prefill.prize
            if prefill.protocol:
                prize.protocol = prefill.protocol

        kwargs = {"session_id": session_id} if session_id else {}
        session = FormSession(prize=prize, **kwargs)
        if prefill is not None and prefill.name:
            self.enter_raw_value(session, CandidateField.DISPLAY_NAME, prefill.name)
        logger.debug("Session created: session_id=%s", session.session_id)
        return session

    # ==================================================================
    # Field entry
    # ==================================================================

    def enter_raw_value(
        self, session: FormSession, field: CandidateField, value: str,
    ) -> FieldResult:
        """Store ``value`` verbatim and recompute the field's validity.

        ``CandidateField.PAYMENT_KEY`` is validated under the session's
        current key type; every other field under its own rule.
        """
        blocked = self._mutation_block(session)
        if blocked is not None:
            current = self._raw_of(session, field)
            return FieldResult(
                field=field, raw=current, valid=self._valid_of(session, field), rejected=blocked,
            )

        if field is CandidateField.PAYMENT_KEY:
            key = session.payment_key
            key.raw_value = value
            key.valid = validate_payment_key(key.type, value)
            valid = key.valid
        else:
            state = session.candidate.field(field)
            valid = validate_field(field, value)
            state.raw = value
            state.valid = valid
            if valid:
                state.accepted = value.strip() if field is CandidateField.DISPLAY_NAME else value
            else:
                state.accepted = None
        session.touch()
        return FieldResult(field=field, raw=value, valid=valid)

    def set_key_type(self, session: FormSession, key_type: KeyType) -> GuardResult:
        """Switch the payment key type; always clears the entered key."""
        blocked = self._mutation_block(session)
        if blocked is not None:
            return GuardResult.reject(session.step, blocked)
        key = session.payment_key
        key.type = key_type
        key.raw_value = ""
        key.valid = False
        session.touch()
        return GuardResult.ok(session.step)

    def set_terms_accepted(self, session: FormSession, accepted: bool) -> GuardResult:
        blocked = self._mutation_block(session)
        if blocked is not None:
            return GuardResult.reject(session.step, blocked)
        session.terms_accepted = bool(accepted)
        session.touch()
        return GuardResult.ok(session.step)

    # ==================================================================
    # Navigation
    # ==================================================================

    def can_advance(self, session: FormSession, step: StepId | None = None) -> bool:
        """True when ``step``'s requirement holds (default: current step)."""
        requirement = self._requirements.get(step if step is not None else session.step)
        return requirement(session) if requirement is not None else False

    def go_to(self, session: FormSession, target: StepId | int) -> GuardResult:
        """Move to ``target``.

        Backward moves always succeed and keep every entered value.
        Forward moves are checked step by step from the current one.
        """
        blocked = self._mutation_block(session)
        if blocked is not None:
            return GuardResult.reject(session.step, blocked)
        try:
            target = StepId(target)
        except ValueError:
            return GuardResult.reject(session.step, GuardReason.OUT_OF_RANGE)
        if target not in _NAVIGABLE_STEPS:
            return GuardResult.reject(session.step, GuardReason.OUT_OF_RANGE)

        if target > session.step:
            for step in _NAVIGABLE_STEPS:
                if session.step <= step < target and not self.can_advance(session, step):
                    logger.debug(
                        "Forward move rejected: session_id=%s, step=%d, target=%d, failed_step=%d",
                        session.session_id, session.step, target, step,
                    )
                    return GuardResult.reject(
                        session.step, GuardReason.REQUIREMENTS_NOT_MET, failed_step=step,
                    )

        session.step = target
        session.touch()
        return GuardResult.ok(target)

    def next_step(self, session: FormSession) -> GuardResult:
        if session.step >= StepId.CONFIRMATION:
            return GuardResult.reject(session.step, GuardReason.OUT_OF_RANGE)
        return self.go_to(session, session.step + 1)

    def previous_step(self, session: FormSession) -> GuardResult:
        if session.step <= StepId.PERSONAL_DATA or session.step is StepId.SUCCESS:
            reason = GuardReason.SESSION_FROZEN if session.frozen else GuardReason.OUT_OF_RANGE
            return GuardResult.reject(session.step, reason)
        return self.go_to(session, session.step - 1)

    # ==================================================================
    # Submission
    # ==================================================================

    def confirm_and_submit(
        self,
        session: FormSession,
        timers: SessionTimers | None = None,
        *,
        on_status: StatusListener | None = None,
        on_complete: CompletionListener | None = None,
    ) -> GuardResult:
        """Start the simulated payment; completion freezes the session.

        Returns as soon as the run is scheduled.  Once the session is in
        ``SUCCESS`` this is an accepted no-op: nothing re-runs and the
        protocol code stays the same.
        """
        if session.frozen:
            return GuardResult.ok(session.step)
        if session.submitting:
            return GuardResult.reject(session.step, GuardReason.SUBMISSION_IN_PROGRESS)
        if session.step is not StepId.CONFIRMATION:
            return GuardResult.reject(session.step, GuardReason.WRONG_STEP)
        if not session.terms_accepted:
            return GuardResult.reject(
                session.step, GuardReason.TERMS_NOT_ACCEPTED, failed_step=StepId.CONFIRMATION,
            )

        session.submitting = True
        session.touch()
        try:
            self._simulator.run(session, timers, on_status=on_status, on_complete=on_complete)
        except Exception:
            session.submitting = False
            raise
        return GuardResult.ok(session.step)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _mutation_block(session: FormSession) -> GuardReason | None:
        if session.frozen:
            return GuardReason.SESSION_FROZEN
        if session.submitting:
            return GuardReason.SUBMISSION_IN_PROGRESS
        return None

    @staticmethod
    def _raw_of(session: FormSession, field: CandidateField) -> str:
        if field is CandidateField.PAYMENT_KEY:
            return session.payment_key.raw_value
        return session.candidate.field(field).raw

    @staticmethod
    def _valid_of(session: FormSession, field: CandidateField) -> bool:
        if field is CandidateField.PAYMENT_KEY:
            return session.payment_key.valid
        return session.candidate.field(field).valid
