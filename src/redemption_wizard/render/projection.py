"""Pure projection of a :class:`SessionRuntime` into a :class:`WizardView`.

Reads the session, its timers and the active simulation run; writes
nothing.  The masked key is recomputed here on every call, so the
summary is never stored on its own.
"""

from __future__ import annotations

from redemption_wizard.commands import SessionRuntime
from redemption_wizard.constants import STEP_NAMES
from redemption_wizard.formatting import (
    format_document_input,
    format_expiry,
    format_key_input,
    format_phone_input,
    strip_currency,
)
from redemption_wizard.masking import mask_key
from redemption_wizard.messages import MessageCatalog
from redemption_wizard.models.enums import CandidateField, SimulationStage, StepId
from redemption_wizard.models.session import FieldState, FormSession
from redemption_wizard.models.view import (
    CountdownView,
    FieldView,
    PaymentKeyView,
    PrizeView,
    SimulationView,
    StepProgress,
    SummaryView,
    WizardView,
)
from redemption_wizard.state_machine import FormStateMachine

# Display formatter per step 1 field; fields not listed are shown as typed.
_FIELD_DISPLAY = {
    CandidateField.DOCUMENT_ID: format_document_input,
    CandidateField.PHONE: format_phone_input,
}

_STEP1_FIELDS = (
    CandidateField.DISPLAY_NAME,
    CandidateField.DOCUMENT_ID,
    CandidateField.PHONE,
    CandidateField.EMAIL,
)


def _field_view(field: CandidateField, state: FieldState, catalog: MessageCatalog) -> FieldView:
    formatter = _FIELD_DISPLAY.get(field)
    return FieldView(
        raw=state.raw,
        display=formatter(state.raw) if formatter else state.raw,
        valid=state.valid,
        message=catalog.field_message(field, valid=state.valid) if state.raw.strip() else None,
    )


def _payment_key_view(session: FormSession, catalog: MessageCatalog) -> PaymentKeyView:
    key = session.payment_key
    info = catalog.key_input(key.type)
    return PaymentKeyView(
        type=key.type,
        raw=key.raw_value,
        display=format_key_input(key.type, key.raw_value),
        valid=key.valid,
        message=catalog.key_message(key.type, valid=key.valid) if key.raw_value.strip() else None,
        placeholder=info.placeholder,
        max_length=info.max_length,
    )


def _progress(session: FormSession) -> list[StepProgress]:
    progress = []
    for step in (StepId.PERSONAL_DATA, StepId.PAYMENT_KEY, StepId.CONFIRMATION):
        if session.step is StepId.SUCCESS or step < session.step:
            state = "completed"
        elif step == session.step:
            state = "active"
        else:
            state = "pending"
        progress.append(StepProgress(step=step, name=STEP_NAMES[step], state=state))
    return progress


def summarize(session: FormSession) -> SummaryView:
    """Masked summary shown before confirming (and reused on the receipt)."""
    return SummaryView(
        prize_amount=session.prize.prize_amount,
        protocol=session.prize.protocol,
        display_name=session.candidate.display_name.accepted or session.candidate.display_name.raw.strip(),
        masked_key=mask_key(session.payment_key),
    )


def _simulation_view(runtime: SessionRuntime, catalog: MessageCatalog) -> SimulationView:
    run = runtime.simulation
    if run is None:
        return SimulationView(stage=SimulationStage.IDLE)
    latest = run.updates[-1] if run.updates else None
    return SimulationView(
        stage=run.stage,
        title=latest.title if latest and not run.done else None,
        detail=latest.detail if latest and not run.done else None,
        updates=list(run.updates),
        completion=run.completion,
        notification=catalog.notification("completed") if run.done else None,
    )


def project(
    runtime: SessionRuntime,
    machine: FormStateMachine,
    catalog: MessageCatalog,
) -> WizardView:
    """Build the full page view of ``runtime``."""
    session = runtime.session
    timers = runtime.timers
    editable = not (session.frozen or session.submitting)

    return WizardView(
        session_id=session.session_id,
        step=session.step,
        step_name=STEP_NAMES[session.step],
        frozen=session.frozen,
        submitting=session.submitting,
        fields={
            f.value: _field_view(f, session.candidate.field(f), catalog)
            for f in _STEP1_FIELDS
        },
        payment_key=_payment_key_view(session, catalog),
        terms_accepted=session.terms_accepted,
        buttons={
            "next-step-1": editable and machine.can_advance(session, StepId.PERSONAL_DATA),
            "next-step-2": editable and machine.can_advance(session, StepId.PAYMENT_KEY),
            "confirm-payment": editable and machine.can_advance(session, StepId.CONFIRMATION),
        },
        progress=_progress(session),
        prize=PrizeView(
            prize_amount=session.prize.prize_amount,
            amount=strip_currency(session.prize.prize_amount),
            protocol=session.prize.protocol,
            expires_on=format_expiry(session.prize.expires_on),
        ),
        summary=summarize(session),
        countdowns=CountdownView(
            payment_window=timers.payment_window.display,
            urgency=timers.urgency.display,
            running=timers.payment_window.running,
        ),
        simulation=_simulation_view(runtime, catalog),
    )
