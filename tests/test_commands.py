"""WizardController tests — event dispatch, notifications, Enter key."""

import pytest
from pydantic import TypeAdapter, ValidationError

from redemption_wizard.models.enums import CandidateField, GuardReason, KeyType, StepId
from redemption_wizard.models.events import (
    BackEvent,
    EnterKeyEvent,
    EnterValueEvent,
    GoToEvent,
    NextEvent,
    SelectKeyTypeEvent,
    SetTermsEvent,
    SubmitEvent,
    WizardEvent,
)
from redemption_wizard.models.session import PrefillContext

from helpers.factories import VALID_CANDIDATE, VALID_KEYS

_events = TypeAdapter(WizardEvent)


def _fill(controller, runtime, key_type=KeyType.DOCUMENT):
    for field, value in VALID_CANDIDATE.items():
        controller.handle(runtime, EnterValueEvent(field=field, value=value))
    controller.handle(runtime, NextEvent())
    controller.handle(runtime, SelectKeyTypeEvent(key_type=key_type))
    controller.handle(
        runtime, EnterValueEvent(field=CandidateField.PAYMENT_KEY, value=VALID_KEYS[key_type]),
    )
    controller.handle(runtime, NextEvent())
    controller.handle(runtime, SetTermsEvent(accepted=True))


# =====================================================================
# Event parsing
# =====================================================================


class TestEventParsing:

    def test_discriminated_on_type(self):
        event = _events.validate_python({"type": "go_to", "step": 3})
        assert isinstance(event, GoToEvent)
        event = _events.validate_python(
            {"type": "enter_value", "field": "email", "value": "a@b.co"},
        )
        assert event.field is CandidateField.EMAIL

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            _events.validate_python({"type": "teleport"})

    def test_unknown_key_type_rejected(self):
        with pytest.raises(ValidationError):
            _events.validate_python({"type": "select_key_type", "key_type": "iban"})


# =====================================================================
# Lifecycle
# =====================================================================


class TestOpen:

    def test_open_starts_countdowns(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        scheduler.advance(1)
        assert runtime.timers.payment_window.remaining == 899
        assert runtime.timers.urgency.remaining == 599

    def test_open_without_timers(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open(start_timers=False)
        assert scheduler.pending == 0
        assert runtime.simulation is None

    def test_open_with_prefill(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open(PrefillContext(name="Ana Souza"), session_id="s-1")
        assert runtime.session.session_id == "s-1"
        assert runtime.session.candidate.display_name.valid

    def test_teardown_is_idempotent(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        runtime.teardown()
        runtime.teardown()
        assert scheduler.pending == 0


# =====================================================================
# Dispatch
# =====================================================================


class TestHandle:

    def test_field_feedback_message(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        t = ctrl.handle(runtime, EnterValueEvent(field=CandidateField.DOCUMENT_ID, value="111"))
        assert t.accepted
        assert not t.field.valid
        assert t.field.message == "✗ CPF inválido"

    def test_blank_field_has_no_message(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        t = ctrl.handle(runtime, EnterValueEvent(field=CandidateField.EMAIL, value="   "))
        assert t.field.message is None

    def test_payment_key_message_follows_key_type(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        ctrl.handle(runtime, SelectKeyTypeEvent(key_type=KeyType.RANDOM))
        t = ctrl.handle(runtime, EnterValueEvent(field=CandidateField.PAYMENT_KEY, value="abc"))
        assert t.field.message == "✗ Chave deve ter pelo menos 32 caracteres"

    def test_blocked_next_notifies(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        t = ctrl.handle(runtime, NextEvent())
        assert not t.accepted
        assert t.failed_step is StepId.PERSONAL_DATA
        assert t.notification == "Por favor, complete todos os campos obrigatórios"

    def test_out_of_range_is_silent(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        t = ctrl.handle(runtime, GoToEvent(step=9))
        assert t.reason is GuardReason.OUT_OF_RANGE
        assert t.notification is None

    def test_submit_without_terms_notifies(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        _fill(ctrl, runtime)
        ctrl.handle(runtime, SetTermsEvent(accepted=False))
        t = ctrl.handle(runtime, SubmitEvent())
        assert t.reason is GuardReason.TERMS_NOT_ACCEPTED
        assert t.notification == "Por favor, aceite os termos para continuar"

    def test_full_flow(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        _fill(ctrl, runtime, KeyType.PHONE)
        assert runtime.session.step is StepId.CONFIRMATION

        t = ctrl.handle(runtime, SubmitEvent())
        assert t.accepted
        assert runtime.simulation is not None

        t = ctrl.handle(runtime, BackEvent())
        assert t.reason is GuardReason.SUBMISSION_IN_PROGRESS
        assert t.notification is not None

        scheduler.advance(7)
        assert runtime.session.step is StepId.SUCCESS
        assert runtime.simulation.completion.masked_key == "21*****7777"
        assert scheduler.pending == 0


# =====================================================================
# Enter key
# =====================================================================


class TestEnterKey:

    def test_enter_on_invalid_step_does_nothing(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        t = ctrl.handle(runtime, EnterKeyEvent())
        assert not t.accepted
        assert t.notification is None, "Enter on an invalid step is a silent no-op"
        assert runtime.session.step is StepId.PERSONAL_DATA

    def test_enter_advances_valid_step(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        for field, value in VALID_CANDIDATE.items():
            ctrl.handle(runtime, EnterValueEvent(field=field, value=value))
        t = ctrl.handle(runtime, EnterKeyEvent())
        assert t.accepted
        assert runtime.session.step is StepId.PAYMENT_KEY

    def test_enter_on_confirmation_submits(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        _fill(ctrl, runtime)
        t = ctrl.handle(runtime, EnterKeyEvent())
        assert t.accepted
        assert runtime.session.submitting
        scheduler.advance(7)
        assert runtime.session.frozen

    def test_enter_after_success_is_rejected_as_frozen(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        _fill(ctrl, runtime)
        ctrl.handle(runtime, SubmitEvent())
        scheduler.advance(7)
        t = ctrl.handle(runtime, EnterKeyEvent())
        assert t.reason is GuardReason.SESSION_FROZEN
