"""Projection and receipt rendering tests."""

import pytest

from redemption_wizard.models.enums import CandidateField, KeyType, SimulationStage, StepId
from redemption_wizard.models.events import (
    EnterValueEvent,
    GoToEvent,
    SelectKeyTypeEvent,
    SetTermsEvent,
    SubmitEvent,
)
from redemption_wizard.models.session import PrefillContext
from redemption_wizard.render import ReceiptRenderer, project, summarize

from helpers.factories import VALID_CANDIDATE, VALID_KEYS


@pytest.fixture
def renderer():
    return ReceiptRenderer()


def _view(ctrl, runtime):
    return project(runtime, ctrl.machine, ctrl.catalog)


def _to_confirmation(ctrl, runtime, key_type=KeyType.EMAIL):
    for field, value in VALID_CANDIDATE.items():
        ctrl.handle(runtime, EnterValueEvent(field=field, value=value))
    ctrl.handle(runtime, GoToEvent(step=2))
    ctrl.handle(runtime, SelectKeyTypeEvent(key_type=key_type))
    ctrl.handle(
        runtime, EnterValueEvent(field=CandidateField.PAYMENT_KEY, value=VALID_KEYS[key_type]),
    )
    ctrl.handle(runtime, GoToEvent(step=3))


# =====================================================================
# Projection
# =====================================================================


class TestProjection:

    def test_initial_view(self, controller):
        ctrl, _ = controller
        view = _view(ctrl, ctrl.open())
        assert view.step is StepId.PERSONAL_DATA
        assert view.step_name == "Personal Data"
        assert view.buttons == {
            "next-step-1": False, "next-step-2": False, "confirm-payment": False,
        }
        assert [p.state for p in view.progress] == ["active", "pending", "pending"]
        assert view.fields["email"].message is None
        assert view.payment_key.placeholder == "Digite seu CPF (000.000.000-00)"
        assert view.countdowns.payment_window == "15:00"
        assert view.countdowns.urgency == "10:00"
        assert view.prize.amount == "2.500,00"
        assert view.simulation.stage is SimulationStage.IDLE

    def test_display_is_formatted_raw_is_verbatim(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        ctrl.handle(runtime, EnterValueEvent(field=CandidateField.DOCUMENT_ID, value="52998224725"))
        view = _view(ctrl, runtime)
        assert view.fields["document_id"].raw == "52998224725"
        assert view.fields["document_id"].display == "529.982.247-25"
        assert view.fields["document_id"].message == "✓ CPF válido"

    def test_buttons_and_progress_on_confirmation(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        _to_confirmation(ctrl, runtime)
        view = _view(ctrl, runtime)
        assert view.buttons["next-step-1"] and view.buttons["next-step-2"]
        assert not view.buttons["confirm-payment"]
        ctrl.handle(runtime, SetTermsEvent(accepted=True))
        assert _view(ctrl, runtime).buttons["confirm-payment"]
        assert [p.state for p in view.progress] == ["completed", "completed", "active"]

    def test_summary_never_holds_raw_key(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        _to_confirmation(ctrl, runtime, KeyType.EMAIL)
        summary = summarize(runtime.session)
        assert summary.masked_key == "ab***@cd.com"
        assert summary.display_name == "Maria José da Silva"
        assert VALID_KEYS[KeyType.EMAIL] not in summary.model_dump_json()

    def test_projection_does_not_mutate(self, controller):
        ctrl, _ = controller
        runtime = ctrl.open()
        before = runtime.session.model_dump()
        _view(ctrl, runtime)
        _view(ctrl, runtime)
        assert runtime.session.model_dump() == before

    def test_simulation_view_while_running(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        _to_confirmation(ctrl, runtime)
        ctrl.handle(runtime, SetTermsEvent(accepted=True))
        ctrl.handle(runtime, SubmitEvent())
        scheduler.advance(3)
        view = _view(ctrl, runtime)
        assert view.submitting
        assert view.simulation.stage is SimulationStage.STAGE2
        assert view.simulation.title == "Validando dados..."
        assert not any(view.buttons.values())

    def test_success_view(self, controller):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        _to_confirmation(ctrl, runtime)
        ctrl.handle(runtime, SetTermsEvent(accepted=True))
        ctrl.handle(runtime, SubmitEvent())
        scheduler.advance(7)
        view = _view(ctrl, runtime)
        assert view.frozen
        assert view.step_name == "Success"
        assert [p.state for p in view.progress] == ["completed"] * 3
        assert view.simulation.notification == "Prêmio liberado com sucesso!"
        assert view.simulation.completion.protocol_code == "TSN-LIB-2025-123456"
        assert not view.countdowns.running


# =====================================================================
# Receipt rendering
# =====================================================================


class TestReceipt:

    def test_summary_before_completion(self, controller, renderer):
        ctrl, _ = controller
        runtime = ctrl.open(PrefillContext(prize="R$ 900,00"))
        _to_confirmation(ctrl, runtime)
        text = renderer.render(_view(ctrl, runtime))
        assert "Resumo do resgate" in text
        assert "R$ 900,00" in text
        assert "ab***@cd.com" in text
        assert "Aceite os termos" in text

    def test_receipt_before_completion_raises(self, controller, renderer):
        ctrl, _ = controller
        view = _view(ctrl, ctrl.open())
        with pytest.raises(ValueError, match="only valid after completion"):
            renderer.render_receipt(view)

    def test_receipt_after_completion(self, controller, renderer):
        ctrl, scheduler = controller
        runtime = ctrl.open()
        _to_confirmation(ctrl, runtime, KeyType.DOCUMENT)
        ctrl.handle(runtime, SetTermsEvent(accepted=True))
        ctrl.handle(runtime, SubmitEvent())
        scheduler.advance(7)
        text = renderer.render(_view(ctrl, runtime))
        assert "Prêmio liberado com sucesso!" in text
        assert "TSN-LIB-2025-123456" in text
        assert "529.***.***-25" in text
        assert VALID_KEYS[KeyType.DOCUMENT] not in text
