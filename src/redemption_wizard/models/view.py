"""View models — a read-only projection of a session for the page.

Built by :func:`redemption_wizard.render.project`; nothing in here is
ever written back into the session.
"""

from typing import Literal

from pydantic import BaseModel

from redemption_wizard.models.enums import KeyType, SimulationStage, StepId
from redemption_wizard.models.session import CompletionRecord, StatusUpdate


class FieldView(BaseModel):
    raw: str
    # As-you-type formatted value shown in the input
    display: str
    valid: bool
    message: str | None = None


class PaymentKeyView(FieldView):
    type: KeyType
    placeholder: str
    max_length: int


class StepProgress(BaseModel):
    step: StepId
    name: str
    state: Literal["completed", "active", "pending"]


class PrizeView(BaseModel):
    prize_amount: str
    # Amount without the currency symbol, as printed next to "R$"
    amount: str
    protocol: str
    expires_on: str


class SummaryView(BaseModel):
    """The step 3 summary: never holds the unmasked key."""

    prize_amount: str
    protocol: str
    display_name: str
    masked_key: str


class CountdownView(BaseModel):
    payment_window: str
    urgency: str
    running: bool


class SimulationView(BaseModel):
    stage: SimulationStage
    title: str | None = None
    detail: str | None = None
    updates: list[StatusUpdate] = []
    completion: CompletionRecord | None = None
    notification: str | None = None


class WizardView(BaseModel):
    """Everything the page needs to draw the current state."""

    session_id: str
    step: StepId
    step_name: str
    frozen: bool
    submitting: bool
    fields: dict[str, FieldView]
    payment_key: PaymentKeyView
    terms_accepted: bool
    # Enablement of the page's buttons, keyed by their element ids
    buttons: dict[str, bool]
    progress: list[StepProgress]
    prize: PrizeView
    summary: SummaryView
    countdowns: CountdownView
    simulation: SimulationView
