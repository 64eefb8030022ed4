"""Command models — the inputs the page sends and the transitions it gets back.

Events form a discriminated union on ``type`` so a single endpoint (or a
single ``handle()`` call) can accept any of them:

  - enter_value:     raw text typed into a field
  - select_key_type: payment key type radio changed
  - set_terms:       terms checkbox toggled
  - go_to:           jump to a step (progress bar / explicit buttons)
  - next / back:     the step's forward / backward buttons
  - submit:          the confirm-payment button
  - enter_key:       Enter pressed anywhere on the form
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from redemption_wizard.models.enums import (
    CandidateField,
    GuardReason,
    KeyType,
    StepId,
)


class EnterValueEvent(BaseModel):
    type: Literal["enter_value"] = "enter_value"
    field: CandidateField
    value: str


class SelectKeyTypeEvent(BaseModel):
    type: Literal["select_key_type"] = "select_key_type"
    key_type: KeyType


class SetTermsEvent(BaseModel):
    type: Literal["set_terms"] = "set_terms"
    accepted: bool


class GoToEvent(BaseModel):
    type: Literal["go_to"] = "go_to"
    # Plain int so out-of-range targets reach the guard instead of failing parsing
    step: int


class NextEvent(BaseModel):
    type: Literal["next"] = "next"


class BackEvent(BaseModel):
    type: Literal["back"] = "back"


class SubmitEvent(BaseModel):
    type: Literal["submit"] = "submit"


class EnterKeyEvent(BaseModel):
    type: Literal["enter_key"] = "enter_key"


WizardEvent = Annotated[
    Union[
        EnterValueEvent,
        SelectKeyTypeEvent,
        SetTermsEvent,
        GoToEvent,
        NextEvent,
        BackEvent,
        SubmitEvent,
        EnterKeyEvent,
    ],
    Field(discriminator="type"),
]


class FieldFeedback(BaseModel):
    """Validity of the field an ``enter_value`` event wrote to.

    ``message`` is empty while the raw value is blank, matching the page
    which hides the validation line for empty inputs.
    """

    field: CandidateField
    valid: bool
    message: str | None = None


class Transition(BaseModel):
    """Result of handling one event."""

    event: str
    accepted: bool
    step: StepId
    reason: GuardReason | None = None
    failed_step: StepId | None = None
    field: FieldFeedback | None = None
    # Localized notification text for rejections the page announces
    notification: str | None = None
