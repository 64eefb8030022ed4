"""Session and result models — the contract between the state machine and callers.

``FormSession`` is the single owned record of one wizard run.  It is
created per page load, passed explicitly to every state machine
operation, and discarded on teardown.  Nothing here is persisted.

Result types:
  - FieldResult: validity of a field after raw input was stored
  - GuardResult: outcome of a navigation or submission attempt
  - StatusUpdate: one staged status text pair from the payment simulation
  - CompletionRecord: the final summary emitted when the simulation is done
"""

import uuid
from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel, Field

from redemption_wizard.constants import (
    DEFAULT_PRIZE_AMOUNT,
    DEFAULT_PROTOCOL,
    PRIZE_EXPIRY_DAYS,
)
from redemption_wizard.models.enums import (
    CandidateField,
    GuardReason,
    KeyType,
    SimulationStage,
    StepId,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _default_expiry() -> date:
    return date.today() + timedelta(days=PRIZE_EXPIRY_DAYS)


class FieldState(BaseModel):
    """Raw input of one field plus its validity.

    ``raw`` always holds exactly what the user typed.  ``accepted`` is the
    committed value and is only set while ``valid`` is true.
    """

    raw: str = ""
    valid: bool = False
    accepted: str | None = None


class Candidate(BaseModel):
    """Identity and contact data collected on step 1."""

    display_name: FieldState = Field(default_factory=FieldState)
    document_id: FieldState = Field(default_factory=FieldState)
    phone: FieldState = Field(default_factory=FieldState)
    email: FieldState = Field(default_factory=FieldState)

    def field(self, name: CandidateField) -> FieldState:
        return getattr(self, name.value)

    @property
    def complete(self) -> bool:
        """True when every step 1 field is valid."""
        return all(
            f.valid for f in (self.display_name, self.document_id, self.phone, self.email)
        )


class PaymentKey(BaseModel):
    """Destination key for the prize transfer.

    ``valid`` is recomputed from ``raw_value`` under ``type`` on every
    write; switching ``type`` resets the key.
    """

    type: KeyType = KeyType.DOCUMENT
    raw_value: str = ""
    valid: bool = False


class PrefillContext(BaseModel):
    """Optional page-load values (e.g. query parameters).

    Used only as initial values; nothing here is checked against a backend.
    """

    name: str | None = None
    prize: str | None = None
    protocol: str | None = None


class PrizeContext(BaseModel):
    """Display-only prize data carried through to the completion record."""

    prize_amount: str = DEFAULT_PRIZE_AMOUNT
    protocol: str = DEFAULT_PROTOCOL
    expires_on: date = Field(default_factory=_default_expiry)


class FormSession(BaseModel):
    """The wizard's session record.

    Once ``protocol_code`` is set the session is in ``StepId.SUCCESS`` and
    no field may change anymore.
    """

    session_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    step: StepId = StepId.PERSONAL_DATA
    candidate: Candidate = Field(default_factory=Candidate)
    payment_key: PaymentKey = Field(default_factory=PaymentKey)
    terms_accepted: bool = False
    protocol_code: str | None = None
    # True between confirm_and_submit and the simulated payment completing
    submitting: bool = False
    prize: PrizeContext = Field(default_factory=PrizeContext)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def frozen(self) -> bool:
        return self.protocol_code is not None

    def touch(self) -> None:
        self.updated_at = _utcnow()


class FieldResult(BaseModel):
    """Outcome of storing a raw value for one field."""

    field: CandidateField
    raw: str
    valid: bool
    # Set when the write itself was refused (frozen / submitting session)
    rejected: GuardReason | None = None


class GuardResult(BaseModel):
    """Outcome of a navigation or submission attempt.

    ``failed_step`` names the step whose requirement blocked a forward
    move; it is ``None`` for rejections that are not about field validity.
    """

    accepted: bool
    step: StepId
    reason: GuardReason | None = None
    failed_step: StepId | None = None

    @classmethod
    def ok(cls, step: StepId) -> "GuardResult":
        return cls(accepted=True, step=step)

    @classmethod
    def reject(
        cls,
        step: StepId,
        reason: GuardReason,
        failed_step: StepId | None = None,
    ) -> "GuardResult":
        return cls(accepted=False, step=step, reason=reason, failed_step=failed_step)


class StatusUpdate(BaseModel):
    """One (title, detail) status pair emitted while the payment runs."""

    stage: SimulationStage
    title: str
    detail: str


class CompletionRecord(BaseModel):
    """Final summary emitted when the simulated payment reaches ``done``."""

    prize_amount: str
    masked_key: str
    protocol_code: str
    completed_at: datetime = Field(default_factory=_utcnow)
