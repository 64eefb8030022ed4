"""Public model re-exports for redemption_wizard.

Consumers should import from ``redemption_wizard.models`` rather than
reaching into sub-modules directly.
"""

# --- Enums ---
from redemption_wizard.models.enums import (
    CandidateField,
    GuardReason,
    KeyType,
    SimulationStage,
    StepId,
)

# --- Session / results ---
from redemption_wizard.models.session import (
    Candidate,
    CompletionRecord,
    FieldResult,
    FieldState,
    FormSession,
    GuardResult,
    PaymentKey,
    PrefillContext,
    PrizeContext,
    StatusUpdate,
)

# --- Events ---
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

# --- Views ---
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

__all__ = [
    # Enums
    "CandidateField",
    "GuardReason",
    "KeyType",
    "SimulationStage",
    "StepId",
    # Session
    "Candidate",
    "CompletionRecord",
    "FieldResult",
    "FieldState",
    "FormSession",
    "GuardResult",
    "PaymentKey",
    "PrefillContext",
    "PrizeContext",
    "StatusUpdate",
    # Events
    "BackEvent",
    "EnterKeyEvent",
    "EnterValueEvent",
    "FieldFeedback",
    "GoToEvent",
    "NextEvent",
    "SelectKeyTypeEvent",
    "SetTermsEvent",
    "SubmitEvent",
    "Transition",
    "WizardEvent",
    # Views
    "CountdownView",
    "FieldView",
    "PaymentKeyView",
    "PrizeView",
    "SimulationView",
    "StepProgress",
    "SummaryView",
    "WizardView",
]
