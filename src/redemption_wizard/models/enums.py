"""Enumerations for redemption sessions."""

import enum


class KeyType(str, enum.Enum):
    """Payment key (Pix key) classification.

    Values are the literal codes the page sends when the user picks a
    key type, so they double as the inbound wire format.
    """

    DOCUMENT = "cpf"
    EMAIL = "email"
    PHONE = "phone"
    RANDOM = "random"


class StepId(int, enum.Enum):
    """Wizard steps.

    Transitions:
        1 <-> 2 <-> 3   (forward gated on validity, backward free)
        3 -> 4          (only through confirm_and_submit completion)
    """

    PERSONAL_DATA = 1
    PAYMENT_KEY = 2
    CONFIRMATION = 3
    SUCCESS = 4


class SimulationStage(str, enum.Enum):
    """Stages of the simulated payment confirmation.

    Transitions:
        idle -> stage1 -> stage2 -> stage3 -> done
    """

    IDLE = "idle"
    STAGE1 = "stage1"
    STAGE2 = "stage2"
    STAGE3 = "stage3"
    DONE = "done"


class CandidateField(str, enum.Enum):
    """Text fields that accept raw user input."""

    DISPLAY_NAME = "display_name"
    DOCUMENT_ID = "document_id"
    PHONE = "phone"
    EMAIL = "email"
    PAYMENT_KEY = "payment_key"


class GuardReason(str, enum.Enum):
    """Why a transition was rejected."""

    REQUIREMENTS_NOT_MET = "requirements_not_met"
    OUT_OF_RANGE = "out_of_range"
    SESSION_FROZEN = "session_frozen"
    SUBMISSION_IN_PROGRESS = "submission_in_progress"
    TERMS_NOT_ACCEPTED = "terms_not_accepted"
    WRONG_STEP = "wrong_step"
