"""redemption_wizard — step-gated prize redemption SDK.

Public API:
    FormStateMachine  — step navigation, field entry and submission rules
    PaymentSimulator  — staged, cancellable simulated payment completion
    WizardController  — ``handle(runtime, event)`` command interface
    SessionRuntime    — a live session plus its timers (one page load)
    MessageCatalog    — localized field, guard and stage texts
    ReceiptRenderer   — plain-text summary / receipt rendering

Pure helpers:
    validate_*        — field validators (CPF, e-mail, phone, random key, name)
    mask_key          — privacy-safe display of a payment key
    project           — session-to-view projection

Scheduling:
    Scheduler, LoopScheduler, TimerHandle — cancellable delayed callbacks
    Countdown, SessionTimers              — per-session countdowns
"""

from redemption_wizard.commands import SessionRuntime, WizardController
from redemption_wizard.masking import mask_key, mask_value
from redemption_wizard.messages import MessageCatalog
from redemption_wizard.render import ReceiptRenderer, project
from redemption_wizard.scheduler import LoopScheduler, Scheduler, TimerHandle
from redemption_wizard.simulator import (
    PaymentSimulator,
    SimulationRun,
    generate_protocol_code,
)
from redemption_wizard.state_machine import FormStateMachine
from redemption_wizard.timers import Countdown, SessionTimers
from redemption_wizard.validators import (
    validate_document_id,
    validate_email,
    validate_name,
    validate_payment_key,
    validate_phone,
    validate_random_key,
)

__all__ = [
    # Engine
    "FormStateMachine",
    "PaymentSimulator",
    "SimulationRun",
    "WizardController",
    "SessionRuntime",
    "MessageCatalog",
    "ReceiptRenderer",
    # Helpers
    "generate_protocol_code",
    "mask_key",
    "mask_value",
    "project",
    "validate_document_id",
    "validate_email",
    "validate_name",
    "validate_payment_key",
    "validate_phone",
    "validate_random_key",
    # Scheduling
    "Countdown",
    "LoopScheduler",
    "Scheduler",
    "SessionTimers",
    "TimerHandle",
]
