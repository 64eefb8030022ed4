"""DataMasker — privacy-safe display strings for payment keys.

The masked value is only ever shown to the user (step 3 summary and the
success receipt); it is never used for submission.

Values are normalized before masking so that user-entered punctuation
does not leak into, or break, the reveal policy:

    type      normalized         reveal                     example
    Document  digits only        first 3 + last 2           529.***.***-25
    Email     trimmed            first 2 of local + domain  ab***@cd.com
    Phone     digits only        first 2 + last 4           11*****9999
    Random    trimmed            first 8 + last 4           a1b2c3d4***wxyz

Masking never raises.  Values too short for the policy reveal the head up
to its length and the tail only when at least one character is left to
redact in between.
"""

from __future__ import annotations

from redemption_wizard.models.enums import KeyType
from redemption_wizard.models.session import PaymentKey
from redemption_wizard.validators import only_digits

DOCUMENT_MARKER = ".***.***-"
EMAIL_MARKER = "***"
PHONE_MARKER = "*****"
RANDOM_MARKER = "***"


def _reveal(value: str, head: int, tail: int, marker: str) -> str:
    """Keep ``head`` leading and ``tail`` trailing chars around ``marker``."""
    if not value:
        return marker
    head_part = value[:head]
    rest = value[head:]
    tail_part = rest[-tail:] if tail and len(rest) > tail else ""
    return f"{head_part}{marker}{tail_part}"


def mask_document(value: str) -> str:
    return _reveal(only_digits(value), 3, 2, DOCUMENT_MARKER)


def mask_email(value: str) -> str:
    local, at, domain = value.strip().partition("@")
    masked_local = f"{local[:2]}{EMAIL_MARKER}"
    return f"{masked_local}@{domain}" if at else masked_local


def mask_phone(value: str) -> str:
    return _reveal(only_digits(value), 2, 4, PHONE_MARKER)


def mask_random_key(value: str) -> str:
    return _reveal(value.strip(), 8, 4, RANDOM_MARKER)


_MASKERS = {
    KeyType.DOCUMENT: mask_document,
    KeyType.EMAIL: mask_email,
    KeyType.PHONE: mask_phone,
    KeyType.RANDOM: mask_random_key,
}


def mask_value(key_type: KeyType, value: str | None) -> str:
    """Mask a raw value under ``key_type``'s reveal policy."""
    return _MASKERS[key_type](value or "")


def mask_key(payment_key: PaymentKey) -> str:
    """Masked display string of ``payment_key``, dispatched by its type."""
    return mask_value(payment_key.type, payment_key.raw_value)
