"""Field validators — pure predicates for every kind of wizard input.

Every function here is total: it accepts any value, never raises, and
returns a plain ``bool``.  Human-readable messages are looked up by the
caller in the :class:`~redemption_wizard.messages.MessageCatalog`, so the
validators stay presentation-agnostic.

The document rule is the Brazilian CPF check: 11 digits, not all equal,
with two modulo-11 check digits.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from redemption_wizard.constants import (
    DOCUMENT_ID_LENGTH,
    MIN_EMAIL_LENGTH,
    MIN_NAME_LENGTH,
    MIN_RANDOM_KEY_LENGTH,
)
from redemption_wizard.models.enums import CandidateField, KeyType

# Letters A-Z/a-z plus the Latin-1 accented letters (skipping the
# multiplication and division signs that sit inside that block).
_NAME_RE = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ\s]+")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_RE = re.compile(r"\(?[1-9]{2}\)?\s?9?[0-9]{4}-?[0-9]{4}")
_RANDOM_KEY_RE = re.compile(r"[A-Za-z0-9\-]+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def only_digits(value: str) -> str:
    """Strip every non-digit character."""
    return _NON_DIGIT_RE.sub("", value)


def _check_digit(digits: list[int], first_weight: int) -> int:
    total = sum(d * w for d, w in zip(digits, range(first_weight, 1, -1)))
    remainder = (total * 10) % 11
    return 0 if remainder in (10, 11) else remainder


def validate_name(value: Any) -> bool:
    """At least 3 characters after trimming, letters and whitespace only."""
    if not isinstance(value, str):
        return False
    trimmed = value.strip()
    return len(trimmed) >= MIN_NAME_LENGTH and _NAME_RE.fullmatch(trimmed) is not None


def validate_document_id(value: Any) -> bool:
    """CPF check: formatting is ignored, both check digits must match."""
    if not isinstance(value, str):
        return False
    cpf = only_digits(value)
    if len(cpf) != DOCUMENT_ID_LENGTH:
        return False
    # 000.000.000-00, 111.111.111-11, ... pass the arithmetic but are invalid
    if len(set(cpf)) == 1:
        return False

    digits = [int(c) for c in cpf]
    if _check_digit(digits[:9], 10) != digits[9]:
        return False
    return _check_digit(digits[:10], 11) == digits[10]


def validate_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return len(value) >= MIN_EMAIL_LENGTH and _EMAIL_RE.fullmatch(value) is not None


def validate_phone(value: Any) -> bool:
    """Area code plus 8-9 digit number, e.g. ``(11) 99999-9999``."""
    if not isinstance(value, str):
        return False
    if _PHONE_RE.fullmatch(value) is None:
        return False
    return len(only_digits(value)) in (10, 11)


def validate_random_key(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return len(value) >= MIN_RANDOM_KEY_LENGTH and _RANDOM_KEY_RE.fullmatch(value) is not None


KEY_TYPE_VALIDATORS: dict[KeyType, Callable[[Any], bool]] = {
    KeyType.DOCUMENT: validate_document_id,
    KeyType.EMAIL: validate_email,
    KeyType.PHONE: validate_phone,
    KeyType.RANDOM: validate_random_key,
}

FIELD_VALIDATORS: dict[CandidateField, Callable[[Any], bool]] = {
    CandidateField.DISPLAY_NAME: validate_name,
    CandidateField.DOCUMENT_ID: validate_document_id,
    CandidateField.PHONE: validate_phone,
    CandidateField.EMAIL: validate_email,
}


def validate_payment_key(key_type: KeyType, value: Any) -> bool:
    """Apply the rule of ``key_type``; blank values are never valid."""
    if not isinstance(value, str) or not value.strip():
        return False
    validator = KEY_TYPE_VALIDATORS.get(key_type)
    return validator(value) if validator is not None else False


def validate_field(field: CandidateField, value: Any) -> bool:
    """Dispatch to the validator of a step 1 field.

    ``CandidateField.PAYMENT_KEY`` is type-dependent and goes through
    :func:`validate_payment_key` instead; here it is always ``False``.
    """
    validator = FIELD_VALIDATORS.get(field)
    return validator(value) if validator is not None else False
