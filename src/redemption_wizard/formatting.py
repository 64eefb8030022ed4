"""Display formatting for inputs, prize data and countdowns.

The input formatters reproduce the as-you-type masks of the redemption
page (``529.982.247-25`` and ``(11) 99999-9999``).  They are applied to
display values only; the state machine always stores raw input verbatim.
"""

from __future__ import annotations

import re
from datetime import date

from redemption_wizard.models.enums import KeyType
from redemption_wizard.validators import only_digits


def format_document_input(value: str) -> str:
    """Progressively format digits as ``000.000.000-00``."""
    digits = only_digits(value)[:11]
    digits = re.sub(r"(\d{3})(\d)", r"\1.\2", digits, count=1)
    digits = re.sub(r"(\.\d{3})(\d)", r"\1.\2", digits, count=1)
    return re.sub(r"(\.\d{3})(\d{1,2})$", r"\1-\2", digits, count=1)


def format_phone_input(value: str) -> str:
    """Progressively format digits as ``(00) 00000-0000``."""
    digits = only_digits(value)[:11]
    digits = re.sub(r"^(\d{2})(\d)", r"(\1) \2", digits, count=1)
    return re.sub(r"(\d{4,5})(\d{4})$", r"\1-\2", digits, count=1)


def format_key_input(key_type: KeyType, value: str) -> str:
    """Apply the as-you-type mask of ``key_type`` (email/random untouched)."""
    if key_type is KeyType.DOCUMENT:
        return format_document_input(value)
    if key_type is KeyType.PHONE:
        return format_phone_input(value)
    return value


def strip_currency(amount: str) -> str:
    """``"R$ 2.500,00"`` -> ``"2.500,00"``."""
    return amount.replace("R$ ", "", 1).strip()


def format_expiry(day: date) -> str:
    """pt-BR short date, e.g. ``18/11/2026``."""
    return day.strftime("%d/%m/%Y")


def format_countdown(seconds: int) -> str:
    """Seconds as ``MM:SS`` (minutes are not wrapped into hours)."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"
