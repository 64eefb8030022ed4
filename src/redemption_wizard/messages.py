"""MessageCatalog — loads the localized user-facing texts from ``locale/``.

Validators and the state machine only produce booleans and reason codes;
the catalog turns those into the strings the page shows.  It is loaded
once at startup and shared read-only.

Usage::

    catalog = MessageCatalog()      # defaults to locale/pt_BR.yaml
    catalog.load()

    catalog.field_message(CandidateField.EMAIL, valid=False)
    catalog.stage_text(SimulationStage.STAGE2)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from redemption_wizard.constants import DEFAULT_LOCALE
from redemption_wizard.models.enums import (
    CandidateField,
    GuardReason,
    KeyType,
    SimulationStage,
)

logger = logging.getLogger(__name__)

_LOCALE_DIR = Path(__file__).parent / "locale"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


# --- Typed sections of a locale file ---

class ValidityMessages(BaseModel):
    valid: str
    invalid: str


class KeyTypeMessages(ValidityMessages):
    placeholder: str
    max_length: int


class StageText(BaseModel):
    title: str
    detail: str


class LocaleMessages(BaseModel):
    """Parsed contents of one ``locale/<name>.yaml`` file."""

    fields: dict[CandidateField, ValidityMessages]
    payment_key: dict[KeyType, KeyTypeMessages]
    guards: dict[GuardReason, str]
    stages: dict[SimulationStage, StageText]
    notifications: dict[str, str]


class MessageCatalog:
    """Localized message lookup.

    Args:
        locale: locale name, i.e. the YAML file stem under ``locale_dir``
        locale_dir: optional override for the directory holding locale files
    """

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        locale_dir: str | Path | None = None,
    ) -> None:
        self.locale = locale
        self._base = Path(locale_dir) if locale_dir is not None else _LOCALE_DIR
        self._messages: LocaleMessages | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "MessageCatalog":
        """Parse the locale file.  Raises ``FileNotFoundError`` if missing."""
        raw = load_yaml(self._base / f"{self.locale}.yaml")
        self._messages = LocaleMessages.model_validate(raw)
        logger.info(
            "MessageCatalog loaded: locale=%s, %d field messages, %d stages",
            self.locale, len(self._messages.fields), len(self._messages.stages),
        )
        return self

    @property
    def messages(self) -> LocaleMessages:
        if self._messages is None:
            self.load()
        return self._messages  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def field_message(self, field: CandidateField, *, valid: bool) -> str:
        entry = self.messages.fields[field]
        return entry.valid if valid else entry.invalid

    def key_message(self, key_type: KeyType, *, valid: bool) -> str:
        entry = self.messages.payment_key[key_type]
        return entry.valid if valid else entry.invalid

    def key_input(self, key_type: KeyType) -> KeyTypeMessages:
        """Placeholder and max length for the payment key input."""
        return self.messages.payment_key[key_type]

    def guard_message(self, reason: GuardReason) -> str:
        return self.messages.guards[reason]

    def stage_text(self, stage: SimulationStage) -> StageText:
        return self.messages.stages[stage]

    def notification(self, name: str) -> str:
        return self.messages.notifications[name]
