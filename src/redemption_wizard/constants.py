"""Redemption wizard constants shared across the SDK.

These values are referenced by the state machine, the payment simulator,
the countdown timers, and the renderer.

Several constants can be overridden via environment variables so that
deployments can tune the simulation pacing and display defaults without
code changes.
"""

import os

# Delays (milliseconds) between the simulated payment stages.  The first
# value is the wait after stage 1 is shown, the last is the wait before
# completion.  Overridable as a comma-separated STAGE_DURATIONS_MS env var.
STAGE_DURATIONS_MS: tuple[int, int, int] = tuple(  # type: ignore[assignment]
    int(v) for v in os.getenv("STAGE_DURATIONS_MS", "3000,2000,2000").split(",")
)

# Literal prefix of the liberation protocol code; the suffix is the last
# PROTOCOL_SUFFIX_DIGITS digits of the completion timestamp in ms.
PROTOCOL_PREFIX = os.getenv("PROTOCOL_PREFIX", "TSN-LIB-2025-")
PROTOCOL_SUFFIX_DIGITS = 6

# Display defaults used when the page-load context carries no prefill.
DEFAULT_PRIZE_AMOUNT = os.getenv("DEFAULT_PRIZE_AMOUNT", "R$ 2.500,00")
DEFAULT_PROTOCOL = os.getenv("DEFAULT_PROTOCOL", "TSN-2025-001234")
PRIZE_EXPIRY_DAYS = int(os.getenv("PRIZE_EXPIRY_DAYS", "30"))

# Countdowns.  The payment window restarts when it reaches zero; the
# urgency countdown stops at zero.
PAYMENT_WINDOW_SECONDS = int(os.getenv("PAYMENT_WINDOW_SECONDS", str(15 * 60)))
URGENCY_COUNTDOWN_SECONDS = int(os.getenv("URGENCY_COUNTDOWN_SECONDS", str(10 * 60)))
COUNTDOWN_TICK_SECONDS = 1.0

# Locale of the message catalog shipped under ``locale/``.
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "pt_BR")

# Human-readable step names for API responses and logging.
STEP_NAMES: dict[int, str] = {
    1: "Personal Data",
    2: "Payment Key",
    3: "Confirmation",
    4: "Success",
}

# Minimum lengths enforced by the validators.
MIN_NAME_LENGTH = 3
MIN_EMAIL_LENGTH = 5
MIN_RANDOM_KEY_LENGTH = 32
DOCUMENT_ID_LENGTH = 11
