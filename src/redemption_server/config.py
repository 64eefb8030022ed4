"""Redemption server settings, read once from the environment.

    SERVER_HOST / SERVER_PORT     bind address (0.0.0.0:8080)
    SERVER_CORS_ORIGINS           comma-separated origins, "*" by default
    SERVER_LOG_LEVEL              root log level (INFO)
    SERVER_LOCALE                 message catalog locale (pt_BR)
    SERVER_MAX_SESSIONS           open-session cap (1000)
    SERVER_SESSION_TTL_SECONDS    idle time before a session is swept (1800, 0 = never)
    SERVER_CLEANUP_INTERVAL_SECONDS  how often the idle sweep runs (60)
    STAGE_DURATIONS_MS            three comma-separated stage delays
"""

import os
from dataclasses import dataclass, field

from redemption_wizard.constants import DEFAULT_LOCALE, STAGE_DURATIONS_MS

MAX_SESSIONS = int(os.getenv("SERVER_MAX_SESSIONS", "1000"))
SESSION_TTL_SECONDS = float(os.getenv("SERVER_SESSION_TTL_SECONDS", "1800"))
CLEANUP_INTERVAL_SECONDS = float(os.getenv("SERVER_CLEANUP_INTERVAL_SECONDS", "60"))


def _parse_durations(raw: str) -> tuple[int, int, int]:
    values = tuple(int(v) for v in raw.split(",") if v.strip())
    if len(values) != 3:
        raise ValueError(f"STAGE_DURATIONS_MS needs 3 values, got {raw!r}")
    return values  # type: ignore[return-value]


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    locale: str = DEFAULT_LOCALE
    # Delays after simulated payment stages 1, 2 and 3
    stage_durations_ms: tuple[int, int, int] = STAGE_DURATIONS_MS
    max_sessions: int = MAX_SESSIONS
    session_ttl_seconds: float = SESSION_TTL_SECONDS
    cleanup_interval_seconds: float = CLEANUP_INTERVAL_SECONDS


def load_settings() -> ServerSettings:
    origins = [o.strip() for o in os.getenv("SERVER_CORS_ORIGINS", "*").split(",") if o.strip()]
    raw_durations = os.getenv("STAGE_DURATIONS_MS")

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        locale=os.getenv("SERVER_LOCALE", DEFAULT_LOCALE),
        stage_durations_ms=_parse_durations(raw_durations) if raw_durations else STAGE_DURATIONS_MS,
        max_sessions=MAX_SESSIONS,
        session_ttl_seconds=SESSION_TTL_SECONDS,
        cleanup_interval_seconds=CLEANUP_INTERVAL_SECONDS,
    )
