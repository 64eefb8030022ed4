"""In-memory registry of live wizard sessions.

The registry stands where a repository would: it maps session ids to
their :class:`SessionRuntime` and is the only place sessions are torn
down.  Nothing survives a process restart; a session lives until the
page closes it or, once idle longer than the TTL, until the periodic
sweep in :mod:`redemption_server.cleanup` does.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from redemption_wizard.commands import SessionRuntime

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Live sessions keyed by ``session_id``.

    Args:
        max_sessions: refuse ``add`` beyond this many live sessions
        clock: monotonic seconds used to track the last access per session
    """

    def __init__(
        self,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_sessions = max_sessions
        self._clock = clock
        self._runtimes: dict[str, SessionRuntime] = {}
        self._last_seen: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._runtimes)

    async def add(self, runtime: SessionRuntime) -> SessionRuntime:
        """Register a freshly opened session.

        Raises ``ValueError`` when the id is taken or the registry is full;
        the new runtime's timers are stopped before raising.
        """
        session_id = runtime.session.session_id
        if session_id in self._runtimes:
            runtime.teardown()
            raise ValueError(f"Session already exists: session_id={session_id}")
        if len(self._runtimes) >= self._max_sessions:
            runtime.teardown()
            raise ValueError(
                f"Session limit reached: max_sessions={self._max_sessions}"
            )
        self._runtimes[session_id] = runtime
        self._last_seen[session_id] = self._clock()
        logger.info("Session opened: session_id=%s, live=%d", session_id, len(self._runtimes))
        return runtime

    async def get(self, session_id: str) -> SessionRuntime:
        """Return the runtime of ``session_id``.  Raises ``ValueError`` if unknown."""
        runtime = self._runtimes.get(session_id)
        if runtime is None:
            raise ValueError(f"Session not found: session_id={session_id}")
        self._last_seen[session_id] = self._clock()
        return runtime

    async def list_ids(self) -> list[str]:
        return list(self._runtimes)

    async def close(self, session_id: str) -> None:
        """Tear down and forget a session.  Raises ``ValueError`` if unknown."""
        runtime = self._runtimes.pop(session_id, None)
        if runtime is None:
            raise ValueError(f"Session not found: session_id={session_id}")
        self._last_seen.pop(session_id, None)
        runtime.teardown()
        logger.info("Session closed: session_id=%s, live=%d", session_id, len(self._runtimes))

    async def close_all(self) -> int:
        """Tear down every live session; returns how many were closed."""
        runtimes = list(self._runtimes.values())
        self._runtimes.clear()
        self._last_seen.clear()
        for runtime in runtimes:
            runtime.teardown()
        return len(runtimes)

    async def close_idle(self, ttl_seconds: float) -> int:
        """Tear down sessions not accessed for ``ttl_seconds``.

        Every ``get`` counts as an access, so a page that keeps polling
        keeps its session.  Returns how many sessions were closed.
        """
        cutoff = self._clock() - ttl_seconds
        expired = [sid for sid, seen in self._last_seen.items() if seen <= cutoff]
        for session_id in expired:
            runtime = self._runtimes.pop(session_id)
            del self._last_seen[session_id]
            runtime.teardown()
            logger.info("Session expired: session_id=%s, ttl_seconds=%s", session_id, ttl_seconds)
        return len(expired)
