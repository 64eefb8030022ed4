"""Idle-session TTL sweep.

Sessions are only closed explicitly by ``DELETE /sessions/{id}``, so a
page that is simply abandoned would keep its countdowns ticking and its
slot in the registry forever.  The app lifespan runs :func:`sweep_forever`
as a background task that tears down every session not accessed for
``SERVER_SESSION_TTL_SECONDS``.

A TTL of ``0`` disables the sweep.
"""

from __future__ import annotations

import asyncio
import logging

from redemption_server.config import SESSION_TTL_SECONDS
from redemption_server.registry import SessionRegistry

logger = logging.getLogger(__name__)


async def run_cleanup(
    registry: SessionRegistry,
    *,
    ttl_seconds: float = SESSION_TTL_SECONDS,
) -> int:
    """Close idle sessions once and return how many were torn down."""
    closed = await registry.close_idle(ttl_seconds)
    if closed:
        logger.info(
            "Cleanup complete: action=close_idle, closed=%d, ttl_seconds=%s, live=%d",
            closed, ttl_seconds, len(registry),
        )
    return closed


async def sweep_forever(
    registry: SessionRegistry,
    *,
    ttl_seconds: float,
    interval_seconds: float,
) -> None:
    """Run :func:`run_cleanup` every ``interval_seconds`` until cancelled."""
    logger.info(
        "Idle sweep started: ttl_seconds=%s, interval_seconds=%s",
        ttl_seconds, interval_seconds,
    )
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await run_cleanup(registry, ttl_seconds=ttl_seconds)
        except Exception:
            logger.exception("Idle sweep failed; retrying in %ss", interval_seconds)
