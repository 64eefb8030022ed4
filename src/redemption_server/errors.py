"""Exception handlers for the redemption API.

User-facing guard rejections (invalid field, forward move refused,
terms not accepted) are never errors here: they come back as ``200``
responses whose transition has ``accepted: false``.

What does reach these handlers is a caller mistake reported by the SDK
or the session registry as ``ValueError``:

    message contains      status   client sees
    "already exists"      409      Session already open
    "not found"           404      Session not found
    "limit reached"       503      Too many open sessions
    "only valid"          400      Not available at this step

The full message (with session id and step) is only written to the log.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# First matching keyword wins.
_REGISTRY_ERRORS: list[tuple[str, int, str]] = [
    ("already exists", 409, "Session already open"),
    ("not found", 404, "Session not found"),
    ("limit reached", 503, "Too many open sessions"),
    ("only valid", 400, "Not available at this step"),
]

_FALLBACK = (400, "Invalid request")


def classify(message: str) -> tuple[int, str]:
    """Status code and client-safe detail for a ``ValueError`` message."""
    lowered = message.lower()
    for keyword, status, detail in _REGISTRY_ERRORS:
        if keyword in lowered:
            return status, detail
    return _FALLBACK


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    status, detail = classify(str(exc))
    logger.warning("Rejected %s %s with %d: %s", request.method, request.url.path, status, exc)
    return JSONResponse(status_code=status, content={"detail": detail})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """A lookup key the server does not know (e.g. a locale entry)."""
    logger.warning("Unknown key %s at %s %s", exc, request.method, request.url.path)
    return JSONResponse(status_code=404, content={"detail": "Not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error at %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
