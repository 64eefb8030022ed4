"""FastAPI dependency injection — provides the controller, registry and renderer.

All three are built once in the lifespan handler and stashed on
``app.state``.  ``get_runtime`` resolves the ``{session_id}`` path
parameter to a live :class:`SessionRuntime`, raising ``ValueError``
(mapped to 404) when the session is unknown.
"""

from fastapi import Depends, Request

from redemption_wizard.commands import SessionRuntime, WizardController
from redemption_wizard.render import ReceiptRenderer

from redemption_server.registry import SessionRegistry


def get_controller(request: Request) -> WizardController:
    """Return the controller singleton from ``app.state``."""
    return request.app.state.controller


def get_registry(request: Request) -> SessionRegistry:
    """Return the session registry from ``app.state``."""
    return request.app.state.registry


def get_renderer(request: Request) -> ReceiptRenderer:
    """Return the receipt renderer from ``app.state``."""
    return request.app.state.renderer


async def get_runtime(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionRuntime:
    """Look up the live session addressed by the path."""
    return await registry.get(session_id)
