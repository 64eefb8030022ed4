"""Session endpoints — open, view, list and tear down sessions.

A session corresponds to one page load: ``POST /sessions`` is the page
opening (with optional query-string prefill), ``DELETE`` is the unload.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from redemption_wizard.commands import SessionRuntime, WizardController
from redemption_wizard.models.session import PrefillContext
from redemption_wizard.models.view import WizardView
from redemption_wizard.render import project

from redemption_server.dependencies import get_controller, get_registry, get_runtime
from redemption_server.registry import SessionRegistry

router = APIRouter(tags=["sessions"])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class CreateSessionRequest(BaseModel):
    """Body for POST /sessions.

    ``name``, ``prize`` and ``protocol`` mirror the page's query
    parameters and are used only as initial values.
    """
    session_id: str | None = None
    name: str | None = None
    prize: str | None = None
    protocol: str | None = None


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest,
    controller: WizardController = Depends(get_controller),
    registry: SessionRegistry = Depends(get_registry),
) -> WizardView:
    """Open a session at step 1 and start its countdowns.

    Returns 201 on success.  Raises 409 if ``session_id`` is already live.
    """
    prefill = PrefillContext(name=body.name, prize=body.prize, protocol=body.protocol)
    runtime = controller.open(prefill, session_id=body.session_id)
    await registry.add(runtime)
    return project(runtime, controller.machine, controller.catalog)


@router.get("/sessions")
async def list_sessions(
    registry: SessionRegistry = Depends(get_registry),
) -> list[str]:
    """List the ids of live sessions."""
    return await registry.list_ids()


@router.get("/sessions/{session_id}")
async def get_session(
    runtime: SessionRuntime = Depends(get_runtime),
    controller: WizardController = Depends(get_controller),
) -> WizardView:
    """Current view of the session.  Raises 404 if it is not live."""
    return project(runtime, controller.machine, controller.catalog)


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> None:
    """Tear the session down: cancel its timers and discard it.

    Returns 204 on success, 404 if the session is not live.
    """
    await registry.close(session_id)
