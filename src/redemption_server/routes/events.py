"""Event endpoint — apply one wizard command and return the new view.

Guard rejections are normal responses (``transition.accepted == false``),
not HTTP errors.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from redemption_wizard.commands import SessionRuntime, WizardController
from redemption_wizard.models.events import Transition, WizardEvent
from redemption_wizard.models.view import WizardView
from redemption_wizard.render import project

from redemption_server.dependencies import get_controller, get_runtime

router = APIRouter(tags=["events"])


class EventResponse(BaseModel):
    """Body returned by POST /sessions/{session_id}/events."""
    transition: Transition
    view: WizardView


@router.post("/sessions/{session_id}/events")
async def post_event(
    event: WizardEvent,
    runtime: SessionRuntime = Depends(get_runtime),
    controller: WizardController = Depends(get_controller),
) -> EventResponse:
    """Apply ``event`` to the session.

    A ``submit`` event only starts the simulated payment; poll
    ``/simulation`` (or this session's view) for its progress.
    """
    transition = controller.handle(runtime, event)
    return EventResponse(
        transition=transition,
        view=project(runtime, controller.machine, controller.catalog),
    )
