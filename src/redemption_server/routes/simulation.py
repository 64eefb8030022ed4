"""Simulation endpoints — poll the simulated payment and fetch the receipt."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from redemption_wizard.commands import SessionRuntime, WizardController
from redemption_wizard.models.view import SimulationView
from redemption_wizard.render import ReceiptRenderer, project

from redemption_server.dependencies import get_controller, get_renderer, get_runtime

router = APIRouter(tags=["simulation"])


@router.get("/sessions/{session_id}/simulation")
async def get_simulation(
    runtime: SessionRuntime = Depends(get_runtime),
    controller: WizardController = Depends(get_controller),
) -> SimulationView:
    """Stage, status updates so far, and the completion record once done."""
    return project(runtime, controller.machine, controller.catalog).simulation


@router.get("/sessions/{session_id}/receipt", response_class=PlainTextResponse)
async def get_receipt(
    runtime: SessionRuntime = Depends(get_runtime),
    controller: WizardController = Depends(get_controller),
    renderer: ReceiptRenderer = Depends(get_renderer),
) -> str:
    """Plain-text summary before completion, receipt after it."""
    view = project(runtime, controller.machine, controller.catalog)
    return renderer.render(view)
