"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from redemption_server.routes.events import router as events_router
from redemption_server.routes.sessions import router as sessions_router
from redemption_server.routes.simulation import router as simulation_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(sessions_router, prefix=API_PREFIX)
    app.include_router(events_router, prefix=API_PREFIX)
    app.include_router(simulation_router, prefix=API_PREFIX)
