"""FastAPI application for the redemption wizard.

``create_app(settings)`` returns an app whose lifespan wires one SDK
stack (catalog, scheduler, simulator, state machine, controller) and an
empty session registry onto ``app.state``.  Every live session is torn
down when the app shuts down, so no countdown or simulation stage
outlives the event loop.  While the app runs, a background task closes
sessions left idle longer than ``session_ttl_seconds``.

Routes live under ``/api/v1`` (see :mod:`redemption_server.routes`);
``/health`` sits outside the prefix.  ``cli()`` backs the
``redemption-server`` console script.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from redemption_wizard.commands import WizardController
from redemption_wizard.messages import MessageCatalog
from redemption_wizard.render import ReceiptRenderer
from redemption_wizard.scheduler import LoopScheduler
from redemption_wizard.simulator import PaymentSimulator
from redemption_wizard.state_machine import FormStateMachine

from redemption_server.cleanup import sweep_forever
from redemption_server.config import ServerSettings, load_settings
from redemption_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from redemption_server.registry import SessionRegistry
from redemption_server.routes import register_routes

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_controller(settings: ServerSettings) -> WizardController:
    """One controller per app; sessions share it and own only their timers."""
    catalog = MessageCatalog(locale=settings.locale).load()
    scheduler = LoopScheduler()
    simulator = PaymentSimulator(
        scheduler, catalog, stage_durations_ms=settings.stage_durations_ms,
    )
    return WizardController(FormStateMachine(simulator), catalog, scheduler)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: ServerSettings = app.state.settings

    app.state.controller = build_controller(settings)
    app.state.registry = SessionRegistry(max_sessions=settings.max_sessions)
    app.state.renderer = ReceiptRenderer()
    logger.info(
        "Redemption API ready: locale=%s, stage_durations_ms=%s, max_sessions=%d, "
        "session_ttl_seconds=%s",
        settings.locale, settings.stage_durations_ms, settings.max_sessions,
        settings.session_ttl_seconds,
    )

    sweeper: asyncio.Task | None = None
    if settings.session_ttl_seconds > 0:
        sweeper = asyncio.create_task(
            sweep_forever(
                app.state.registry,
                ttl_seconds=settings.session_ttl_seconds,
                interval_seconds=settings.cleanup_interval_seconds,
            )
        )

    yield

    if sweeper is not None:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper
    closed = await app.state.registry.close_all()
    logger.info("Redemption API stopped: %d live sessions torn down", closed)


def create_app(settings: ServerSettings | None = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
    )

    app = FastAPI(
        title="Prize Redemption API",
        description="Step-gated prize redemption wizard with simulated payment confirmation",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_class, handler in (
        (ValueError, value_error_handler),
        (KeyError, key_error_handler),
        (Exception, generic_error_handler),
    ):
        app.add_exception_handler(exc_class, handler)

    @app.get("/health")
    async def health() -> dict:
        """Liveness plus the number of open sessions."""
        return {"status": "ok", "sessions": len(app.state.registry)}

    register_routes(app)
    return app


# ASGI entry for ``uvicorn redemption_server.app:app``
app = create_app()


def cli() -> None:
    """``redemption-server`` console script."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "redemption_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
