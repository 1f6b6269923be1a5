"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flysim.api.dependencies import set_engine_manager
from flysim.api.engine_manager import EngineManager
from flysim.api.routes import api_router, stream_router
from flysim.config import SimulationConfig
from flysim.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, *, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    With ``autostart=False`` the engine is built but left stopped until a
    ``POST /api/v1/control/start``.
    """
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started (autostart=%s).", autostart)
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Fly Simulation Engine",
        description=(
            "Tick-driven fly behavior simulation with a live state stream.\n\n"
            "## API Groups\n\n"
            "- **State** — Live fly, targets, events and counters\n"
            "- **Control** — Simulation lifecycle: start, pause, resume, step, reset\n"
            "- **Config** — Read-only simulation configuration\n\n"
            "Observers may also connect to the `/ws` WebSocket, which pushes "
            "`{fly, poops}` frames at the broadcast interval.\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live simulation state: fly pose, targets, event log, counters."},
            {"name": "Control", "description": "Simulation lifecycle controls: start, pause, resume, single-step, reset, speed."},
            {"name": "Config", "description": "Read-only simulation parameters (arena size, speeds, radii, spawn cadence)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    app.include_router(stream_router)

    return app
