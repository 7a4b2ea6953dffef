"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mazerun.api.dependencies import set_engine_manager
from mazerun.api.engine_manager import EngineManager
from mazerun.api.routes import api_router
from mazerun.config import MazeConfig
from mazerun.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: MazeConfig | None = None, configure_logging: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = MazeConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if configure_logging:
            setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        app.state.engine_manager = manager
        if _config.autostart:
            manager.start()
        logger.info("API server started (autostart=%s).", _config.autostart)
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Maze Run Engine",
        description=(
            "Tick-driven grid maze simulation: snapshot and input API.\n\n"
            "## API Groups\n\n"
            "- **State**: live snapshot (player, entities, round) plus the event feed\n"
            "- **Map**: grid of the current maze (refetch when `maze_epoch` changes)\n"
            "- **Input**: the four directional intents\n"
            "- **Control**: engine lifecycle: start, pause, resume, step, reset, speed\n"
            "- **Config**: read-only simulation configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live snapshot polled by the presentation layer every tick."},
            {"name": "Map", "description": "Wall/floor grid of the current maze, run-length encoded."},
            {"name": "Input", "description": "Edge-triggered directional intents, applied on the engine thread."},
            {"name": "Control", "description": "Engine lifecycle controls: start, pause, resume, single-step, reset."},
            {"name": "Config", "description": "Read-only simulation configuration parameters."},
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

    return app
