"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clanquest.api.dependencies import set_game_manager
from clanquest.api.manager import GameManager
from clanquest.api.routes import api_router
from clanquest.config import GameConfig
from clanquest.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, manager: GameManager | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    A prebuilt *manager* skips loading state from disk at startup.
    """
    if config is None:
        config = manager.config if manager is not None else GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        set_game_manager(manager or GameManager(_config))
        logger.info("API server started — day-by-day clan simulation ready.")
        yield
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Clanquest Engine",
        description=(
            "Deterministic turn-based clan simulation.\n\n"
            "## API Groups\n\n"
            "- **State** — Current world snapshot and per-player views\n"
            "- **Players** — Enlist new players\n"
            "- **Tick** — Submit actions and resolve one day\n"
            "- **Config** — Read-only game configuration\n"
            "- **Metadata** — Rule tables and enumerations\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "World snapshot: clans, locations, players, boss, modifiers, recent events."},
            {"name": "Players", "description": "Enlist players into the least populated clan."},
            {"name": "Tick", "description": "Resolve one simulated day from structured actions or raw commands."},
            {"name": "Config", "description": "Read-only engine constants (dice, scaling, costs, thresholds)."},
            {"name": "Metadata", "description": "Static rule tables loaded at startup — the single source of truth for outcomes."},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
