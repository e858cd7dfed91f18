"""Versioned API route modules."""

from fastapi import APIRouter

from clanquest.api.routes.config import router as config_router
from clanquest.api.routes.metadata import router as metadata_router
from clanquest.api.routes.players import router as players_router
from clanquest.api.routes.state import router as state_router
from clanquest.api.routes.tick import router as tick_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(state_router, tags=["State"])
api_router.include_router(players_router, tags=["Players"])
api_router.include_router(tick_router, tags=["Tick"])
api_router.include_router(config_router, tags=["Config"])
api_router.include_router(metadata_router, tags=["Metadata"])

__all__ = ["api_router"]
