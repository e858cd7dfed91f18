"""Clanquest — a deterministic, dice-driven clan simulation resolved one day at a time."""

from clanquest.actions.base import Action
from clanquest.config import GameConfig
from clanquest.core.world_state import WorldState
from clanquest.engine.tick import TickOrchestrator, TickResult, tick

__all__ = ["Action", "GameConfig", "TickOrchestrator", "TickResult", "WorldState", "tick"]

__version__ = "0.1.0"
