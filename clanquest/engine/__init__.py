"""Tick engine: action dispatch and day orchestration."""

from clanquest.engine.dispatcher import ActionDispatcher, DispatchResult
from clanquest.engine.tick import TickOrchestrator, TickResult, tick

__all__ = ["ActionDispatcher", "DispatchResult", "TickOrchestrator", "TickResult", "tick"]
