"""Narration: deterministic chronicle, narration inputs and narrator backends."""

from clanquest.narration.narrators import DummyNarrator, GeminiNarrator, Narrator, get_narrator
from clanquest.narration.story import build_location_narration_input, build_world_narration_input

__all__ = [
    "DummyNarrator",
    "GeminiNarrator",
    "Narrator",
    "build_location_narration_input",
    "build_world_narration_input",
    "get_narrator",
]
