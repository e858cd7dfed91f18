"""Narrator backends — turn narration inputs into prose.

The engine never reads what a narrator writes.  Backend selection via
environment variable CLANQUEST_NARRATOR:
  dummy  — deterministic template text (default, no API needed)
  gemini — Google Gemini via the google-genai SDK

API key via CLANQUEST_GEMINI_API_KEY (or GEMINI_API_KEY).
Model override via CLANQUEST_NARRATOR_MODEL.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod

from clanquest.narration.story import LocationNarrationInput, WorldNarrationInput

logger = logging.getLogger(__name__)


class Narrator(ABC):
    """Base class every narration backend implements."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Generate text from a prompt."""
        ...

    def narrate_world(self, summary: WorldNarrationInput) -> str:
        return self.complete(build_world_prompt(summary))

    def narrate_location(self, summary: LocationNarrationInput) -> str:
        return self.complete(build_location_prompt(summary))


def build_world_prompt(summary: WorldNarrationInput) -> str:
    return (
        "You are a fantasy world narrator for a turn-based strategy RPG.\n\n"
        f"Write a short world log for Day {summary.day}.\n"
        "Tone: mythic, neutral, slightly dramatic.\n"
        "Length: 2-4 sentences.\n\n"
        "Rules:\n"
        "- Do NOT invent events.\n"
        "- Only describe what appears in the input.\n"
        "- If no events occurred, describe a calm or uneventful day.\n"
        "- Do NOT mention numbers unless provided.\n"
        "- Do NOT mention players directly.\n\n"
        f"World Events (JSON):\n{json.dumps(summary.to_dict(), indent=2)}\n"
    )


def build_location_prompt(summary: LocationNarrationInput) -> str:
    return (
        "You are narrating events at a single location in a fantasy world.\n\n"
        f"Location: {summary.location}\n"
        f"Day: {summary.day}\n\n"
        "Write 2-3 sentences describing what happened here.\n\n"
        "Rules:\n"
        "- Only describe events listed below.\n"
        "- If a clan was defeated or conquered, that is the most important event.\n"
        "- If resources increased, mention only the largest gain.\n"
        "- Do NOT mention population.\n"
        "- Do NOT invent battles, weather, or characters.\n\n"
        f"Location Events (JSON):\n{json.dumps(summary.to_dict(), indent=2)}\n"
    )


class DummyNarrator(Narrator):
    """Template narration built straight from the structured input."""

    def complete(self, prompt: str) -> str:
        return "The chronicler sets down their quill; the day passes into memory."

    def narrate_world(self, summary: WorldNarrationInput) -> str:
        lines = [f"Day {summary.day} dawns over {summary.population} souls."]
        for boss in summary.boss_events:
            lines.append(f"{boss.name} {boss.status.lower()} at {boss.location}.")
        for event in summary.location_events:
            lines.append(event.message or f"{event.type.title()} touches {event.location}.")
        if len(lines) == 1:
            lines.append("The land is calm.")
        return " ".join(lines)

    def narrate_location(self, summary: LocationNarrationInput) -> str:
        if not summary.events:
            return f"A quiet day at {summary.location}."
        lines = []
        for event in summary.events:
            match event.type:
                case "CLAN_DEFEATED":
                    lines.append(f"{summary.clan} fell to {event.data['defeated_by']}.")
                case "CLAN_CONQUERED":
                    lines.append(f"{summary.clan} conquered {event.data['target_clan_name']}.")
                case "RESOURCE_SURGE":
                    lines.append(f"Stores of {event.data['resource']} swelled at {summary.location}.")
                case _:
                    lines.append(event.message or f"Strange things stir at {summary.location}.")
        return " ".join(lines)


class GeminiNarrator(Narrator):
    """Gemini API backend using the google-genai SDK."""

    def __init__(self, api_key: str | None = None, model: str | None = None) -> None:
        self.api_key = (
            api_key
            or os.environ.get("CLANQUEST_GEMINI_API_KEY")
            or os.environ.get("GEMINI_API_KEY", "")
        )
        self.model = model or os.environ.get("CLANQUEST_NARRATOR_MODEL", "gemini-2.5-flash-lite")
        if not self.api_key:
            raise ValueError("Gemini API key required")
        self._client = None

    @property
    def client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def complete(self, prompt: str) -> str:
        response = self.client.models.generate_content(model=self.model, contents=prompt)
        return (response.text or "").strip()


def get_narrator(name: str | None = None) -> Narrator:
    """Narrator named by *name*, else by ``CLANQUEST_NARRATOR`` (default dummy)."""
    backend = (name or os.environ.get("CLANQUEST_NARRATOR", "dummy")).lower()
    if backend == "gemini":
        return GeminiNarrator()
    if backend != "dummy":
        logger.warning("Unknown narrator backend %r, using dummy", backend)
    return DummyNarrator()
