"""Snapshot persistence — one pretty-printed JSON file, last write wins."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from clanquest.config import GameConfig
from clanquest.core.world_state import WorldState
from clanquest.systems.generator import default_world

logger = logging.getLogger(__name__)

_world_ta = TypeAdapter(WorldState)


class StateCorruptedError(RuntimeError):
    """The persisted snapshot cannot be parsed or does not validate."""


def world_to_dict(world: WorldState) -> dict[str, Any]:
    return _world_ta.dump_python(world, mode="json")


def world_from_dict(data: Any) -> WorldState:
    try:
        return _world_ta.validate_python(data)
    except ValidationError as exc:
        raise StateCorruptedError(f"invalid world snapshot: {exc}") from exc


class StateStore:
    """Loads and saves the world snapshot in a working directory."""

    __slots__ = ("_path", "_config")

    def __init__(self, base_dir: str | Path = ".", filename: str = "gamestate.json",
                 config: GameConfig | None = None) -> None:
        self._path = Path(base_dir) / filename
        self._config = config or GameConfig()

    @classmethod
    def from_config(cls, config: GameConfig) -> StateStore:
        return cls(config.state_dir, config.state_file, config)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> WorldState:
        """Read the snapshot, or build a fresh world when there is no file."""
        if not self.exists():
            logger.info("No state file at %s; starting a new world", self._path)
            return default_world(self._config)
        try:
            text = self._path.read_text(encoding="utf-8")
            world = _world_ta.validate_json(text)
        except (OSError, ValidationError) as exc:
            raise StateCorruptedError(f"cannot load {self._path}: {exc}") from exc
        logger.info("Loaded day %d from %s (%d players)", world.day, self._path, len(world.players))
        return world

    def save(self, world: WorldState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(world_to_dict(world), indent=2), encoding="utf-8")
        logger.info("Saved day %d to %s", world.day, self._path)
