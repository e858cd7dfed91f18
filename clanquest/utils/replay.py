"""Replay recording — the actions and dice rolls of each tick.

Feeding a recorded tick's rolls to ``ScriptedDice`` against the same
starting snapshot reproduces that tick exactly.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from clanquest.actions.base import Action
from clanquest.core.enums import ActionType
from clanquest.engine.tick import tick
from clanquest.systems.dice import ScriptedDice

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.engine.tick import TickResult

logger = logging.getLogger(__name__)


class ReplayRecorder:
    """Accumulates tick records and flushes them to a JSON replay file."""

    __slots__ = ("_path", "_ticks", "_seed")

    def __init__(self, path: str | Path, seed: int) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return self._ticks

    def record_tick(self, day: int, actions: list[Action], rolls: list[int]) -> None:
        self._ticks.append({
            "day": day,
            "actions": [
                {"player_id": a.player_id, "type": a.type.value, "target": a.target}
                for a in actions
            ],
            "rolls": list(rolls),
        })

    def flush(self) -> None:
        """Write accumulated data to disk, appending to an existing replay."""
        previous: list[dict[str, Any]] = []
        if self._path.is_file():
            previous = load_replay(self._path).get("ticks", [])
        replay = {
            "version": "1.0",
            "seed": self._seed,
            "total_ticks": len(previous) + len(self._ticks),
            "ticks": previous + self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(replay, indent=2), encoding="utf-8")
        logger.info("Replay saved to %s (%d ticks)", self._path, replay["total_ticks"])
        self._ticks = []


def load_replay(path: str | Path) -> dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def actions_from_record(record: dict[str, Any]) -> list[Action]:
    return [
        Action(a["player_id"], ActionType(a["type"]), a.get("target"))
        for a in record.get("actions", [])
    ]


def replay_tick(
    world: WorldState,
    record: dict[str, Any],
    rules: RuleBook | None = None,
    config: GameConfig | None = None,
) -> TickResult:
    """Re-run one recorded tick from the snapshot it started from."""
    dice = ScriptedDice(record.get("rolls") or [1])
    return tick(world, actions_from_record(record), dice=dice, rules=rules, config=config)
