"""GameManager — owns the live snapshot and the state file for the API.

Ticks, enlistments and reads all go through one lock, so two requests
can never tick the same snapshot concurrently.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from clanquest.actions.base import Action
from clanquest.core.enums import PlayerClass
from clanquest.core.rules import load_rules
from clanquest.engine.tick import TickOrchestrator
from clanquest.ingest.parser import parse_action
from clanquest.narration.narrators import get_narrator
from clanquest.narration.story import build_location_narration_input, build_world_narration_input
from clanquest.queries.look import look
from clanquest.systems.dice import RecordingDice, SeededDice
from clanquest.systems.roster import enlist_player, shelter_conquered
from clanquest.utils.persistence import StateStore
from clanquest.utils.replay import ReplayRecorder

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.models import Player
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.engine.tick import TickResult
    from clanquest.narration.narrators import Narrator

logger = logging.getLogger(__name__)


class GameManager:
    """Thread-safe facade over the tick engine and the state store."""

    def __init__(self, config: GameConfig, rules: RuleBook | None = None,
                 narrator: Narrator | None = None) -> None:
        self._config = config
        self.config = config
        self._rules = rules or load_rules(config.rules_dir)
        self._store = StateStore.from_config(config)
        self._orchestrator = TickOrchestrator(config, self._rules)
        self._narrator = narrator
        self._lock = threading.Lock()
        self._world: WorldState = self._store.load()

    # -- public properties --

    @property
    def rules(self) -> RuleBook:
        return self._rules

    @property
    def narrator(self) -> Narrator:
        if self._narrator is None:
            self._narrator = get_narrator()
        return self._narrator

    def snapshot(self) -> WorldState:
        """A private copy of the current world."""
        with self._lock:
            return self._world.copy()

    # -- operations --

    def look(self, player_id: str) -> str:
        with self._lock:
            return look(self._world, player_id, self._rules)

    def enlist(self, player_id: str, name: str | None = None,
               player_class: PlayerClass = PlayerClass.ADVENTURER,
               backstory: str = "") -> Player:
        with self._lock:
            player = enlist_player(self._world, player_id, name, player_class, backstory)
            self._store.save(self._world)
            return player.copy()

    def parse_commands(self, commands: list[tuple[str, str]]) -> list[Action]:
        with self._lock:
            location_ids = list(self._world.locations)
        return [parse_action(pid, text, location_ids) for pid, text in commands]

    def tick(self, actions: list[Action], record_replay: bool = False) -> tuple[TickResult, WorldState]:
        """Run one day, shelter any newly conquered clan, then save.

        Returns the result and the snapshot the day started from.
        """
        with self._lock:
            previous = self._world
            dice = RecordingDice(SeededDice(previous.seed, previous.day + 1, self._config.dice_sides))
            result = self._orchestrator.run(previous, actions, dice)
            world = result.world
            shelter_conquered(previous, world)
            if record_replay:
                replay_path = Path(self._config.state_dir) / self._config.replay_file
                recorder = ReplayRecorder(replay_path, previous.seed)
                recorder.record_tick(world.day, actions, dice.rolls)
                recorder.flush()
            self._world = world
            self._store.save(world)
            return result, previous

    def narrate(self, previous: WorldState, result: TickResult) -> tuple[str, dict[str, str]]:
        """Best-effort prose for the day and each location."""
        world = result.world
        try:
            world_story = self.narrator.narrate_world(build_world_narration_input(world))
            location_stories = {
                loc_id: self.narrator.narrate_location(
                    build_location_narration_input(previous, world, loc, self._config))
                for loc_id, loc in sorted(world.locations.items())
            }
        except Exception:
            logger.exception("Narration failed for day %d", world.day)
            return "", {}
        return world_story, location_stories
