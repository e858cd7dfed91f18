"""TickOrchestrator — resolves one simulated day.

Phase cycle:
  1. Advance — copy the snapshot, advance the day, clear message buffers
  2. Actions — dedupe, partition and resolve player actions by category
  3. World — modifier losses, boss resolution, titles
  4. Spawning — boss or location modifier, never both
  5. Upkeep — daily clan bonuses, per-player history

The caller's snapshot is never touched; all work happens on a copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from clanquest.config import GameConfig
from clanquest.core.models import HistoryEntry
from clanquest.core.rules import default_rules
from clanquest.engine.dispatcher import ActionDispatcher
from clanquest.narration.chronicle import DayLog, location_logs, narrative_summary, world_log
from clanquest.systems.boss import resolve_boss, spawn_boss
from clanquest.systems.dice import SeededDice
from clanquest.systems.economy import apply_daily_bonus
from clanquest.systems.modifiers import apply_modifier_losses, spawn_modifier
from clanquest.systems.titles import grant_titles

if TYPE_CHECKING:
    from clanquest.actions.base import Action
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TickResult:
    """The successor snapshot plus everything produced while computing it."""

    world: WorldState
    narrative_summary: str
    player_results: dict[str, str] = field(default_factory=dict)
    applied: list[Action] = field(default_factory=list)
    world_log: DayLog | None = None
    location_logs: dict[str, DayLog] = field(default_factory=dict)


class TickOrchestrator:
    """Sequences every system once per simulated day."""

    __slots__ = ("_config", "_rules")

    def __init__(self, config: GameConfig | None = None, rules: RuleBook | None = None) -> None:
        self._config = config or GameConfig()
        self._rules = rules or default_rules()

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def rules(self) -> RuleBook:
        return self._rules

    def run(self, snapshot: WorldState, actions: list[Action],
            dice: DiceSource | None = None) -> TickResult:
        cfg = self._config
        world = snapshot.copy()
        world.day += 1
        if dice is None:
            dice = SeededDice(world.seed, world.day, cfg.dice_sides)
        for player in world.players.values():
            player.messages.clear()

        dispatcher = ActionDispatcher(cfg, self._rules, dice)
        dispatched = dispatcher.dispatch(actions, world)

        apply_modifier_losses(world)
        resolve_boss(world, dice, self._rules, cfg)
        grant_titles(world, self._rules)
        self._spawn(world, dispatched.most_explored(), dice)
        apply_daily_bonus(world, dice, cfg)

        acted = dispatched.applied + dispatched.failed
        self._record_history(world, acted)

        result = TickResult(
            world=world,
            narrative_summary=narrative_summary(world, len(acted)),
            player_results={
                a.player_id: f"**[Day {world.day} Result]**\n{world.players[a.player_id].message}"
                for a in acted
            },
            applied=dispatched.applied,
            world_log=world_log(world),
            location_logs=location_logs(world),
        )
        logger.info("Day %d resolved: %d actions applied, %d failed",
                    world.day, len(dispatched.applied), len(dispatched.failed))
        return result

    # -- phases --

    def _spawn(self, world: WorldState, most_explored: str | None, dice: DiceSource) -> None:
        """Decide between a boss spawn and a fresh location modifier.

        The modifier list is replaced every tick.  When the lair is the
        most explored target only a boss may appear, and only if none is
        still active.
        """
        if most_explored is not None and most_explored == self._config.monster_lair_id:
            world.location_modifiers = []
            if world.active_boss is None:
                spawn_boss(world, dice, self._rules, self._config)
            return
        modifier = spawn_modifier(world, most_explored, dice, self._rules, self._config)
        world.location_modifiers = [modifier] if modifier is not None else []

    def _record_history(self, world: WorldState, acted: list[Action]) -> None:
        keep = self._config.history_size
        for action in acted:
            player = world.players[action.player_id]
            player.meta.last_action_day = world.day
            player.history.append(HistoryEntry(
                day=world.day,
                action=action.type.value,
                target=action.target,
                messages=list(player.messages),
            ))
            if len(player.history) > keep:
                del player.history[:-keep]


def tick(
    snapshot: WorldState,
    actions: list[Action],
    dice: DiceSource | None = None,
    rules: RuleBook | None = None,
    config: GameConfig | None = None,
) -> TickResult:
    """Resolve one day.  Pure for a fixed dice sequence and action list."""
    return TickOrchestrator(config, rules).run(snapshot, actions, dice)
