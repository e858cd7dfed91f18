"""Deterministic action dispatch: dedupe, partition, resolve in category order."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from clanquest.actions.base import Action
from clanquest.actions.combat import ClanAttackAction, MonsterAttackAction
from clanquest.actions.explore import ExploreAction
from clanquest.actions.gather import GatherAction
from clanquest.actions.wait import WaitAction
from clanquest.core.enums import ActionCategory, ActionType
from clanquest.core.rules import RuleTableError

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DispatchResult:
    """What happened while player actions resolved."""

    applied: list[Action] = field(default_factory=list)
    explored: Counter[str] = field(default_factory=Counter)
    failed: list[Action] = field(default_factory=list)

    def most_explored(self) -> str | None:
        """The most frequent exploration target; ties go to the first explored."""
        if not self.explored:
            return None
        return self.explored.most_common(1)[0][0]


class ActionDispatcher:
    """Routes each player's single action to its handler.

    Resolution policies:
    - One action per player: the last submitted wins, keeping the slot of
      that player's first submission.
    - Categories resolve fully, in ``ActionCategory`` declaration order.
    - Within a category, the deduplicated submission order is kept.
    - A crash inside one action is logged and contained; rule table
      errors always propagate.
    """

    __slots__ = ("_config", "_gather", "_explore", "_clan_attack", "_monster_attack")

    def __init__(self, config: GameConfig, rules: RuleBook, dice: DiceSource) -> None:
        self._config = config
        self._gather = GatherAction(config, rules, dice)
        self._explore = ExploreAction(config, rules, dice)
        self._clan_attack = ClanAttackAction(config, rules, dice)
        self._monster_attack = MonsterAttackAction(config, rules, dice)

    # -- public --

    @staticmethod
    def dedupe(actions: list[Action]) -> list[Action]:
        latest: dict[str, Action] = {}
        for action in actions:
            latest[action.player_id] = action
        return list(latest.values())

    def categorize(self, action: Action, world: WorldState) -> ActionCategory:
        match action.type:
            case ActionType.GATHER:
                return ActionCategory.GATHER
            case ActionType.EXPLORE:
                return ActionCategory.EXPLORE
            case ActionType.ATTACK:
                location = world.locations.get(action.target) if action.target else None
                if action.target == self._config.monster_lair_id or (
                    location is not None and location.clan_id is None
                ):
                    return ActionCategory.ATTACK_MONSTER
                return ActionCategory.ATTACK_CLAN
        return ActionCategory.WAIT

    def partition(self, actions: list[Action], world: WorldState) -> dict[ActionCategory, list[Action]]:
        buckets: dict[ActionCategory, list[Action]] = {cat: [] for cat in ActionCategory}
        for action in actions:
            if action.player_id not in world.players:
                logger.warning("Day %d: action for unknown player %r skipped", world.day, action.player_id)
                continue
            buckets[self.categorize(action, world)].append(action)
        return buckets

    def dispatch(self, actions: list[Action], world: WorldState) -> DispatchResult:
        """Resolve every action against *world* and report what was applied."""
        result = DispatchResult()
        buckets = self.partition(self.dedupe(actions), world)
        for category in ActionCategory:
            for action in buckets[category]:
                if self._apply_one(category, action, world, result):
                    result.applied.append(action)
                else:
                    result.failed.append(action)
        return result

    # -- internals --

    def _apply_one(self, category: ActionCategory, action: Action,
                   world: WorldState, result: DispatchResult) -> bool:
        try:
            match category:
                case ActionCategory.GATHER:
                    self._gather.apply(action, world)
                case ActionCategory.EXPLORE:
                    explored = self._explore.apply(action, world)
                    if explored is not None:
                        result.explored[explored] += 1
                case ActionCategory.ATTACK_CLAN:
                    self._clan_attack.apply(action, world)
                case ActionCategory.ATTACK_MONSTER:
                    self._monster_attack.apply(action, world)
                case ActionCategory.WAIT:
                    WaitAction.apply(action, world)
        except RuleTableError:
            raise
        except Exception:
            logger.exception("Day %d: %r failed; continuing with the rest", world.day, action)
            return False
        return True
