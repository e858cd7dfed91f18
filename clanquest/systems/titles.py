"""Titles — append-only achievements with small capped bonuses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from clanquest.core.rules import COMPARATORS, RuleTableError

if TYPE_CHECKING:
    from clanquest.core.models import Player
    from clanquest.core.rules import RuleBook, TitleRule
    from clanquest.core.world_state import WorldState

logger = logging.getLogger(__name__)

BONUS_KINDS = ("xp", "food", "wood", "gold", "fortune")


def read_field(player: Player, path: str) -> Any:
    """Resolve a dotted path such as ``meta.explore_count`` on *player*."""
    value: Any = player
    for part in path.split("."):
        try:
            value = getattr(value, part)
        except AttributeError as exc:
            raise RuleTableError(f"title requirement refers to unknown field {path!r}") from exc
    return value


def meets_requirement(player: Player, rule: TitleRule) -> bool:
    req = rule.requirement
    return COMPARATORS[req.op](read_field(player, req.field), req.value)


def title_bonus(player: Player, kind: str, rules: RuleBook, cap: int = 3) -> int:
    """Sum the *kind* bonus over every held title, capped at *cap*."""
    if kind not in BONUS_KINDS:
        raise ValueError(f"unknown title bonus kind {kind!r}")
    total = 0
    for title_id in player.titles:
        rule = rules.title(title_id)
        if rule is not None:
            total += getattr(rule.bonus, kind)
    return min(total, cap)


def grant_titles(world: WorldState, rules: RuleBook) -> int:
    """Unlock every newly satisfied title for every player.

    Returns the number of titles granted this pass.
    """
    granted = 0
    for player in world.players.values():
        for rule in rules.titles:
            if rule.id in player.titles:
                continue
            if meets_requirement(player, rule) and player.add_title(rule.id):
                player.push_message(f"[TITLE UNLOCKED: {rule.name}]")
                logger.info("Player %s earned title %s", player.id, rule.id)
                granted += 1
    return granted
