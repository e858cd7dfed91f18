"""Player actions and the helpers every handler shares."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from clanquest.core.enums import ActionType
from clanquest.systems.progression import scale
from clanquest.systems.titles import title_bonus

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.models import Player
    from clanquest.core.rules import RuleBook
    from clanquest.systems.dice import DiceSource


@dataclass(frozen=True, slots=True)
class Action:
    """One player's intent for a tick.

    ``target`` is a resource name for GATHER and a location id for
    EXPLORE and ATTACK.
    """

    player_id: str
    type: ActionType
    target: str | None = None

    def __repr__(self) -> str:
        return f"Action(player={self.player_id}, {self.type.value}, target={self.target})"


def fortune_roll(player: Player, dice: DiceSource, rules: RuleBook, config: GameConfig) -> int:
    """A die roll plus the player's capped title fortune."""
    return dice() + title_bonus(player, "fortune", rules, config.title_bonus_cap)


def boosted(base: int, player: Player, kind: str, rules: RuleBook, config: GameConfig) -> int:
    """Level-scaled *base* plus the player's title bonus for *kind*."""
    return scale(base, player.level, config) + title_bonus(player, kind, rules, config.title_bonus_cap)
