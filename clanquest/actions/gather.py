"""GatherAction — work the home location for one resource."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clanquest.actions.base import Action, boosted, fortune_roll
from clanquest.core.enums import Resource
from clanquest.systems.dice import pick
from clanquest.systems.economy import apply_delta

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)


class GatherAction:
    """Stateless handler for GATHER actions."""

    def __init__(self, config: GameConfig, rules: RuleBook, dice: DiceSource) -> None:
        self._config = config
        self._rules = rules
        self._dice = dice

    def apply(self, action: Action, world: WorldState) -> None:
        player = world.players[action.player_id]
        try:
            resource = Resource((action.target or "").lower())
        except ValueError:
            player.push_message(
                f"You cannot gather '{action.target}'. Choose food, wood or gold."
            )
            return

        clan = world.clan_of(player)
        home = world.home_of(clan.id)
        roll = fortune_roll(player, self._dice, self._rules, self._config)
        mod = world.modifier_at(home.id if home else None)
        if mod is not None:
            roll += mod.effects.fortune + mod.effects.gather

        rule = self._rules.gather.lookup(roll)
        amount = boosted(rule.reward, player, resource.value, self._rules, self._config)
        flavor = (pick(rule.messages, self._dice()) or "You gather {resource}.").format(
            resource=resource.value)

        setattr(player.meta, f"gather_{resource.value}_count",
                getattr(player.meta, f"gather_{resource.value}_count") + 1)
        setattr(player.meta, resource.value, getattr(player.meta, resource.value) + amount)

        if clan.defeated:
            player.push_message(f"{flavor} With {clan.name} fallen, there is no store left to fill.")
            return
        apply_delta(clan, resource, amount)
        player.push_message(f"{flavor} [+{amount} {resource.value}]")
        logger.debug("Day %d: %s gathered %d %s (roll %d)",
                     world.day, player.id, amount, resource.value, roll)
