"""ExploreAction — weighted discovery at a target location."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clanquest.actions.base import Action, boosted, fortune_roll
from clanquest.core.enums import Resource
from clanquest.systems.dice import pick, weighted_pick
from clanquest.systems.economy import apply_delta
from clanquest.systems.progression import grant_xp, scale

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.models import Clan, Location, Player
    from clanquest.core.rules import OutcomeRule, RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)

# Which resource a trap costs; food is twice as likely.
TRAP_LOSSES: tuple[Resource, ...] = (Resource.FOOD, Resource.FOOD, Resource.WOOD, Resource.GOLD)


class ExploreAction:
    """Stateless handler for EXPLORE actions."""

    def __init__(self, config: GameConfig, rules: RuleBook, dice: DiceSource) -> None:
        self._config = config
        self._rules = rules
        self._dice = dice

    def apply(self, action: Action, world: WorldState) -> str | None:
        """Resolve the exploration.  Returns the explored location id, if any."""
        player = world.players[action.player_id]
        clan = world.clan_of(player)

        target_id = action.target
        if target_id is None:
            home = world.home_of(clan.id)
            target_id = home.id if home else None
        location = world.locations.get(target_id) if target_id else None
        if location is None:
            player.push_message(f"There is no place called '{action.target}' to explore.")
            return None

        roll = fortune_roll(player, self._dice, self._rules, self._config)
        mod = world.modifier_at(location.id)
        if mod is not None:
            roll += mod.effects.fortune + mod.effects.explore

        outcome = weighted_pick(self._rules.explore_weights, self._dice())
        rule = self._rules.explore[outcome.type].lookup(roll)
        player.meta.explore_count += 1

        if outcome.type == "trap":
            self._spring_trap(player, clan, location, rule)
        elif outcome.type == "xp":
            gain = boosted(rule.xp, player, "xp", self._rules, self._config)
            self._say(player, rule, location, f"[+{gain} xp]")
            grant_xp(player, gain)
        else:
            self._find_resource(player, clan, location, rule, Resource(outcome.type))

        logger.debug("Day %d: %s explored %s -> %s (roll %d)",
                     world.day, player.id, location.id, outcome.type, roll)
        return location.id

    def _say(self, player: Player, rule: OutcomeRule, location: Location, tag: str,
             resource: Resource | None = None) -> None:
        text = pick(rule.messages, self._dice()) or "You explore {location}."
        text = text.format(location=location.name, resource=resource.value if resource else "")
        player.push_message(f"{text} {tag}")

    def _find_resource(self, player: Player, clan: Clan, location: Location,
                       rule: OutcomeRule, resource: Resource) -> None:
        amount = boosted(rule.amount, player, resource.value, self._rules, self._config)
        setattr(player.meta, resource.value, getattr(player.meta, resource.value) + amount)
        if clan.defeated:
            self._say(player, rule, location,
                      "But with your clan fallen, nothing is carried home.", resource)
            return
        apply_delta(clan, resource, amount)
        self._say(player, rule, location, f"[+{amount} {resource.value}]", resource)

    def _spring_trap(self, player: Player, clan: Clan, location: Location,
                     rule: OutcomeRule) -> None:
        lost = TRAP_LOSSES[self._dice() % len(TRAP_LOSSES)]
        if rule.amount > 0:
            loss = scale(rule.amount, player.level, self._config)
            removed = -apply_delta(clan, lost, -loss)
            self._say(player, rule, location, f"[-{removed} {lost.value}]", lost)
            return
        gain = boosted(rule.xp, player, "xp", self._rules, self._config)
        self._say(player, rule, location, f"[+{gain} xp]", lost)
        grant_xp(player, gain)
