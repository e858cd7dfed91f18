"""Combat handlers — clan raids and monster fights.

Clan raids cost the attacking clan a fixed amount of gold up front.
Both sides roll; whoever holds the class advantage adds a flat bonus
before the difference is taken.  A win steals food, part of which the
defender's wood can absorb.  A clan whose food is taken down to zero is
conquered: it loses its remaining wood and gold and never gains again.

Monster fights are single-roll lookups, except at a location with an
active boss, where attacking only joins the hunt.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clanquest.actions.base import Action, boosted, fortune_roll
from clanquest.core.enums import PlayerClass, Resource, WorldEventType, has_advantage
from clanquest.core.events import WorldEvent
from clanquest.systems.dice import pick
from clanquest.systems.economy import apply_delta
from clanquest.systems.progression import grant_xp, scale

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.models import Clan, Location, Player
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)

DESTRUCTION_MESSAGES: tuple[str, ...] = (
    "{clan} has fallen! {conqueror} stripped its stores bare.",
    "The banners of {clan} burn. {clan} has fallen to {conqueror}.",
    "{conqueror} sweeps through {location}. {clan} has fallen.",
)


class ClanAttackAction:
    """Stateless handler for ATTACK actions aimed at another clan's home."""

    def __init__(self, config: GameConfig, rules: RuleBook, dice: DiceSource) -> None:
        self._config = config
        self._rules = rules
        self._dice = dice

    def validate(self, action: Action, world: WorldState) -> tuple[Location, Clan] | None:
        """Check the raid's preconditions in order, messaging the attacker on failure."""
        attacker = world.players[action.player_id]
        location = world.locations.get(action.target) if action.target else None
        if location is None:
            attacker.push_message(f"There is no place called '{action.target}' to attack.")
            return None
        target_clan = world.clans.get(location.clan_id) if location.clan_id else None
        if target_clan is None:
            attacker.push_message(f"No clan holds {location.name}; there is nobody to raid.")
            return None
        if target_clan.defeated:
            attacker.push_message(f"{target_clan.name} has already been conquered.")
            return None
        if target_clan.food <= 0:
            attacker.push_message(f"{target_clan.name} has no food left to take.")
            return None
        if target_clan.id == attacker.clan_id:
            attacker.push_message("You cannot attack your own clan.")
            return None
        own_clan = world.clan_of(attacker)
        if own_clan.gold < self._config.attack_gold_cost:
            attacker.push_message(
                f"{own_clan.name} lacks the gold to fund a raid "
                f"({self._config.attack_gold_cost} gold needed)."
            )
            return None
        return location, target_clan

    def apply(self, action: Action, world: WorldState) -> None:
        checked = self.validate(action, world)
        if checked is None:
            return
        location, target_clan = checked
        cfg = self._config
        attacker = world.players[action.player_id]
        own_clan = world.clan_of(attacker)

        apply_delta(own_clan, Resource.GOLD, -cfg.attack_gold_cost)
        attacker.meta.attack_count += 1

        defenders = world.members(target_clan.id)
        defender = defenders[self._dice() % len(defenders)] if defenders else None
        defender_class = defender.player_class if defender else PlayerClass.ADVENTURER

        attack_roll = fortune_roll(attacker, self._dice, self._rules, cfg)
        if defender is not None:
            defend_roll = fortune_roll(defender, self._dice, self._rules, cfg)
        else:
            # Nobody home: a level-0 stand-in with no titles defends.
            defend_roll = self._dice()
        if has_advantage(attacker.player_class, defender_class):
            attack_roll += cfg.class_advantage_bonus
        elif has_advantage(defender_class, attacker.player_class):
            defend_roll += cfg.class_advantage_bonus
        diff = attack_roll - defend_roll

        if diff > 0:
            self._win(world, attacker, defender, own_clan, target_clan, location, diff)
        else:
            self._lose(attacker, defender, own_clan, location, diff)

        logger.info("Day %d: %s raided %s (%d vs %d)",
                    world.day, attacker.id, target_clan.id, attack_roll, defend_roll)

    def _win(self, world: WorldState, attacker: Player, defender: Player | None,
             own_clan: Clan, target_clan: Clan, location: Location, diff: int) -> None:
        rule = self._rules.attack_win.lookup(diff)
        steal = scale(rule.food_steal, attacker.level, self._config)
        shield = min(scale(rule.wood_shield, attacker.level, self._config), target_clan.wood, steal)
        apply_delta(target_clan, Resource.WOOD, -shield)
        taken = -apply_delta(target_clan, Resource.FOOD, -(steal - shield))
        credited = apply_delta(own_clan, Resource.FOOD, steal - shield)

        attacker.meta.player_wins += 1
        attacker.meta.attack_win_streak += 1
        attacker.meta.attack_lose_streak = 0

        text = (pick(rule.messages, self._dice()) or "You win the raid on {location}.").format(
            location=location.name)
        attacker.push_message(f"{text} [+{credited} food]")
        if defender is not None:
            defender.meta.player_losses += 1
            defender.meta.attacked_count += 1
            defender.push_message(
                f"{attacker.name} of {own_clan.name} raided {location.name}. "
                f"Your clan lost {shield} wood and {taken} food."
            )

        if target_clan.food == 0:
            self._conquer(world, attacker, own_clan, target_clan, location)

    def _lose(self, attacker: Player, defender: Player | None,
              own_clan: Clan, location: Location, diff: int) -> None:
        rule = self._rules.attack_lose.lookup(diff)
        attacker.meta.player_losses += 1
        attacker.meta.attack_lose_streak += 1
        attacker.meta.attack_win_streak = 0

        text = (pick(rule.messages, self._dice()) or "Your raid on {location} fails.").format(
            location=location.name)
        attacker.push_message(text)
        if defender is not None:
            defender.meta.player_wins += 1
            defender.meta.attacked_count += 1
            defender.push_message(
                f"{attacker.name} of {own_clan.name} attacked {location.name}, "
                f"but you held them off."
            )

    def _conquer(self, world: WorldState, attacker: Player, own_clan: Clan,
                 target_clan: Clan, location: Location) -> None:
        target_clan.defeated_by = own_clan.id
        target_clan.set_balance(Resource.WOOD, 0)
        target_clan.set_balance(Resource.GOLD, 0)

        text = pick(DESTRUCTION_MESSAGES, self._dice()).format(
            clan=target_clan.name, conqueror=own_clan.name, location=location.name)
        for member in world.members(target_clan.id, alive_only=False):
            member.push_message(text)
        attacker.push_message(text)

        world.world_events.append(WorldEvent(
            id=f"clan_defeated_{target_clan.id}_{world.day}",
            type=WorldEventType.CLAN_DEFEATED,
            day=world.day,
            location_id=location.id,
            data={
                "clan_id": target_clan.id,
                "clan_name": target_clan.name,
                "defeated_by": own_clan.id,
                "defeated_by_name": own_clan.name,
                "message": text,
            },
        ))
        logger.info("Day %d: %s conquered %s", world.day, own_clan.id, target_clan.id)


class MonsterAttackAction:
    """Stateless handler for ATTACK actions aimed at the monster lair."""

    def __init__(self, config: GameConfig, rules: RuleBook, dice: DiceSource) -> None:
        self._config = config
        self._rules = rules
        self._dice = dice

    def apply(self, action: Action, world: WorldState) -> None:
        player = world.players[action.player_id]
        boss = world.active_boss
        if boss is not None and boss.location_id == action.target:
            name = self._rules.boss(boss.boss_id).name
            if boss.join(player.id):
                logger.debug("Day %d: %s joined the hunt for %s", world.day, player.id, boss.boss_id)
            player.push_message(f"You join the hunt against {name}. Rally your allies!")
            return

        roll = fortune_roll(player, self._dice, self._rules, self._config)
        mod = world.modifier_at(action.target)
        if mod is not None:
            roll -= mod.effects.fortune

        rule = self._rules.monster.lookup(roll)
        gain = boosted(rule.xp, player, "xp", self._rules, self._config)
        player.meta.monster_encountered += 1
        if rule.kill:
            player.meta.monster_killed += 1

        text = pick(rule.messages, self._dice()) or "You fight the monsters."
        player.push_message(f"{text} [+{gain} xp]")
        grant_xp(player, gain)
        logger.debug("Day %d: %s fought monsters (roll %d, +%d xp)", world.day, player.id, roll, gain)
