"""Location modifiers — one ephemeral environmental effect per tick."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from clanquest.core.enums import LAIR_FORBIDDEN_MODIFIERS, WorldEventType
from clanquest.core.events import LocationModifier, ModifierEffects, WorldEvent
from clanquest.systems.dice import pick
from clanquest.systems.economy import apply_delta

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.rules import RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)


def apply_modifier_losses(world: WorldState) -> None:
    """Drain ``floor(balance * pct)`` of each named resource from the owning clan."""
    for mod in world.location_modifiers:
        losses = mod.effects.clan_resource_loss_pct
        if not losses:
            continue
        location = world.locations.get(mod.location_id)
        if location is None or location.clan_id is None:
            continue
        clan = world.clans.get(location.clan_id)
        if clan is None or clan.defeated:
            continue
        for resource, pct in losses.items():
            loss = math.floor(clan.balance(resource) * pct)
            if loss > 0:
                apply_delta(clan, resource, -loss)
                logger.debug("Modifier %s drained %d %s from %s",
                             mod.id, loss, resource.value, clan.id)


def spawn_modifier(
    world: WorldState,
    location_id: str | None,
    dice: DiceSource,
    rules: RuleBook,
    config: GameConfig,
) -> LocationModifier | None:
    """Maybe create this tick's modifier.

    *location_id* is the most-explored target; when None a location is
    drawn at random.  Invasions and curses never land on the monster lair.
    """
    if dice() >= config.modifier_spawn_below:
        return None

    if location_id is None:
        location_id = pick(sorted(world.locations), dice())
        if location_id is None:
            return None

    event_rule = pick(rules.location_events, dice())
    if location_id == config.monster_lair_id and event_rule.type in LAIR_FORBIDDEN_MODIFIERS:
        logger.debug("Modifier %s not allowed at %s", event_rule.id, location_id)
        return None

    location = world.locations.get(location_id)
    name = location.name if location else location_id
    message = (pick(event_rule.messages, dice()) or event_rule.name).format(location=name)

    fx = event_rule.effects
    modifier = LocationModifier(
        id=event_rule.id,
        type=event_rule.type,
        location_id=location_id,
        started_on=world.day,
        effects=ModifierEffects(
            explore=fx.explore,
            gather=fx.gather,
            fortune=fx.fortune,
            clan_resource_loss_pct=dict(fx.clan_resource_loss_pct),
        ),
        messages=[message],
    )
    world.world_events.append(WorldEvent(
        id=f"locmod_{event_rule.id}_{world.day}",
        type=WorldEventType(event_rule.type.value),
        day=world.day,
        location_id=location_id,
        data={
            "modifier_id": event_rule.id,
            "name": event_rule.name,
            "effects": {
                "explore": fx.explore,
                "gather": fx.gather,
                "fortune": fx.fortune,
                "clan_resource_loss_pct": {r.value: p for r, p in fx.clan_resource_loss_pct.items()},
            },
            "message": message,
        },
    ))
    logger.info("Day %d: %s at %s", world.day, event_rule.id, location_id)
    return modifier
