"""Clan resource economy — deltas, the zero floor and daily bonuses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clanquest.core.enums import RESOURCES, Resource

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.models import Clan
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)


def apply_delta(clan: Clan, resource: Resource, delta: int) -> int:
    """Apply *delta* to one clan balance and return the change actually made.

    Gains are ignored for defeated clans.  Losses clamp at zero.
    """
    if delta > 0 and clan.defeated:
        return 0
    before = clan.balance(resource)
    clan.set_balance(resource, before + delta)
    return clan.balance(resource) - before


def apply_daily_bonus(world: WorldState, dice: DiceSource, config: GameConfig) -> None:
    """Grant every undefeated clan its daily bonus.

    Clans without a configured bonus get ``chaotic_bonus`` on one random
    resource instead; one roll is drawn per such clan, in clan-id order.
    """
    for clan_id in sorted(world.clans):
        clan = world.clans[clan_id]
        if clan.defeated:
            continue
        if clan.daily_bonus is None:
            resource = RESOURCES[dice() % len(RESOURCES)]
            apply_delta(clan, resource, config.chaotic_bonus)
            logger.debug("Chaotic bonus for %s: +%d %s", clan_id, config.chaotic_bonus, resource.value)
            continue
        for resource in RESOURCES:
            amount = clan.daily_bonus.get(resource)
            if amount:
                apply_delta(clan, resource, amount)
