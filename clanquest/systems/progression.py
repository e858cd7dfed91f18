"""Player progression — reward scaling and the level-up check."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from clanquest.config import GameConfig

if TYPE_CHECKING:
    from clanquest.core.models import Player

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = GameConfig()


def scale(base: int, level: int, config: GameConfig = _DEFAULT_CONFIG) -> int:
    """Level-scaled amount: ``floor(base * min(1.05 ** level, 2))``."""
    multiplier = min(config.scale_base ** level, config.scale_cap)
    return math.floor(base * multiplier)


def xp_required(level: int) -> int:
    """XP needed to advance from *level* to the next."""
    return (level + 2) ** 2


def grant_xp(player: Player, amount: int) -> bool:
    """Add *amount* xp and run a single level-up check.

    Only one level is gained per call even if the new total would clear
    several thresholds; the surplus carries over to the next grant.
    Returns True if the player levelled up.
    """
    if amount <= 0:
        return False
    player.xp += amount
    required = xp_required(player.level)
    if player.xp < required:
        return False
    player.level += 1
    player.xp -= required
    player.push_message(f"[LEVEL UP: {player.level}]")
    logger.debug("Player %s reached level %d", player.id, player.level)
    return True
