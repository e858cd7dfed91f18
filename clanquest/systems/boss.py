"""World boss lifecycle: dormant -> appeared -> defeated | disappeared.

Only one boss can be active.  While active it is resolved once per tick:
participants who joined this tick either bring it down together (meeting
the headcount and every class quota) or earn a small consolation and must
rejoin next tick.  A boss that survives past its expiry day leaves.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from clanquest.core.enums import WorldEventType
from clanquest.core.events import BossState, WorldEvent
from clanquest.systems.dice import pick
from clanquest.systems.progression import grant_xp, scale
from clanquest.systems.titles import title_bonus

if TYPE_CHECKING:
    from clanquest.config import GameConfig
    from clanquest.core.models import Player
    from clanquest.core.rules import BossRule, RuleBook
    from clanquest.core.world_state import WorldState
    from clanquest.systems.dice import DiceSource

logger = logging.getLogger(__name__)


def requirements_met(rule: BossRule, participants: list[Player]) -> bool:
    """Headcount and every per-class quota must hold at the same time."""
    if len(participants) < rule.min_participants:
        return False
    by_class = Counter(p.player_class for p in participants)
    return all(by_class[cls] >= count for cls, count in rule.requirements.items())


def _boss_event(world: WorldState, kind: WorldEventType, rule: BossRule, message: str) -> WorldEvent:
    status = kind.value.removeprefix("BOSS_").lower()
    event = WorldEvent(
        id=f"boss_{status}_{rule.id}_{world.day}",
        type=kind,
        day=world.day,
        location_id=rule.location_id,
        data={"boss_id": rule.id, "boss_name": rule.name, "message": message},
    )
    world.world_events.append(event)
    return event


def resolve_boss(
    world: WorldState, dice: DiceSource, rules: RuleBook, config: GameConfig,
) -> WorldEventType | None:
    """Resolve the active boss, if any.  Returns the terminal event type or None."""
    boss = world.active_boss
    if boss is None:
        return None

    rule = rules.boss(boss.boss_id)
    participants = [world.players[pid] for pid in boss.participants if pid in world.players]
    success = requirements_met(rule, participants)
    roll = dice()

    if success:
        message = pick(rule.success_messages, roll) or f"Defeated {rule.name}!"
        for player in participants:
            player.push_message(message)
            gain = scale(rule.reward_xp, player.level, config) + title_bonus(
                player, "xp", rules, config.title_bonus_cap)
            player.push_message(f"[+{gain} xp]")
            grant_xp(player, gain)
            player.meta.monster_killed += 1
            player.meta.boss_killed += 1
        _boss_event(world, WorldEventType.BOSS_DEFEATED, rule, message)
        world.active_boss = None
        logger.info("Day %d: %s defeated by %d players", world.day, rule.id, len(participants))
        return WorldEventType.BOSS_DEFEATED

    message = pick(rule.failure_messages, roll) or f"{rule.name} is too strong."
    for player in participants:
        player.push_message(message)
        gain = scale(rule.failure_xp, player.level, config) + title_bonus(
            player, "xp", rules, config.title_bonus_cap)
        player.push_message(f"[+{gain} xp]")
        grant_xp(player, gain)
    boss.participants.clear()

    if world.day >= boss.expires_on:
        farewell = pick(rule.disappear_messages, roll) or f"{rule.name} disappears."
        _boss_event(world, WorldEventType.BOSS_DISAPPEARED, rule, farewell)
        world.active_boss = None
        logger.info("Day %d: %s disappeared undefeated", world.day, rule.id)
        return WorldEventType.BOSS_DISAPPEARED

    logger.debug("Day %d: %s survives (%d attackers)", world.day, rule.id, len(participants))
    return None


def spawn_boss(
    world: WorldState, dice: DiceSource, rules: RuleBook, config: GameConfig,
) -> BossState | None:
    """Attempt to wake a boss.  The caller guarantees none is active."""
    if world.active_boss is not None:
        return None
    roll = dice()
    if roll <= config.boss_spawn_threshold:
        return None

    rule = pick(rules.bosses, dice())
    message = pick(rule.appear_messages, dice()) or f"{rule.name} appears!"
    boss = BossState(
        boss_id=rule.id,
        location_id=rule.location_id,
        appeared_on=world.day,
        expires_on=world.day + rule.duration_days,
    )
    world.active_boss = boss
    _boss_event(world, WorldEventType.BOSS_APPEARED, rule, message)
    logger.info("Day %d: %s appeared at %s (expires day %d)",
                world.day, rule.id, rule.location_id, boss.expires_on)
    return boss
