"""Enumerations used throughout the engine.

String-valued so snapshots and rule tables stay human-readable JSON.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ActionType(str, Enum):
    """Verbs a player can submit for a tick."""

    GATHER = "GATHER"
    EXPLORE = "EXPLORE"
    ATTACK = "ATTACK"
    WAIT = "WAIT"


@unique
class ActionCategory(str, Enum):
    """Resolution buckets, declared in the order they are processed."""

    GATHER = "gather"
    EXPLORE = "explore"
    ATTACK_CLAN = "attack_clan"
    ATTACK_MONSTER = "attack_monster"
    WAIT = "wait"


@unique
class PlayerClass(str, Enum):
    """Character classes.  ADVENTURER is neutral in the advantage cycle."""

    WARRIOR = "Warrior"
    LANCER = "Lancer"
    ARCHER = "Archer"
    MONK = "Monk"
    ADVENTURER = "Adventurer"


@unique
class Resource(str, Enum):
    """Clan-level resources."""

    FOOD = "food"
    WOOD = "wood"
    GOLD = "gold"


@unique
class ModifierType(str, Enum):
    """Kinds of ephemeral location modifiers."""

    WEATHER = "WEATHER"
    INVASION = "INVASION"
    BLESSING = "BLESSING"
    CURSE = "CURSE"


@unique
class WorldEventType(str, Enum):
    """Entries in the append-only world event log."""

    BOSS_APPEARED = "BOSS_APPEARED"
    BOSS_DEFEATED = "BOSS_DEFEATED"
    BOSS_DISAPPEARED = "BOSS_DISAPPEARED"
    WEATHER = "WEATHER"
    INVASION = "INVASION"
    BLESSING = "BLESSING"
    CURSE = "CURSE"
    CLAN_DEFEATED = "CLAN_DEFEATED"


# Each class beats the next one in the cycle.
CLASS_ADVANTAGE: dict[PlayerClass, PlayerClass] = {
    PlayerClass.WARRIOR: PlayerClass.LANCER,
    PlayerClass.LANCER: PlayerClass.ARCHER,
    PlayerClass.ARCHER: PlayerClass.MONK,
    PlayerClass.MONK: PlayerClass.WARRIOR,
}

# Modifier types that cannot spawn at the monster lair.
LAIR_FORBIDDEN_MODIFIERS = frozenset({ModifierType.INVASION, ModifierType.CURSE})

RESOURCES: tuple[Resource, ...] = (Resource.FOOD, Resource.WOOD, Resource.GOLD)


def has_advantage(attacker: PlayerClass, defender: PlayerClass) -> bool:
    """True when *attacker*'s class beats *defender*'s in the cycle."""
    return CLASS_ADVANTAGE.get(attacker) == defender
