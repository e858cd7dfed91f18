"""Core data models, rule tables and world representation."""

from clanquest.core.enums import ActionType, ModifierType, PlayerClass, Resource, WorldEventType
from clanquest.core.events import BossState, LocationModifier, ModifierEffects, WorldEvent
from clanquest.core.models import Clan, HistoryEntry, Location, Player, PlayerMeta, ResourceBundle
from clanquest.core.rules import RuleBook, RuleTable, RuleTableError, load_rules
from clanquest.core.world_state import WorldState

__all__ = [
    "ActionType",
    "BossState",
    "Clan",
    "HistoryEntry",
    "Location",
    "LocationModifier",
    "ModifierEffects",
    "ModifierType",
    "Player",
    "PlayerClass",
    "PlayerMeta",
    "Resource",
    "ResourceBundle",
    "RuleBook",
    "RuleTable",
    "RuleTableError",
    "WorldEvent",
    "WorldEventType",
    "WorldState",
]
