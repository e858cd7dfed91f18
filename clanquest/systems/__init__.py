"""Game systems: dice, economy, progression, titles, bosses, modifiers, roster."""

from clanquest.systems.dice import RecordingDice, ScriptedDice, SeededDice
from clanquest.systems.generator import default_world
from clanquest.systems.progression import grant_xp, scale

__all__ = ["RecordingDice", "ScriptedDice", "SeededDice", "default_world", "grant_xp", "scale"]
