"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for the tick engine and its adapters."""

    # World
    world_seed: int = 42
    monster_lair_id: str = "monsters_base"

    # Dice
    dice_sides: int = 20

    # Progression
    scale_base: float = 1.05
    scale_cap: float = 2.0
    title_bonus_cap: int = 3

    # Clan combat
    attack_gold_cost: int = 20
    class_advantage_bonus: int = 3

    # World events
    boss_spawn_threshold: int = 17          # spawn when roll > threshold
    modifier_spawn_below: int = 4           # spawn when roll < value

    # Economy
    chaotic_bonus: int = 15                 # +N to one random resource for bonus-less clans

    # History
    history_size: int = 5

    # Narration
    surge_threshold: int = 10               # smallest resource delta worth narrating

    # Persistence
    state_dir: str = "."
    state_file: str = "gamestate.json"
    rules_dir: str | None = None            # None = packaged rule tables
    replay_file: str = "replay.json"

    # Logging
    log_level: str = "INFO"
