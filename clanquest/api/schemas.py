"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from clanquest.core.enums import ActionType, PlayerClass


# --- World state ---

class ClanSchema(BaseModel):
    id: str
    name: str
    description: str = ""
    food: int
    wood: int
    gold: int
    defeated_by: str | None = None
    population: int = 0


class LocationSchema(BaseModel):
    id: str
    name: str
    description: str = ""
    clan_id: str | None = None


class PlayerSummary(BaseModel):
    id: str
    name: str
    clan_id: str
    player_class: PlayerClass
    level: int
    xp: int
    titles: list[str] = Field(default_factory=list)


class BossSchema(BaseModel):
    boss_id: str
    name: str
    location_id: str
    appeared_on: int
    expires_on: int
    participants: list[str] = Field(default_factory=list)


class ModifierSchema(BaseModel):
    id: str
    type: str
    location_id: str
    started_on: int
    messages: list[str] = Field(default_factory=list)


class WorldEventSchema(BaseModel):
    id: str
    type: str
    day: int
    location_id: str | None = None
    message: str = ""


class WorldStateResponse(BaseModel):
    day: int
    seed: int
    clans: list[ClanSchema]
    locations: list[LocationSchema]
    players: list[PlayerSummary]
    active_boss: BossSchema | None = None
    location_modifiers: list[ModifierSchema] = Field(default_factory=list)
    recent_events: list[WorldEventSchema] = Field(default_factory=list)


class LookResponse(BaseModel):
    player_id: str
    day: int
    text: str


# --- Players ---

class EnlistRequest(BaseModel):
    player_id: str
    name: str | None = None
    player_class: PlayerClass = PlayerClass.ADVENTURER
    backstory: str = ""
    character_sheet: str | None = Field(
        None, description="Markdown sheet; overrides name, class and backstory when present.",
    )


class EnlistResponse(BaseModel):
    player: PlayerSummary
    message: str


# --- Tick ---

class ActionSchema(BaseModel):
    player_id: str
    type: ActionType
    target: str | None = None


class CommandSchema(BaseModel):
    player_id: str
    text: str


class TickRequest(BaseModel):
    actions: list[ActionSchema] = Field(default_factory=list)
    commands: list[CommandSchema] = Field(default_factory=list)
    narrate: bool = False
    record_replay: bool = False


class TickResponse(BaseModel):
    day: int
    narrative_summary: str
    player_results: dict[str, str] = Field(default_factory=dict)
    world_log: str = ""
    world_story: str | None = None
    location_stories: dict[str, str] = Field(default_factory=dict)


# --- Config ---

class GameConfigResponse(BaseModel):
    world_seed: int
    monster_lair_id: str
    dice_sides: int
    scale_base: float
    scale_cap: float
    title_bonus_cap: int
    attack_gold_cost: int
    class_advantage_bonus: int
    boss_spawn_threshold: int
    modifier_spawn_below: int
    chaotic_bonus: int
    history_size: int
    surge_threshold: int
    state_file: str
