"""Structured narration inputs for the day and for each location.

These summaries are the only thing a narrator sees.  They carry event
facts, never player names.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from clanquest.config import GameConfig
from clanquest.core.enums import RESOURCES, ModifierType, WorldEventType

if TYPE_CHECKING:
    from clanquest.core.models import Location
    from clanquest.core.world_state import WorldState

_BOSS_EVENTS = {
    WorldEventType.BOSS_APPEARED: "APPEARED",
    WorldEventType.BOSS_DEFEATED: "DEFEATED",
    WorldEventType.BOSS_DISAPPEARED: "DISAPPEARED",
}
_MODIFIER_EVENTS = frozenset(WorldEventType(t.value) for t in ModifierType)

_DEFAULT_CONFIG = GameConfig()


@dataclass(slots=True)
class BossEventSummary:
    name: str
    location: str
    status: str
    message: str = ""


@dataclass(slots=True)
class LocationEventSummary:
    type: str
    location: str
    effects: dict[str, Any] = field(default_factory=dict)
    message: str = ""


@dataclass(slots=True)
class WorldNarrationInput:
    day: int
    population: int
    boss_events: list[BossEventSummary] = field(default_factory=list)
    location_events: list[LocationEventSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class LocationStoryEvent:
    type: str
    data: dict[str, Any] = field(default_factory=dict)
    message: str | None = None


@dataclass(slots=True)
class LocationNarrationInput:
    day: int
    location: str
    clan: str | None
    population: int
    events: list[LocationStoryEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _location_name(world: WorldState, location_id: str | None) -> str:
    if location_id is None:
        return "Unknown"
    location = world.locations.get(location_id)
    return location.name if location else location_id


def build_world_narration_input(world: WorldState) -> WorldNarrationInput:
    """Today's boss and modifier events plus total population."""
    summary = WorldNarrationInput(day=world.day, population=len(world.players))
    for event in world.events_on(world.day):
        if event.type in _BOSS_EVENTS:
            summary.boss_events.append(BossEventSummary(
                name=event.data.get("boss_name", "Boss"),
                location=_location_name(world, event.location_id),
                status=_BOSS_EVENTS[event.type],
                message=event.data.get("message", ""),
            ))
        elif event.type in _MODIFIER_EVENTS:
            summary.location_events.append(LocationEventSummary(
                type=event.type.value,
                location=_location_name(world, event.location_id),
                effects=dict(event.data.get("effects", {})),
                message=event.data.get("message", ""),
            ))
    return summary


def build_location_narration_input(
    previous: WorldState,
    world: WorldState,
    location: Location,
    config: GameConfig = _DEFAULT_CONFIG,
) -> LocationNarrationInput:
    """What happened at *location* between *previous* and *world*."""
    threshold = config.surge_threshold
    clan_id = location.clan_id
    prev_clan = previous.clans.get(clan_id) if clan_id else None
    clan = world.clans.get(clan_id) if clan_id else None
    events: list[LocationStoryEvent] = []

    for mod in world.location_modifiers:
        if mod.location_id != location.id:
            continue
        events.append(LocationStoryEvent(
            type="LOCATION_EVENT",
            data={
                "event_type": mod.type.value,
                "effects": {
                    "explore": mod.effects.explore,
                    "gather": mod.effects.gather,
                    "fortune": mod.effects.fortune,
                    "clan_resource_loss_pct": {
                        r.value: p for r, p in mod.effects.clan_resource_loss_pct.items()
                    },
                },
            },
            message=mod.messages[0] if mod.messages else None,
        ))

    if prev_clan is not None and clan is not None:
        if not prev_clan.defeated and clan.defeated:
            conqueror = world.clans.get(clan.defeated_by)
            events.append(LocationStoryEvent(
                type="CLAN_DEFEATED",
                data={"defeated_by": conqueror.name if conqueror else clan.defeated_by},
            ))

    if clan is not None:
        for other in world.clans.values():
            before = previous.clans.get(other.id)
            if other.defeated_by == clan.id and (before is None or not before.defeated):
                events.append(LocationStoryEvent(
                    type="CLAN_CONQUERED",
                    data={"target_clan_name": other.name},
                ))
                break

    if prev_clan is not None and clan is not None and not clan.defeated:
        deltas = [(r, clan.balance(r) - prev_clan.balance(r)) for r in RESOURCES]
        gains = sorted((d for d in deltas if d[1] > 0), key=lambda d: d[1], reverse=True)
        if gains and gains[0][1] >= threshold:
            resource, amount = gains[0]
            events.append(LocationStoryEvent(
                type="RESOURCE_SURGE",
                data={"resource": resource.value, "amount": amount},
            ))

    return LocationNarrationInput(
        day=world.day,
        location=location.name,
        clan=clan.name if clan else None,
        population=sum(1 for p in world.players.values() if clan_id and p.clan_id == clan_id),
        events=events,
    )
