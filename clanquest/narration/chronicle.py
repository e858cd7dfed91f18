"""Deterministic day chronicle: world log, location logs, narrative summary.

Population is counted by clan: everyone in a clan lives at its home.
The monster lair has no residents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from clanquest.core.enums import WorldEventType

if TYPE_CHECKING:
    from clanquest.core.models import Location
    from clanquest.core.world_state import WorldState


@dataclass(slots=True)
class DayLog:
    day: int
    summary: str
    population: int
    notes: list[str] = field(default_factory=list)


def location_population(world: WorldState, location: Location) -> int:
    if location.clan_id is None:
        return 0
    return sum(1 for p in world.players.values() if p.clan_id == location.clan_id)


def _crowd(population: int) -> str:
    if population == 0:
        return "The area is quiet."
    if population == 1:
        return "A lone adventurer is present here."
    if population < 4:
        return "A small group is present here."
    return "The area feels lively with many adventurers."


def _event_note(event_type: WorldEventType, data: dict) -> str:
    match event_type:
        case WorldEventType.BOSS_APPEARED:
            return f"{data.get('boss_name', 'A boss')} has appeared."
        case WorldEventType.BOSS_DEFEATED:
            return f"{data.get('boss_name', 'A boss')} was defeated."
        case WorldEventType.BOSS_DISAPPEARED:
            return f"{data.get('boss_name', 'A boss')} vanished undefeated."
        case WorldEventType.CLAN_DEFEATED:
            return f"{data.get('clan_name', 'A clan')} fell to {data.get('defeated_by_name', 'a rival')}."
    return data.get("message") or f"{data.get('name', event_type.value.title())}."


def world_log(world: WorldState) -> DayLog:
    """Global flavour line followed by one section per location."""
    population = len(world.players)
    lines = [
        "A quiet day passes across the land." if population == 0
        else "The world stirs as adventurers continue their journeys.",
        "",
        "---",
        "",
    ]
    for loc_id in sorted(world.locations):
        location = world.locations[loc_id]
        lines.append(f"### {location.name}")
        lines.append(_crowd(location_population(world, location)))
    notes = [_event_note(e.type, e.data) for e in world.events_on(world.day)]
    return DayLog(day=world.day, summary="\n".join(lines).strip(), population=population, notes=notes)


def location_logs(world: WorldState) -> dict[str, DayLog]:
    logs: dict[str, DayLog] = {}
    for loc_id in sorted(world.locations):
        location = world.locations[loc_id]
        population = location_population(world, location)
        summary = _crowd(population)
        if location.description:
            summary = f"{summary} {location.description}"
        notes = [
            _event_note(e.type, e.data)
            for e in world.events_on(world.day) if e.location_id == loc_id
        ]
        logs[loc_id] = DayLog(day=world.day, summary=summary, population=population, notes=notes)
    return logs


def narrative_summary(world: WorldState, acted: int) -> str:
    """One short paragraph describing the day just resolved."""
    parts = [f"Day {world.day} has ended."]
    if acted == 0:
        parts.append("No one stirred from their homes.")
    elif acted == 1:
        parts.append("One adventurer acted.")
    else:
        parts.append(f"{acted} adventurers acted.")
    parts.extend(_event_note(e.type, e.data) for e in world.events_on(world.day))
    standing = sum(1 for c in world.clans.values() if not c.defeated)
    parts.append(f"{standing} of {len(world.clans)} clans still stand.")
    return " ".join(parts)
