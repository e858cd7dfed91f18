"""World snapshot — owned by the orchestrator during a tick, by the caller between ticks."""

from __future__ import annotations

from dataclasses import dataclass, field

from clanquest.core.events import BossState, LocationModifier, WorldEvent
from clanquest.core.models import Clan, Location, Player


@dataclass(slots=True)
class WorldState:
    """The single source of truth for one simulated day."""

    day: int = 0
    seed: int = 42
    locations: dict[str, Location] = field(default_factory=dict)
    clans: dict[str, Clan] = field(default_factory=dict)
    players: dict[str, Player] = field(default_factory=dict)
    active_boss: BossState | None = None
    location_modifiers: list[LocationModifier] = field(default_factory=list)
    world_events: list[WorldEvent] = field(default_factory=list)

    def copy(self) -> WorldState:
        """Structural deep copy; the tick only ever mutates the copy."""
        return WorldState(
            day=self.day,
            seed=self.seed,
            locations={lid: loc.copy() for lid, loc in self.locations.items()},
            clans={cid: c.copy() for cid, c in self.clans.items()},
            players={pid: p.copy() for pid, p in self.players.items()},
            active_boss=self.active_boss.copy() if self.active_boss else None,
            location_modifiers=[m.copy() for m in self.location_modifiers],
            world_events=[e.copy() for e in self.world_events],
        )

    # -- lookups --

    def clan_of(self, player: Player) -> Clan:
        return self.clans[player.clan_id]

    def home_of(self, clan_id: str) -> Location | None:
        """Return the location owned by *clan_id*, if any."""
        for loc in self.locations.values():
            if loc.clan_id == clan_id:
                return loc
        return None

    def members(self, clan_id: str, *, alive_only: bool = True) -> list[Player]:
        return [
            p for p in self.players.values()
            if p.clan_id == clan_id and (p.alive or not alive_only)
        ]

    def modifier_at(self, location_id: str | None) -> LocationModifier | None:
        """Return the active modifier at *location_id* (at most one exists)."""
        if location_id is None:
            return None
        for mod in self.location_modifiers:
            if mod.location_id == location_id:
                return mod
        return None

    def events_on(self, day: int) -> list[WorldEvent]:
        return [e for e in self.world_events if e.day == day]
