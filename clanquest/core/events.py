"""World-level records: events, the active boss and location modifiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clanquest.core.enums import ModifierType, Resource, WorldEventType


@dataclass(slots=True)
class WorldEvent:
    """A single entry in the append-only world event log."""

    id: str
    type: WorldEventType
    day: int
    location_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> WorldEvent:
        return WorldEvent(self.id, self.type, self.day, self.location_id, dict(self.data))


@dataclass(slots=True)
class BossState:
    """The single active world boss, if any."""

    boss_id: str
    location_id: str
    appeared_on: int
    expires_on: int
    participants: list[str] = field(default_factory=list)

    def join(self, player_id: str) -> bool:
        """Add *player_id* to the hunt.  Returns False if already present."""
        if player_id in self.participants:
            return False
        self.participants.append(player_id)
        return True

    def copy(self) -> BossState:
        return BossState(
            self.boss_id, self.location_id, self.appeared_on, self.expires_on,
            list(self.participants),
        )


@dataclass(slots=True)
class ModifierEffects:
    """Numeric effect bundle of a location modifier.

    Offsets are added to rolls at the modifier's location (fortune is
    subtracted for monster combat).  Loss percentages apply to the
    owning clan's balances at end of tick.
    """

    explore: int = 0
    gather: int = 0
    fortune: int = 0
    clan_resource_loss_pct: dict[Resource, float] = field(default_factory=dict)

    def copy(self) -> ModifierEffects:
        return ModifierEffects(
            self.explore, self.gather, self.fortune, dict(self.clan_resource_loss_pct),
        )


@dataclass(slots=True)
class LocationModifier:
    """An ephemeral environmental effect at one location."""

    id: str
    type: ModifierType
    location_id: str
    started_on: int
    effects: ModifierEffects = field(default_factory=ModifierEffects)
    messages: list[str] = field(default_factory=list)

    def copy(self) -> LocationModifier:
        return LocationModifier(
            self.id, self.type, self.location_id, self.started_on,
            self.effects.copy(), list(self.messages),
        )
