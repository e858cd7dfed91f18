"""GET /api/v1/state and /api/v1/players/{player_id}/look — read the world."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from clanquest.api.dependencies import get_game_manager
from clanquest.api.manager import GameManager
from clanquest.api.schemas import (
    BossSchema,
    ClanSchema,
    LocationSchema,
    LookResponse,
    ModifierSchema,
    PlayerSummary,
    WorldEventSchema,
    WorldStateResponse,
)
from clanquest.core.models import Player

router = APIRouter()


def player_summary(player: Player) -> PlayerSummary:
    return PlayerSummary(
        id=player.id,
        name=player.name,
        clan_id=player.clan_id,
        player_class=player.player_class,
        level=player.level,
        xp=player.xp,
        titles=list(player.titles),
    )


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    events: int = Query(20, ge=0, le=500, description="Most recent world events to include"),
    manager: GameManager = Depends(get_game_manager),
) -> WorldStateResponse:
    world = manager.snapshot()
    boss = None
    if world.active_boss is not None:
        b = world.active_boss
        boss = BossSchema(
            boss_id=b.boss_id,
            name=manager.rules.boss(b.boss_id).name,
            location_id=b.location_id,
            appeared_on=b.appeared_on,
            expires_on=b.expires_on,
            participants=list(b.participants),
        )
    recent = world.world_events[-events:] if events else []
    return WorldStateResponse(
        day=world.day,
        seed=world.seed,
        clans=[
            ClanSchema(
                id=c.id, name=c.name, description=c.description,
                food=c.food, wood=c.wood, gold=c.gold, defeated_by=c.defeated_by,
                population=sum(1 for p in world.players.values() if p.clan_id == c.id),
            )
            for c in sorted(world.clans.values(), key=lambda c: c.id)
        ],
        locations=[
            LocationSchema(id=loc.id, name=loc.name, description=loc.description, clan_id=loc.clan_id)
            for loc in sorted(world.locations.values(), key=lambda loc: loc.id)
        ],
        players=[player_summary(p) for p in world.players.values()],
        active_boss=boss,
        location_modifiers=[
            ModifierSchema(id=m.id, type=m.type.value, location_id=m.location_id,
                           started_on=m.started_on, messages=list(m.messages))
            for m in world.location_modifiers
        ],
        recent_events=[
            WorldEventSchema(id=e.id, type=e.type.value, day=e.day,
                             location_id=e.location_id, message=e.data.get("message", ""))
            for e in recent
        ],
    )


@router.get("/players/{player_id}/look", response_model=LookResponse)
def get_look(
    player_id: str,
    manager: GameManager = Depends(get_game_manager),
) -> LookResponse:
    world = manager.snapshot()
    if player_id not in world.players:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    return LookResponse(player_id=player_id, day=world.day, text=manager.look(player_id))
