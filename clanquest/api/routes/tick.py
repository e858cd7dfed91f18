"""POST /api/v1/tick — resolve one simulated day."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clanquest.actions.base import Action
from clanquest.api.dependencies import get_game_manager
from clanquest.api.manager import GameManager
from clanquest.api.schemas import TickRequest, TickResponse

router = APIRouter()


@router.post("/tick", response_model=TickResponse)
def run_tick(
    body: TickRequest,
    manager: GameManager = Depends(get_game_manager),
) -> TickResponse:
    actions = [Action(a.player_id, a.type, a.target) for a in body.actions]
    actions += manager.parse_commands([(c.player_id, c.text) for c in body.commands])
    result, previous = manager.tick(actions, record_replay=body.record_replay)

    world_story, location_stories = None, {}
    if body.narrate:
        world_story, location_stories = manager.narrate(previous, result)

    return TickResponse(
        day=result.world.day,
        narrative_summary=result.narrative_summary,
        player_results=result.player_results,
        world_log=result.world_log.summary if result.world_log else "",
        world_story=world_story,
        location_stories=location_stories,
    )
