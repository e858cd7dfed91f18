"""POST /api/v1/players — enlist a new player."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from clanquest.api.dependencies import get_game_manager
from clanquest.api.manager import GameManager
from clanquest.api.routes.state import player_summary
from clanquest.api.schemas import EnlistRequest, EnlistResponse
from clanquest.ingest.parser import parse_character_sheet
from clanquest.systems.roster import RosterError

router = APIRouter()


@router.post("/players", response_model=EnlistResponse, status_code=201)
def enlist(
    body: EnlistRequest,
    manager: GameManager = Depends(get_game_manager),
) -> EnlistResponse:
    name, player_class, backstory = body.name, body.player_class, body.backstory
    if body.character_sheet:
        sheet = parse_character_sheet(body.character_sheet)
        name = sheet.name or name
        player_class = sheet.player_class or player_class
        backstory = sheet.backstory or backstory
    try:
        player = manager.enlist(body.player_id, name, player_class, backstory)
    except RosterError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return EnlistResponse(player=player_summary(player), message=player.message)
