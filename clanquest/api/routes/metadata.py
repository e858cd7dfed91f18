"""GET /api/v1/metadata/rules — every rule table, serialized from the rule book."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from clanquest.api.dependencies import get_game_manager
from clanquest.api.manager import GameManager
from clanquest.core.enums import ActionType, ModifierType, PlayerClass, Resource

router = APIRouter()


@router.get("/metadata/rules")
def get_rules(
    manager: GameManager = Depends(get_game_manager),
) -> dict[str, Any]:
    return manager.rules.as_dict()


@router.get("/metadata/enums")
def get_enums() -> dict[str, list[str]]:
    return {
        "action_types": [a.value for a in ActionType],
        "player_classes": [c.value for c in PlayerClass],
        "resources": [r.value for r in Resource],
        "modifier_types": [m.value for m in ModifierType],
    }
