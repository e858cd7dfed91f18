"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clanquest.api.dependencies import get_game_manager
from clanquest.api.manager import GameManager
from clanquest.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: GameManager = Depends(get_game_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        world_seed=cfg.world_seed,
        monster_lair_id=cfg.monster_lair_id,
        dice_sides=cfg.dice_sides,
        scale_base=cfg.scale_base,
        scale_cap=cfg.scale_cap,
        title_bonus_cap=cfg.title_bonus_cap,
        attack_gold_cost=cfg.attack_gold_cost,
        class_advantage_bonus=cfg.class_advantage_bonus,
        boss_spawn_threshold=cfg.boss_spawn_threshold,
        modifier_spawn_below=cfg.modifier_spawn_below,
        chaotic_bonus=cfg.chaotic_bonus,
        history_size=cfg.history_size,
        surge_threshold=cfg.surge_threshold,
        state_file=cfg.state_file,
    )
