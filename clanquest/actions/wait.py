"""WaitAction — the fallback for every unparseable intent."""

from __future__ import annotations

from typing import TYPE_CHECKING

from clanquest.actions.base import Action

if TYPE_CHECKING:
    from clanquest.core.world_state import WorldState


class WaitAction:
    """Stateless handler for WAIT actions."""

    @staticmethod
    def apply(action: Action, world: WorldState) -> None:
        player = world.players[action.player_id]
        player.push_message("You take a moment to observe your surroundings.")
