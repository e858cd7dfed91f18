"""Player action handlers, one per resolution category."""

from clanquest.actions.base import Action
from clanquest.actions.combat import ClanAttackAction, MonsterAttackAction
from clanquest.actions.explore import ExploreAction
from clanquest.actions.gather import GatherAction
from clanquest.actions.wait import WaitAction

__all__ = [
    "Action",
    "ClanAttackAction",
    "ExploreAction",
    "GatherAction",
    "MonsterAttackAction",
    "WaitAction",
]
