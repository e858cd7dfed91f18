"""Roster management — enlisting newcomers and sheltering the conquered."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clanquest.core.enums import PlayerClass
from clanquest.core.models import Player, PlayerMeta

if TYPE_CHECKING:
    from clanquest.core.models import Clan
    from clanquest.core.world_state import WorldState

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """A roster change could not be made."""


def population(world: WorldState, clan_id: str) -> int:
    return sum(1 for p in world.players.values() if p.clan_id == clan_id)


def least_populated_clan(world: WorldState, exclude: str | None = None) -> Clan | None:
    """The undefeated clan with the fewest members; ties go to the lowest id."""
    candidates = [
        world.clans[cid] for cid in sorted(world.clans)
        if not world.clans[cid].defeated and cid != exclude
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda c: population(world, c.id))


def enlist_player(
    world: WorldState,
    player_id: str,
    name: str | None = None,
    player_class: PlayerClass = PlayerClass.ADVENTURER,
    backstory: str = "",
) -> Player:
    """Create a level-1 player in the least populated undefeated clan."""
    if player_id in world.players:
        raise RosterError(f"player {player_id!r} is already enlisted")
    clan = least_populated_clan(world)
    if clan is None:
        raise RosterError("no undefeated clan can take new members")

    player = Player(
        id=player_id,
        name=name or player_id,
        clan_id=clan.id,
        player_class=player_class,
        backstory=backstory,
        meta=PlayerMeta(joined_day=world.day, last_action_day=world.day),
    )
    home = world.home_of(clan.id)
    where = f" Your home is {home.name}." if home else ""
    player.push_message(
        f"Welcome, {player.name} the {player_class.value}! You have joined {clan.name}.{where}"
    )
    world.players[player_id] = player
    logger.info("Enlisted %s (%s) into %s", player_id, player_class.value, clan.id)
    return player


def offer_refuge(world: WorldState, defeated_clan_id: str) -> list[Player]:
    """Move every member of a defeated clan to the least populated survivor.

    Each refugee is placed one at a time so a large exodus spreads across
    clans.  Returns the moved players.
    """
    clan = world.clans.get(defeated_clan_id)
    if clan is None:
        raise RosterError(f"unknown clan {defeated_clan_id!r}")
    if not clan.defeated:
        raise RosterError(f"clan {defeated_clan_id!r} has not been defeated")

    moved: list[Player] = []
    for pid in sorted(world.players):
        player = world.players[pid]
        if player.clan_id != defeated_clan_id:
            continue
        haven = least_populated_clan(world, exclude=defeated_clan_id)
        if haven is None:
            break
        player.clan_id = haven.id
        player.push_message(
            f"With {clan.name} fallen, {haven.name} offers you refuge. You are now one of them."
        )
        moved.append(player)
    if moved:
        logger.info("%d refugees left %s", len(moved), defeated_clan_id)
    return moved


def shelter_conquered(previous: WorldState, world: WorldState) -> list[Player]:
    """Offer refuge to members of every clan conquered between the two snapshots."""
    moved: list[Player] = []
    for clan_id, clan in world.clans.items():
        before = previous.clans.get(clan_id)
        if clan.defeated and (before is None or not before.defeated):
            moved.extend(offer_refuge(world, clan_id))
    return moved
