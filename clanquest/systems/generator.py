"""Starting world — the five clans, their homes and the monster lair."""

from __future__ import annotations

from clanquest.config import GameConfig
from clanquest.core.models import Clan, Location, ResourceBundle
from clanquest.core.world_state import WorldState

# (clan id, clan name, home id, home name, creed, daily bonus; None = chaotic)
_CLANS: tuple[tuple[str, str, str, str, str, ResourceBundle | None], ...] = (
    ("blue_clan", "The Blue Whales", "blue_base", "Blue Harbour",
     "We tread the world and endure storms not by rage, but by patience and depth.",
     ResourceBundle(food=5, wood=5, gold=5)),
    ("red_clan", "The Red Lions", "red_base", "Red Keep",
     "We are the roar before the clash. Our banners move where blood is spilled.",
     ResourceBundle(food=15)),
    ("purple_clan", "The Purple Dragons", "purple_base", "Purple Spire",
     "We walk between myth and fire. Power is not taken, it is awakened.",
     ResourceBundle(gold=15)),
    ("yellow_clan", "The Yellow Eagles", "yellow_base", "Yellow Aerie",
     "From the highest skies we watch and wait. When we strike it is already decided.",
     ResourceBundle(wood=15)),
    ("black_clan", "The Black Vipers", "black_base", "Black Hollow",
     "We do not announce our presence. By the time you feel the venom it is too late.",
     None),
)

_LAIR_DESCRIPTION = (
    "No one dares to claim this land. It breathes on its own, spawning monsters "
    "as naturally as the forest grows leaves."
)


def default_world(config: GameConfig | None = None) -> WorldState:
    """A fresh day-0 world with full clan stores and no players."""
    cfg = config or GameConfig()
    world = WorldState(day=0, seed=cfg.world_seed)
    for clan_id, clan_name, home_id, home_name, creed, bonus in _CLANS:
        world.clans[clan_id] = Clan(
            id=clan_id,
            name=clan_name,
            description=creed,
            daily_bonus=bonus.copy() if bonus else None,
        )
        world.locations[home_id] = Location(
            id=home_id,
            name=home_name,
            description=f"The base of {clan_name}.",
            clan_id=clan_id,
        )
    world.locations[cfg.monster_lair_id] = Location(
        id=cfg.monster_lair_id,
        name="Monster Lair",
        description=_LAIR_DESCRIPTION,
    )
    return world
