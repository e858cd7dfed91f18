"""Core data models: Location, Clan, Player and their bookkeeping records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from clanquest.core.enums import PlayerClass, Resource


@dataclass(slots=True)
class ResourceBundle:
    """A food/wood/gold triple, used for deltas and daily bonuses."""

    food: int = 0
    wood: int = 0
    gold: int = 0

    def get(self, resource: Resource) -> int:
        return getattr(self, resource.value)

    def copy(self) -> ResourceBundle:
        return ResourceBundle(self.food, self.wood, self.gold)


@dataclass(slots=True)
class Location:
    """A place on the map.  Every clan owns exactly one; the lair is unowned."""

    id: str
    name: str
    description: str = ""
    clan_id: str | None = None

    def copy(self) -> Location:
        return Location(self.id, self.name, self.description, self.clan_id)


@dataclass(slots=True)
class Clan:
    """The persistent economic unit players belong to.

    Balances never go negative.  Once ``defeated_by`` is set the clan
    stops receiving clan-level gains for good.
    """

    id: str
    name: str
    description: str = ""
    food: int = 100
    wood: int = 100
    gold: int = 100
    defeated_by: str | None = None
    daily_bonus: ResourceBundle | None = None   # None = chaotic archetype

    @property
    def defeated(self) -> bool:
        return self.defeated_by is not None

    def balance(self, resource: Resource) -> int:
        return getattr(self, resource.value)

    def set_balance(self, resource: Resource, value: int) -> None:
        setattr(self, resource.value, max(0, value))

    def copy(self) -> Clan:
        return Clan(
            id=self.id,
            name=self.name,
            description=self.description,
            food=self.food,
            wood=self.wood,
            gold=self.gold,
            defeated_by=self.defeated_by,
            daily_bonus=self.daily_bonus.copy() if self.daily_bonus else None,
        )


@dataclass(slots=True)
class PlayerMeta:
    """Lifetime counters.  Title requirements point into these fields."""

    joined_day: int = 0
    last_action_day: int = 0
    # Gathering
    gather_food_count: int = 0
    gather_wood_count: int = 0
    gather_gold_count: int = 0
    # Personal lifetime resource totals (accrue even for defeated clans)
    food: int = 0
    wood: int = 0
    gold: int = 0
    # Exploration & combat
    explore_count: int = 0
    attack_count: int = 0
    player_wins: int = 0
    player_losses: int = 0
    monster_killed: int = 0
    boss_killed: int = 0
    monster_encountered: int = 0
    attack_win_streak: int = 0
    attack_lose_streak: int = 0
    attacked_count: int = 0

    def copy(self) -> PlayerMeta:
        # Flat ints only, so a shallow replace is a full copy.
        return replace(self)


@dataclass(slots=True)
class HistoryEntry:
    """One remembered day of a player's activity."""

    day: int
    action: str
    target: str | None = None
    messages: list[str] = field(default_factory=list)

    def copy(self) -> HistoryEntry:
        return HistoryEntry(self.day, self.action, self.target, list(self.messages))


@dataclass(slots=True)
class Player:
    """A participant in the world, always a member of exactly one clan."""

    id: str
    name: str
    clan_id: str
    player_class: PlayerClass = PlayerClass.ADVENTURER
    level: int = 1
    xp: int = 0
    alive: bool = True
    backstory: str = ""
    titles: list[str] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)   # cleared every tick
    meta: PlayerMeta = field(default_factory=PlayerMeta)
    history: list[HistoryEntry] = field(default_factory=list)

    @property
    def message(self) -> str:
        """The tick's outbound messages as a single block of text."""
        return "\n".join(self.messages)

    def push_message(self, text: str) -> None:
        self.messages.append(text)

    def add_title(self, title_id: str) -> bool:
        """Append *title_id* unless already held.  Returns True if added."""
        if title_id in self.titles:
            return False
        self.titles.append(title_id)
        return True

    def copy(self) -> Player:
        return Player(
            id=self.id,
            name=self.name,
            clan_id=self.clan_id,
            player_class=self.player_class,
            level=self.level,
            xp=self.xp,
            alive=self.alive,
            backstory=self.backstory,
            titles=list(self.titles),
            messages=list(self.messages),
            meta=self.meta.copy(),
            history=[h.copy() for h in self.history],
        )
