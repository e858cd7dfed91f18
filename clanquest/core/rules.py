"""Rule tables — static, dice-keyed outcome tables loaded once from JSON.

Every range list is an ordered sequence of entries, each optionally gated
by a dice range.  Lookup returns the first gated entry containing the
roll, else the single gateless *default* entry.  Tables are validated at
load time: exactly one default per list, or the load fails.

Key types:
  DiceRange         — inclusive min/max gate (either bound optional)
  OutcomeRule       — one table entry: gate plus payload
  RuleTable         — validated ordered lookup over OutcomeRule
  BossRule          — a world boss blueprint
  LocationEventRule — a location modifier blueprint
  TitleRule         — an achievement with requirement and bonus
  RuleBook          — every table the engine needs, injected into the tick
"""

from __future__ import annotations

import functools
import json
import logging
import operator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError
from pydantic.dataclasses import dataclass as pydantic_dataclass

from clanquest.core.enums import ModifierType, PlayerClass, Resource

logger = logging.getLogger(__name__)

PACKAGED_RULES_DIR = Path(__file__).resolve().parent.parent / "rules"


class RuleTableError(ValueError):
    """A rule table is malformed, or a lookup matched nothing."""


# ---------------------------------------------------------------------------
# Table entries
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class DiceRange:
    """Inclusive dice gate.  A missing bound is unbounded on that side."""

    min: int | None = None
    max: int | None = None

    def contains(self, roll: int) -> bool:
        if self.min is not None and roll < self.min:
            return False
        if self.max is not None and roll > self.max:
            return False
        return True


@pydantic_dataclass(frozen=True)
class OutcomeRule:
    """One entry of a range table.

    Only the payload fields meaningful for the owning table are set:
    ``reward`` for gathering, ``amount``/``xp`` for exploration,
    ``food_steal``/``wood_shield`` for clan combat, ``xp``/``kill`` for
    monsters.
    """

    dice: DiceRange | None = None
    reward: int = 0
    amount: int = 0
    xp: int = 0
    kill: bool = False
    food_steal: int = 0
    wood_shield: int = 0
    messages: tuple[str, ...] = ()

    @property
    def is_default(self) -> bool:
        return self.dice is None


@pydantic_dataclass(frozen=True)
class WeightedOutcome:
    type: str
    weight: int


@pydantic_dataclass(frozen=True)
class BossRule:
    """Blueprint for a world boss."""

    id: str
    name: str
    location_id: str
    duration_days: int
    min_participants: int
    requirements: dict[PlayerClass, int] = field(default_factory=dict)
    reward_xp: int = 0
    failure_xp: int = 0
    appear_messages: tuple[str, ...] = ()
    success_messages: tuple[str, ...] = ()
    failure_messages: tuple[str, ...] = ()
    disappear_messages: tuple[str, ...] = ()


@pydantic_dataclass(frozen=True)
class EventEffects:
    """Numeric effects carried by a location event while it is active."""

    explore: int = 0
    gather: int = 0
    fortune: int = 0
    clan_resource_loss_pct: dict[Resource, float] = field(default_factory=dict)


@pydantic_dataclass(frozen=True)
class LocationEventRule:
    """Blueprint for an ephemeral location modifier."""

    id: str
    type: ModifierType
    name: str
    effects: EventEffects = field(default_factory=EventEffects)
    messages: tuple[str, ...] = ()


@pydantic_dataclass(frozen=True)
class TitleRequirement:
    field: str          # dotted path into the player, e.g. "meta.explore_count"
    op: str
    value: int


@pydantic_dataclass(frozen=True)
class TitleBonus:
    xp: int = 0
    food: int = 0
    wood: int = 0
    gold: int = 0
    fortune: int = 0


@pydantic_dataclass(frozen=True)
class TitleRule:
    id: str
    name: str
    requirement: TitleRequirement
    description: str = ""
    bonus: TitleBonus = field(default_factory=TitleBonus)


# Comparison operators accepted in title requirements.
COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "==": operator.eq,
    "<=": operator.le,
    "<": operator.lt,
}


# ---------------------------------------------------------------------------
# Validated lookup
# ---------------------------------------------------------------------------

class RuleTable:
    """Ordered range-match table with exactly one gateless fallback."""

    __slots__ = ("name", "rules", "_default")

    def __init__(self, name: str, rules: tuple[OutcomeRule, ...] | list[OutcomeRule]) -> None:
        self.name = name
        self.rules = tuple(rules)
        defaults = [r for r in self.rules if r.is_default]
        if len(defaults) != 1:
            raise RuleTableError(
                f"rule table {name!r} must have exactly one default entry, found {len(defaults)}"
            )
        self._default = defaults[0]

    def lookup(self, roll: int) -> OutcomeRule:
        for rule in self.rules:
            if rule.dice is not None and rule.dice.contains(roll):
                return rule
        return self._default

    @property
    def default(self) -> OutcomeRule:
        return self._default

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"RuleTable({self.name!r}, {len(self.rules)} rules)"


# ---------------------------------------------------------------------------
# RuleBook
# ---------------------------------------------------------------------------

_outcome_list_ta = TypeAdapter(list[OutcomeRule])
_weights_ta = TypeAdapter(list[WeightedOutcome])
_boss_list_ta = TypeAdapter(list[BossRule])
_event_list_ta = TypeAdapter(list[LocationEventRule])
_title_list_ta = TypeAdapter(list[TitleRule])


@dataclass(frozen=True)
class RuleBook:
    """Every rule table the tick needs.  Loaded once, never mutated."""

    gather: RuleTable
    explore_weights: tuple[WeightedOutcome, ...]
    explore: dict[str, RuleTable]
    attack_win: RuleTable
    attack_lose: RuleTable
    monster: RuleTable
    bosses: tuple[BossRule, ...]
    location_events: tuple[LocationEventRule, ...]
    titles: tuple[TitleRule, ...]

    def boss(self, boss_id: str) -> BossRule:
        for rule in self.bosses:
            if rule.id == boss_id:
                return rule
        raise RuleTableError(f"unknown boss rule {boss_id!r}")

    def title(self, title_id: str) -> TitleRule | None:
        for rule in self.titles:
            if rule.id == title_id:
                return rule
        return None

    def as_dict(self) -> dict[str, Any]:
        """JSON-ready dump of every table (used by the metadata route)."""
        def rows(table: RuleTable) -> list[dict]:
            return _outcome_list_ta.dump_python(list(table.rules), mode="json")

        return {
            "gather": rows(self.gather),
            "explore": {
                "outcomes": _weights_ta.dump_python(list(self.explore_weights), mode="json"),
                "resolution": {k: rows(v) for k, v in self.explore.items()},
            },
            "attack_clan": {"win": rows(self.attack_win), "lose": rows(self.attack_lose)},
            "attack_monster": rows(self.monster),
            "bosses": _boss_list_ta.dump_python(list(self.bosses), mode="json"),
            "location_events": _event_list_ta.dump_python(list(self.location_events), mode="json"),
            "titles": _title_list_ta.dump_python(list(self.titles), mode="json"),
        }


def _read(rules_dir: Path, name: str) -> Any:
    path = rules_dir / f"{name}.rules.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise RuleTableError(f"cannot read rule file {path}: {exc}") from exc


def _table(name: str, raw: Any) -> RuleTable:
    try:
        return RuleTable(name, _outcome_list_ta.validate_python(raw))
    except ValidationError as exc:
        raise RuleTableError(f"rule table {name!r} is malformed: {exc}") from exc


def _nonempty(name: str, items: list) -> tuple:
    if not items:
        raise RuleTableError(f"rule list {name!r} is empty")
    return tuple(items)


def load_rules(rules_dir: str | Path | None = None) -> RuleBook:
    """Load and validate every rule table from *rules_dir*.

    ``None`` loads the tables shipped inside the package.  Any structural
    problem raises :class:`RuleTableError`.
    """
    base = Path(rules_dir) if rules_dir is not None else PACKAGED_RULES_DIR

    gather_raw = _read(base, "gather")
    explore_raw = _read(base, "explore")
    attack_raw = _read(base, "attack_clan")
    monster_raw = _read(base, "attack_monster")

    try:
        weights = _nonempty("explore.outcomes", _weights_ta.validate_python(explore_raw["outcomes"]))
        bosses = _nonempty("bosses", _boss_list_ta.validate_python(_read(base, "boss")["bosses"]))
        events = _nonempty(
            "location_events",
            _event_list_ta.validate_python(_read(base, "location_event")["events"]),
        )
        titles = tuple(_title_list_ta.validate_python(_read(base, "title")["titles"]))
    except (KeyError, TypeError, ValidationError) as exc:
        raise RuleTableError(f"malformed rule file in {base}: {exc}") from exc

    explore: dict[str, RuleTable] = {}
    for outcome in weights:
        section = explore_raw.get("resolution", {}).get(outcome.type)
        if section is None:
            raise RuleTableError(f"explore outcome {outcome.type!r} has no resolution table")
        explore[outcome.type] = _table(f"explore.{outcome.type}", section)

    for title in titles:
        if title.requirement.op not in COMPARATORS:
            raise RuleTableError(f"title {title.id!r} uses unknown operator {title.requirement.op!r}")

    try:
        book = RuleBook(
            gather=_table("gather", gather_raw["rules"]),
            explore_weights=weights,
            explore=explore,
            attack_win=_table("attack_clan.win", attack_raw["win"]),
            attack_lose=_table("attack_clan.lose", attack_raw["lose"]),
            monster=_table("attack_monster", monster_raw["rules"]),
            bosses=bosses,
            location_events=events,
            titles=titles,
        )
    except (KeyError, TypeError) as exc:
        raise RuleTableError(f"malformed rule file in {base}: {exc}") from exc

    logger.debug(
        "Loaded rules from %s: %d bosses, %d location events, %d titles",
        base, len(book.bosses), len(book.location_events), len(book.titles),
    )
    return book


@functools.lru_cache(maxsize=1)
def default_rules() -> RuleBook:
    """The packaged rule book, loaded on first use and then reused."""
    return load_rules()
