"""Free-text command and character sheet parsing.

Anything that cannot be understood becomes a WAIT; parsing never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from clanquest.actions.base import Action
from clanquest.core.enums import RESOURCES, ActionType, PlayerClass

_RESOURCE_NAMES = frozenset(r.value for r in RESOURCES)

_NAME_HEADER = re.compile(r"^##\s+Character Name", re.IGNORECASE)
_CLASS_HEADER = re.compile(r"^##\s+Class", re.IGNORECASE)
_BACKSTORY_HEADER = re.compile(r"^##\s+Optional Backstory", re.IGNORECASE)
_CHECKED_BOX = re.compile(r"- \[[xX]\] (.+)")


def parse_action(player_id: str, text: str, locations: Iterable[str]) -> Action:
    """Turn the first line of *text* into an action for *player_id*."""
    wait = Action(player_id, ActionType.WAIT)
    stripped = (text or "").strip()
    if not stripped:
        return wait
    tokens = stripped.splitlines()[0].split()
    if not tokens:
        return wait

    verb = tokens[0].upper()
    target = tokens[1].lower() if len(tokens) > 1 else None

    if verb == ActionType.GATHER.value:
        if target in _RESOURCE_NAMES:
            return Action(player_id, ActionType.GATHER, target)
        return wait

    if verb in (ActionType.EXPLORE.value, ActionType.ATTACK.value):
        by_lower = {loc.lower(): loc for loc in locations}
        if target is not None and target in by_lower:
            return Action(player_id, ActionType(verb), by_lower[target])
        return wait

    return wait


@dataclass(slots=True)
class CharacterSheet:
    name: str | None = None
    player_class: PlayerClass | None = None
    backstory: str | None = None


def parse_character_sheet(body: str) -> CharacterSheet:
    """Read name, class and backstory from a markdown character sheet.

    The first checked box naming a known class wins.  Lines wrapped in
    parentheses are template hints and are skipped.
    """
    sheet = CharacterSheet()
    section = ""
    backstory: list[str] = []
    valid_classes = {c.value: c for c in PlayerClass}

    for raw in (body or "").replace("\r\n", "\n").split("\n"):
        line = raw.strip()
        if _NAME_HEADER.match(line):
            section = "name"
            continue
        if _CLASS_HEADER.match(line):
            section = "class"
            continue
        if _BACKSTORY_HEADER.match(line):
            section = "backstory"
            continue

        is_text = bool(line) and not line.startswith("(") and not line.startswith("##")
        if section == "name" and is_text:
            sheet.name = line
        elif section == "class" and sheet.player_class is None:
            match = _CHECKED_BOX.match(line)
            if match:
                sheet.player_class = valid_classes.get(match.group(1).strip())
        elif section == "backstory" and is_text:
            backstory.append(line)

    if backstory:
        sheet.backstory = "\n".join(backstory)
    return sheet
