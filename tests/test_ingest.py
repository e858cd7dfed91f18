"""Tests for command parsing, character sheets and comment selection."""

from datetime import datetime, timedelta, timezone

from clanquest.core.enums import ActionType, PlayerClass
from clanquest.ingest.comments import CommentAuthor, CommentRecord, latest_command
from clanquest.ingest.parser import parse_action, parse_character_sheet

LOCATIONS = ["red_base", "Blue_Base", "monsters_base"]


class TestParseAction:

    def test_gather(self):
        action = parse_action("p1", "gather FOOD", LOCATIONS)
        assert (action.type, action.target) == (ActionType.GATHER, "food")

    def test_explore_keeps_location_case(self):
        action = parse_action("p1", "Explore blue_base", LOCATIONS)
        assert (action.type, action.target) == (ActionType.EXPLORE, "Blue_Base")

    def test_attack(self):
        action = parse_action("p1", "ATTACK monsters_base", LOCATIONS)
        assert (action.type, action.target) == (ActionType.ATTACK, "monsters_base")

    def test_only_first_line_counts(self):
        action = parse_action("p1", "gather wood\nattack red_base", LOCATIONS)
        assert action.type == ActionType.GATHER

    def test_everything_else_waits(self):
        for text in ("", "   ", "dance", "gather stone", "gather", "attack atlantis", "explore"):
            action = parse_action("p1", text, LOCATIONS)
            assert action.type == ActionType.WAIT, text
            assert action.target is None

    def test_player_id_carried(self):
        assert parse_action("zed", "wait", LOCATIONS).player_id == "zed"


SHEET = """\
## Character Name
(write your name below)
Thorne Ashgrave

## Class
- [ ] Warrior
- [x] Archer
- [X] Monk

## Optional Backstory
(tell us about yourself)
Raised by wolves.
Fears nothing.
"""


class TestCharacterSheet:

    def test_full_sheet(self):
        sheet = parse_character_sheet(SHEET)
        assert sheet.name == "Thorne Ashgrave"
        assert sheet.player_class == PlayerClass.ARCHER
        assert sheet.backstory == "Raised by wolves.\nFears nothing."

    def test_unknown_class_ignored(self):
        sheet = parse_character_sheet("## Class\n- [x] Necromancer\n")
        assert sheet.player_class is None

    def test_empty(self):
        sheet = parse_character_sheet("")
        assert (sheet.name, sheet.player_class, sheet.backstory) == (None, None, None)

    def test_windows_newlines(self):
        sheet = parse_character_sheet("## Character Name\r\nMira\r\n")
        assert sheet.name == "Mira"


def _comment(body, user_id, minutes, kind="User"):
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return CommentRecord(
        body=body,
        user=CommentAuthor(id=user_id, login=f"user{user_id}", type=kind),
        created_at=base + timedelta(minutes=minutes),
    )


class TestLatestCommand:

    def test_newest_owner_comment(self):
        comments = [_comment("gather food", "1", 1), _comment("explore red_base", "1", 5)]
        assert latest_command(comments, "1").body == "explore red_base"

    def test_bots_and_strangers_ignored(self):
        comments = [
            _comment("gather food", "1", 1),
            _comment("attack red_base", "2", 5),
            _comment("Day 3 result", "1", 9, kind="Bot"),
        ]
        assert latest_command(comments, "1").body == "gather food"

    def test_window_start(self):
        since = datetime(2025, 1, 1, 0, 3, tzinfo=timezone.utc)
        comments = [_comment("gather food", "1", 1)]
        assert latest_command(comments, "1", since=since) is None

    def test_accepts_raw_payload(self):
        record = CommentRecord.model_validate({
            "body": "gather gold",
            "user": {"id": "7", "login": "mira"},
            "created_at": "2025-01-01T00:00:00Z",
        })
        assert latest_command([record], "7").body == "gather gold"
