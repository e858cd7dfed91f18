"""Tests for the player-facing look view."""

import unittest

from clanquest.core.enums import PlayerClass
from clanquest.queries.look import look
from tests.helpers.worlds import RULES, add_modifier, add_player, make_world, summon_boss


class TestLookView(unittest.TestCase):

    def setUp(self):
        self.world = make_world(day=7)
        self.player = add_player(self.world, "p1", "red", PlayerClass.MONK)

    def test_unknown_player(self):
        self.assertEqual(
            look(self.world, "ghost", RULES),
            "You have not joined the world yet. Create a character first.",
        )

    def test_header_and_player_line(self):
        self.player.titles = ["wanderer"]
        text = look(self.world, "p1", RULES)
        self.assertTrue(text.startswith("**[Day 7 | Red Base]**"))
        self.assertIn("**P1** the Monk, level 1 (0 xp)", text)
        self.assertIn("Titles: Wanderer", text)
        self.assertIn("- Food: 100 | Wood: 100 | Gold: 100", text)

    def test_clanmates_only_from_own_clan(self):
        add_player(self.world, "p2", "red", PlayerClass.LANCER)
        add_player(self.world, "p3", "blue")
        text = look(self.world, "p1", RULES)
        self.assertIn("- @P2 (Lancer, lv 1)", text)
        self.assertNotIn("@P3", text)

    def test_alone(self):
        self.assertIn("**Clanmates**\n- (no one else)", look(self.world, "p1", RULES))

    def test_calm_world(self):
        self.assertIn("- All is calm.", look(self.world, "p1", RULES))

    def test_boss_and_modifier(self):
        summon_boss(self.world, "great_eagle")
        add_modifier(self.world, "blue_base", mod_id="fog")
        text = look(self.world, "p1", RULES)
        self.assertIn("- The Great Eagle prowls Monster Lair until day 10 (0 hunters)", text)
        self.assertIn("- Blue Base: fog at blue_base", text)
        self.assertNotIn("All is calm", text)

    def test_conquered_clan(self):
        self.world.clans["red_clan"].defeated_by = "blue_clan"
        self.assertIn("- Conquered by The Blue Clan", look(self.world, "p1", RULES))


if __name__ == "__main__":
    unittest.main()
