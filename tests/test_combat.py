"""Tests for clan raids, conquest and monster fights.

Dice order for a raid: defender pick, attacker roll, defender roll,
outcome message, then the destruction message when a clan falls.
"""

from clanquest.actions.base import Action
from clanquest.actions.combat import ClanAttackAction, MonsterAttackAction
from clanquest.core.enums import ActionType, ModifierType, PlayerClass, WorldEventType, has_advantage
from clanquest.systems.dice import ScriptedDice
from tests.helpers.worlds import CONFIG, LAIR, RULES, add_modifier, add_player, make_world, summon_boss


def _raid(world, rolls, attacker="a1", target="blue_base") -> ScriptedDice:
    dice = ScriptedDice(rolls)
    ClanAttackAction(CONFIG, RULES, dice).apply(Action(attacker, ActionType.ATTACK, target), world)
    return dice


def _hunt(world, rolls, player="h1", target=LAIR) -> ScriptedDice:
    dice = ScriptedDice(rolls)
    MonsterAttackAction(CONFIG, RULES, dice).apply(Action(player, ActionType.ATTACK, target), world)
    return dice


class TestClassAdvantage:

    def test_cycle(self):
        assert has_advantage(PlayerClass.WARRIOR, PlayerClass.LANCER)
        assert has_advantage(PlayerClass.LANCER, PlayerClass.ARCHER)
        assert has_advantage(PlayerClass.ARCHER, PlayerClass.MONK)
        assert has_advantage(PlayerClass.MONK, PlayerClass.WARRIOR)
        assert not has_advantage(PlayerClass.LANCER, PlayerClass.WARRIOR)

    def test_adventurer_is_neutral(self):
        for cls in PlayerClass:
            assert not has_advantage(PlayerClass.ADVENTURER, cls)
            assert not has_advantage(cls, PlayerClass.ADVENTURER)


class TestClanRaid:

    def test_decisive_win(self):
        world = make_world()
        attacker = add_player(world, "a1", "red", PlayerClass.WARRIOR)
        defender = add_player(world, "d1", "blue", PlayerClass.WARRIOR)
        _raid(world, [0, 15, 5, 0])

        red, blue = world.clans["red_clan"], world.clans["blue_clan"]
        assert red.gold == 80
        assert red.food == 106
        assert (blue.wood, blue.food) == (94, 94)
        assert attacker.messages[-1].endswith("[+6 food]")
        assert attacker.meta.player_wins == 1
        assert attacker.meta.attack_win_streak == 1
        assert defender.meta.player_losses == 1
        assert defender.meta.attacked_count == 1
        assert "lost 6 wood and 6 food" in defender.message

    def test_win_scales_with_level(self):
        world = make_world()
        add_player(world, "a1", "red", PlayerClass.WARRIOR, level=10)
        add_player(world, "d1", "blue", PlayerClass.WARRIOR)
        _raid(world, [0, 20, 5, 0])

        blue = world.clans["blue_clan"]
        assert (blue.wood, blue.food) == (91, 90)
        assert world.clans["red_clan"].food == 110

    def test_advantage_tips_close_fight(self):
        world = make_world()
        add_player(world, "a1", "red", PlayerClass.WARRIOR)
        add_player(world, "d1", "blue", PlayerClass.LANCER)
        _raid(world, [0, 5, 7, 0])
        # 5 + 3 beats 7 by one: narrow-victory tier
        blue = world.clans["blue_clan"]
        assert (blue.wood, blue.food) == (96, 96)
        assert world.clans["red_clan"].food == 104

    def test_defender_advantage(self):
        world = make_world()
        attacker = add_player(world, "a1", "red", PlayerClass.LANCER)
        defender = add_player(world, "d1", "blue", PlayerClass.WARRIOR)
        _raid(world, [0, 7, 5, 0])

        assert "forced to retreat" in attacker.message
        assert world.clans["red_clan"].gold == 80
        assert world.clans["blue_clan"].food == 100
        assert attacker.meta.player_losses == 1
        assert attacker.meta.attack_lose_streak == 1
        assert defender.meta.player_wins == 1
        assert "held them off" in defender.message

    def test_tie_is_stalemate(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        add_player(world, "d1", "blue")
        _raid(world, [0, 10, 10, 0])
        assert "stalemate" in attacker.message
        assert world.clans["blue_clan"].food == 100

    def test_win_resets_lose_streak(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        add_player(world, "d1", "blue")
        attacker.meta.attack_lose_streak = 2
        _raid(world, [0, 15, 5, 0])
        assert attacker.meta.attack_lose_streak == 0

    def test_empty_clan_uses_placeholder_defender(self):
        world = make_world()
        add_player(world, "a1", "red", PlayerClass.WARRIOR)
        dice = _raid(world, [15, 5, 0])
        assert world.clans["blue_clan"].food == 94
        assert dice.rolls_made == 3

    def test_defender_picked_by_roll(self):
        world = make_world()
        add_player(world, "a1", "red")
        first = add_player(world, "d1", "blue")
        second = add_player(world, "d2", "blue")
        _raid(world, [1, 15, 5, 0])
        assert second.meta.attacked_count == 1
        assert first.meta.attacked_count == 0


class TestRaidValidation:

    def test_own_clan(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        dice = _raid(world, [10], target="red_base")
        assert attacker.message == "You cannot attack your own clan."
        assert world.clans["red_clan"].gold == 100
        assert dice.rolls_made == 0

    def test_not_enough_gold(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        world.clans["red_clan"].gold = 10
        _raid(world, [10])
        assert "lacks the gold" in attacker.message
        assert world.clans["red_clan"].gold == 10

    def test_conquered_target(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        world.clans["blue_clan"].defeated_by = "red_clan"
        _raid(world, [10])
        assert "already been conquered" in attacker.message

    def test_starving_target(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        world.clans["blue_clan"].food = 0
        _raid(world, [10])
        assert "no food left" in attacker.message
        assert world.clans["red_clan"].gold == 100

    def test_unknown_location(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        _raid(world, [10], target="atlantis")
        assert "There is no place called 'atlantis'" in attacker.message

    def test_unowned_location(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        _raid(world, [10], target=LAIR)
        assert "nobody to raid" in attacker.message


class TestConquest:

    def test_last_food_taken_conquers_clan(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        defender = add_player(world, "d1", "blue")
        world.clans["blue_clan"].food = 5
        world.day = 4
        _raid(world, [0, 15, 5, 0, 0])

        red, blue = world.clans["red_clan"], world.clans["blue_clan"]
        assert blue.defeated_by == "red_clan"
        assert (blue.food, blue.wood, blue.gold) == (0, 0, 0)
        assert red.food == 106
        assert "[+6 food]" in attacker.message
        assert "lost 6 wood and 5 food" in defender.message
        assert "has fallen" in attacker.messages[-1]
        assert "has fallen" in defender.messages[-1]

        event = world.world_events[-1]
        assert event.type == WorldEventType.CLAN_DEFEATED
        assert event.id == "clan_defeated_blue_clan_4"
        assert event.data["defeated_by"] == "red_clan"

    def test_full_steal_credited_when_store_runs_dry(self):
        world = make_world()
        attacker = add_player(world, "a1", "red")
        add_player(world, "d1", "blue")
        blue = world.clans["blue_clan"]
        blue.food, blue.wood = 3, 0
        _raid(world, [0, 6, 5, 0, 0])
        assert blue.defeated_by == "red_clan"
        assert blue.food == 0
        assert world.clans["red_clan"].food == 108
        assert "[+8 food]" in attacker.message

    def test_conquered_clan_gains_nothing_afterwards(self):
        world = make_world()
        add_player(world, "a1", "red")
        world.clans["blue_clan"].food = 1
        _raid(world, [15, 5, 0, 0])
        survivor = add_player(world, "d1", "blue")
        world.clans["blue_clan"].gold = 50
        _raid(world, [0, 15, 5, 0], attacker="d1", target="red_base")
        assert world.clans["blue_clan"].food == 0
        assert survivor.message.endswith("[+0 food]")
        assert world.clans["red_clan"].food == 100


class TestMonsterFight:

    def test_kill_and_level_up(self):
        world = make_world()
        hunter = add_player(world, "h1")
        _hunt(world, [17, 0])
        assert hunter.messages[0].endswith("[+9 xp]")
        assert hunter.messages[-1] == "[LEVEL UP: 2]"
        assert (hunter.level, hunter.xp) == (2, 0)
        assert hunter.meta.monster_encountered == 1
        assert hunter.meta.monster_killed == 1

    def test_bad_roll(self):
        world = make_world()
        hunter = add_player(world, "h1")
        _hunt(world, [1, 0])
        assert hunter.message.endswith("[+0 xp]")
        assert hunter.meta.monster_killed == 0
        assert hunter.meta.monster_encountered == 1

    def test_lair_fortune_is_subtracted(self):
        world = make_world()
        hunter = add_player(world, "h1")
        add_modifier(world, LAIR, mod_type=ModifierType.BLESSING, fortune=2)
        _hunt(world, [19, 0])
        assert hunter.messages[0].endswith("[+9 xp]")

    def test_join_active_boss(self):
        world = make_world()
        hunter = add_player(world, "h1")
        boss = summon_boss(world, "great_eagle")
        dice = _hunt(world, [10])
        assert boss.participants == ["h1"]
        assert "join the hunt" in hunter.message
        assert dice.rolls_made == 0

    def test_join_twice_keeps_one_slot(self):
        world = make_world()
        add_player(world, "h1")
        boss = summon_boss(world, "great_eagle")
        _hunt(world, [10])
        _hunt(world, [10])
        assert boss.participants == ["h1"]

    def test_title_bonus_on_empty_tier(self):
        world = make_world()
        hunter = add_player(world, "h1")
        hunter.titles = ["giant_slayer"]
        _hunt(world, [1, 0])
        assert hunter.message == "The monster swats you aside. You flee empty-handed. [+2 xp]"
        assert hunter.xp == 2
        assert hunter.meta.monster_killed == 0
