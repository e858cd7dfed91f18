"""Tests for the tick orchestrator and action dispatch.

Covers:
- Day advance and snapshot isolation
- One action per player (last wins, first slot kept)
- Category resolution order and crash containment
- Boss spawn versus modifier spawn
- History trimming and determinism under seeded dice
"""

import logging

import pytest

from clanquest.actions.base import Action
from clanquest.core.enums import ActionType, PlayerClass
from clanquest.core.rules import RuleTableError
from clanquest.engine.dispatcher import ActionDispatcher
from clanquest.engine.tick import TickOrchestrator, tick
from clanquest.systems.dice import ScriptedDice
from clanquest.systems.generator import default_world
from clanquest.systems.roster import enlist_player
from clanquest.utils.persistence import world_to_dict
from tests.helpers.worlds import CONFIG, LAIR, RULES, add_modifier, add_player, make_world, summon_boss


def _gather(pid, resource="food") -> Action:
    return Action(pid, ActionType.GATHER, resource)


class _Boom:
    def __init__(self, exc):
        self._exc = exc

    def apply(self, action, world):
        raise self._exc


class TestTickBasics:

    def test_day_advances_and_input_untouched(self):
        world = make_world()
        add_player(world, "p1")
        result = tick(world, [_gather("p1")], dice=ScriptedDice([10, 0, 10]))

        assert result.world.day == 1
        assert result.world.clans["red_clan"].food == 110
        assert world.day == 0
        assert world.clans["red_clan"].food == 100
        assert world.players["p1"].messages == []

    def test_player_result_header(self):
        world = make_world()
        add_player(world, "p1")
        result = tick(world, [_gather("p1")], dice=ScriptedDice([10, 0, 10]))
        text = result.player_results["p1"]
        assert text.startswith("**[Day 1 Result]**\n")
        assert text.endswith("[+10 food]")

    def test_last_action_wins(self):
        world = make_world()
        add_player(world, "p1")
        result = tick(world, [_gather("p1", "food"), _gather("p1", "wood")],
                      dice=ScriptedDice([10, 0, 10]))
        red = result.world.clans["red_clan"]
        assert (red.food, red.wood) == (100, 110)
        assert result.applied == [_gather("p1", "wood")]

    def test_unknown_player_skipped(self, caplog):
        world = make_world()
        add_player(world, "p1")
        with caplog.at_level(logging.WARNING):
            result = tick(world, [_gather("ghost"), _gather("p1")], dice=ScriptedDice([10, 0, 10]))
        assert "ghost" not in result.player_results
        assert "ghost" not in result.world.players
        assert any("ghost" in r.getMessage() for r in caplog.records)

    def test_messages_cleared_each_day(self):
        world = make_world()
        p = add_player(world, "p1")
        p.messages = ["stale"]
        result = tick(world, [], dice=ScriptedDice([10]))
        assert result.world.players["p1"].messages == []

    def test_summary(self):
        world = make_world()
        add_player(world, "p1")
        result = tick(world, [Action("p1", ActionType.WAIT)], dice=ScriptedDice([10]))
        assert result.narrative_summary.startswith("Day 1 has ended.")
        assert "One adventurer acted." in result.narrative_summary
        assert result.narrative_summary.endswith("2 of 2 clans still stand.")


class TestDispatcher:

    def test_dedupe_keeps_first_slot(self):
        a1, b, a2 = _gather("a", "food"), _gather("b"), _gather("a", "gold")
        assert ActionDispatcher.dedupe([a1, b, a2]) == [a2, b]

    def test_lair_and_unowned_attacks_are_monster_fights(self):
        world = make_world()
        dispatcher = ActionDispatcher(CONFIG, RULES, ScriptedDice([10]))
        assert dispatcher.categorize(Action("p", ActionType.ATTACK, LAIR), world).value == "attack_monster"
        assert dispatcher.categorize(Action("p", ActionType.ATTACK, "blue_base"), world).value == "attack_clan"

    def test_categories_resolve_in_order(self):
        world = make_world()
        for pid in ("w", "a", "g"):
            add_player(world, pid)
        actions = [
            Action("w", ActionType.WAIT),
            Action("a", ActionType.ATTACK, "red_base"),
            _gather("g"),
        ]
        result = ActionDispatcher(CONFIG, RULES, ScriptedDice([10, 0])).dispatch(actions, world)
        assert [a.player_id for a in result.applied] == ["g", "a", "w"]

    def test_crash_is_contained(self, caplog):
        world = make_world()
        add_player(world, "g")
        add_player(world, "w")
        dispatcher = ActionDispatcher(CONFIG, RULES, ScriptedDice([10]))
        dispatcher._gather = _Boom(RuntimeError("kaboom"))
        with caplog.at_level(logging.ERROR):
            result = dispatcher.dispatch([_gather("g"), Action("w", ActionType.WAIT)], world)
        assert [a.player_id for a in result.failed] == ["g"]
        assert [a.player_id for a in result.applied] == ["w"]
        assert "failed" in caplog.text

    def test_rule_errors_propagate(self):
        world = make_world()
        add_player(world, "g")
        dispatcher = ActionDispatcher(CONFIG, RULES, ScriptedDice([10]))
        dispatcher._gather = _Boom(RuleTableError("bad table"))
        with pytest.raises(RuleTableError):
            dispatcher.dispatch([_gather("g")], world)

    def test_most_explored_tie_goes_to_first(self):
        world = make_world()
        for pid in ("e1", "e2", "e3", "e4"):
            add_player(world, pid)
        actions = [
            Action("e1", ActionType.EXPLORE, "blue_base"),
            Action("e2", ActionType.EXPLORE, "red_base"),
            Action("e3", ActionType.EXPLORE, "red_base"),
            Action("e4", ActionType.EXPLORE, "blue_base"),
        ]
        result = ActionDispatcher(CONFIG, RULES, ScriptedDice([10, 0, 0])).dispatch(actions, world)
        assert result.most_explored() == "blue_base"


class TestSpawning:

    def test_lair_exploration_wakes_boss_and_clears_modifiers(self):
        world = make_world()
        add_player(world, "e1")
        add_player(world, "e2", "blue")
        add_modifier(world, "red_base")
        actions = [Action("e1", ActionType.EXPLORE, LAIR), Action("e2", ActionType.EXPLORE, LAIR)]
        dice = ScriptedDice([10, 0, 0, 10, 0, 0, 18, 7, 0])

        result = tick(world, actions, dice=dice)

        assert result.world.active_boss is not None
        assert result.world.active_boss.boss_id == "great_eagle"
        assert result.world.location_modifiers == []
        assert dice.rolls_made == 9

    def test_lair_exploration_with_active_boss_spawns_nothing(self):
        world = make_world()
        add_player(world, "e1")
        summon_boss(world, "bog_hydra", expires_in=5)
        add_modifier(world, "red_base")
        result = tick(world, [Action("e1", ActionType.EXPLORE, LAIR)], dice=ScriptedDice([10, 0, 0, 0]))
        assert result.world.active_boss.boss_id == "bog_hydra"
        assert result.world.location_modifiers == []

    def test_modifier_replaced_every_day(self):
        world = make_world()
        add_modifier(world, "red_base")
        result = tick(world, [], dice=ScriptedDice([10]))
        assert result.world.location_modifiers == []

    def test_new_modifier_spawns_and_appears_in_log(self):
        world = make_world()
        result = tick(world, [], dice=ScriptedDice([3, 0, 0, 0]))
        assert [m.id for m in result.world.location_modifiers] == ["weather_heavy_rain"]
        assert result.world_log.notes == ["Heavy rain lashes Blue Base. Paths turn to mud."]

    def test_boss_hunt_through_tick(self):
        world = make_world()
        archers = [add_player(world, f"arc{i}", "red", PlayerClass.ARCHER) for i in range(5)]
        summon_boss(world, "great_eagle")
        actions = [Action(a.id, ActionType.ATTACK, LAIR) for a in archers]

        result = tick(world, actions, dice=ScriptedDice([0, 10]))

        assert result.world.active_boss is None
        for archer in archers:
            after = result.world.players[archer.id]
            assert after.level == 2
            assert "giant_slayer" in after.titles
            assert "[TITLE UNLOCKED: Giant Slayer]" in after.messages
            assert "join the hunt" in after.messages[0]


class TestHistoryAndDeterminism:

    def test_history_keeps_last_five_days(self):
        world = make_world()
        add_player(world, "p1")
        orchestrator = TickOrchestrator(CONFIG, RULES)
        for _ in range(7):
            world = orchestrator.run(world, [Action("p1", ActionType.WAIT)], ScriptedDice([10])).world
        player = world.players["p1"]
        assert [h.day for h in player.history] == [3, 4, 5, 6, 7]
        assert player.history[-1].action == "WAIT"
        assert player.history[-1].messages == ["You take a moment to observe your surroundings."]
        assert player.meta.last_action_day == 7

    def test_seeded_runs_are_identical(self):
        def run():
            world = default_world()
            for pid in ("alice", "bob", "cara", "dan"):
                enlist_player(world, pid, player_class=PlayerClass.WARRIOR)
            for _ in range(5):
                actions = [
                    _gather("alice"),
                    Action("bob", ActionType.EXPLORE, LAIR),
                    Action("cara", ActionType.ATTACK, "red_base"),
                    Action("dan", ActionType.ATTACK, LAIR),
                ]
                world = tick(world, actions).world
            return world_to_dict(world)

        assert run() == run()

    def test_different_seeds_diverge(self):
        def run(seed):
            world = default_world()
            world.seed = seed
            enlist_player(world, "alice")
            for _ in range(5):
                world = tick(world, [_gather("alice")]).world
            return world_to_dict(world)

        assert run(1) != run(2)
