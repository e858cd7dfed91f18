"""Tests for the HTTP API, the game manager and the command line."""

import json
import sys

import pytest
from fastapi.testclient import TestClient

from clanquest.__main__ import main
from clanquest.api.app import create_app
from clanquest.api.manager import GameManager
from clanquest.config import GameConfig


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.delenv("CLANQUEST_NARRATOR", raising=False)
    manager = GameManager(GameConfig(state_dir=str(tmp_path)))
    with TestClient(create_app(manager=manager)) as c:
        yield c


def _enlist(client, player_id, **extra):
    return client.post("/api/v1/players", json={"player_id": player_id, **extra})


class TestStateEndpoints:

    def test_fresh_world(self, client):
        resp = client.get("/api/v1/state")
        assert resp.status_code == 200
        data = resp.json()
        assert data["day"] == 0
        assert len(data["clans"]) == 5
        assert len(data["locations"]) == 6
        assert data["active_boss"] is None

    def test_config(self, client):
        data = client.get("/api/v1/config").json()
        assert data["dice_sides"] == 20
        assert data["attack_gold_cost"] == 20

    def test_rules_metadata(self, client):
        data = client.get("/api/v1/metadata/rules").json()
        assert len(data["bosses"]) == 8
        assert data["gather"][0]["reward"] == 12

    def test_enums_metadata(self, client):
        data = client.get("/api/v1/metadata/enums").json()
        assert "Archer" in data["player_classes"]
        assert data["resources"] == ["food", "wood", "gold"]


class TestPlayers:

    def test_enlist(self, client, tmp_path):
        resp = _enlist(client, "alice", name="Alice", player_class="Warrior")
        assert resp.status_code == 201
        body = resp.json()
        assert body["player"]["clan_id"] == "black_clan"
        assert body["player"]["player_class"] == "Warrior"
        assert body["message"].startswith("Welcome, Alice the Warrior!")
        assert (tmp_path / "gamestate.json").is_file()

    def test_enlist_twice_conflicts(self, client):
        _enlist(client, "alice")
        assert _enlist(client, "alice").status_code == 409

    def test_enlist_from_sheet(self, client):
        sheet = "## Character Name\nMira\n\n## Class\n- [x] Monk\n"
        body = _enlist(client, "m1", character_sheet=sheet).json()
        assert body["player"]["name"] == "Mira"
        assert body["player"]["player_class"] == "Monk"

    def test_look(self, client):
        _enlist(client, "alice")
        resp = client.get("/api/v1/players/alice/look")
        assert resp.status_code == 200
        assert "**Clanmates**" in resp.json()["text"]

    def test_look_unknown(self, client):
        assert client.get("/api/v1/players/ghost/look").status_code == 404


class TestTickEndpoint:

    def test_commands_resolve_a_day(self, client, tmp_path):
        _enlist(client, "alice")
        resp = client.post("/api/v1/tick", json={
            "commands": [{"player_id": "alice", "text": "gather food"}],
            "narrate": True,
            "record_replay": True,
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["day"] == 1
        assert body["player_results"]["alice"].startswith("**[Day 1 Result]**")
        assert body["narrative_summary"].startswith("Day 1 has ended.")
        assert body["world_story"].startswith("Day 1 dawns")
        assert set(body["location_stories"]) >= {"black_base", "monsters_base"}

        assert client.get("/api/v1/state").json()["day"] == 1
        saved = json.loads((tmp_path / "gamestate.json").read_text(encoding="utf-8"))
        assert saved["day"] == 1
        replay = json.loads((tmp_path / "replay.json").read_text(encoding="utf-8"))
        assert replay["ticks"][0]["actions"] == [{"player_id": "alice", "type": "GATHER", "target": "food"}]

    def test_structured_actions(self, client):
        _enlist(client, "alice")
        body = client.post("/api/v1/tick", json={
            "actions": [{"player_id": "alice", "type": "WAIT"}],
        }).json()
        assert body["player_results"]["alice"].endswith("observe your surroundings.")
        assert body["world_story"] is None

    def test_state_reloaded_by_new_manager(self, client, tmp_path):
        _enlist(client, "alice")
        client.post("/api/v1/tick", json={})
        reloaded = GameManager(GameConfig(state_dir=str(tmp_path)))
        world = reloaded.snapshot()
        assert world.day == 1
        assert "alice" in world.players


class TestCommandLine:

    def _run(self, monkeypatch, *argv):
        monkeypatch.setattr(sys, "argv", ["clanquest", *argv])
        main()

    def test_init_enlist_tick_look(self, tmp_path, monkeypatch, capsys):
        state = ["--state-dir", str(tmp_path), "--log-level", "WARNING"]
        self._run(monkeypatch, "init", *state)
        assert (tmp_path / "gamestate.json").is_file()

        self._run(monkeypatch, "enlist", "alice", "--name", "Alice", "--class", "Archer", *state)
        assert "Welcome, Alice the Archer!" in capsys.readouterr().out

        actions = tmp_path / "actions.json"
        actions.write_text(json.dumps([{"player_id": "alice", "text": "explore black_base"}]),
                           encoding="utf-8")
        self._run(monkeypatch, "tick", "--actions", str(actions), *state)
        out = capsys.readouterr().out
        assert out.startswith("Day 1 has ended.")
        assert "@alice" in out

        self._run(monkeypatch, "look", "alice", *state)
        assert "**[Day 1 | Black Hollow]**" in capsys.readouterr().out

    def test_tick_replay_lands_in_state_dir(self, tmp_path, monkeypatch, capsys):
        state_dir = tmp_path / "state"
        elsewhere = tmp_path / "elsewhere"
        state_dir.mkdir()
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)
        state = ["--state-dir", str(state_dir), "--log-level", "WARNING"]
        self._run(monkeypatch, "init", *state)
        self._run(monkeypatch, "enlist", "alice", *state)

        actions = tmp_path / "actions.json"
        actions.write_text(json.dumps([{"player_id": "alice", "type": "GATHER", "target": "gold"}]),
                           encoding="utf-8")
        self._run(monkeypatch, "tick", "--actions", str(actions), "--replay", *state)
        capsys.readouterr()

        assert (state_dir / "replay.json").is_file()
        assert not (elsewhere / "replay.json").exists()

    def test_init_refuses_overwrite(self, tmp_path, monkeypatch):
        state = ["--state-dir", str(tmp_path), "--log-level", "WARNING"]
        self._run(monkeypatch, "init", *state)
        with pytest.raises(SystemExit):
            self._run(monkeypatch, "init", *state)
