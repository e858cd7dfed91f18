"""Entry point: ``python -m clanquest``.

Subcommands:
  - ``serve``   → Launch the FastAPI server (default)
  - ``tick``    → Resolve one day from a JSON actions file and save
  - ``enlist``  → Add a player to the least populated clan
  - ``look``    → Print a player's view of the world
  - ``init``    → Write a fresh default world
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Clanquest turn-based clan simulation")
    sub = parser.add_subparsers(dest="command")

    def common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--state-dir", type=str, default=".")
        p.add_argument("--rules-dir", type=str, default=None)
        p.add_argument("--seed", type=int, default=42)
        p.add_argument("--log-level", type=str, default="INFO", choices=_LOG_LEVELS)

    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    common(srv)

    tck = sub.add_parser("tick", help="Resolve one day and save the new state")
    tck.add_argument("--actions", type=str, default=None,
                     help="JSON file: list of {player_id, type, target} or {player_id, text}")
    tck.add_argument("--replay", type=str, nargs="?", const="replay.json", default=None,
                     help="Append this tick's actions and dice rolls to a replay file in the state dir")
    common(tck)

    enl = sub.add_parser("enlist", help="Enlist a new player")
    enl.add_argument("player_id", type=str)
    enl.add_argument("--name", type=str, default=None)
    enl.add_argument("--class", dest="player_class", type=str, default="Adventurer")
    enl.add_argument("--sheet", type=str, default=None, help="Markdown character sheet file")
    common(enl)

    lk = sub.add_parser("look", help="Print a player's view")
    lk.add_argument("player_id", type=str)
    common(lk)

    ini = sub.add_parser("init", help="Write a fresh default world")
    ini.add_argument("--force", action="store_true", help="Overwrite an existing state file")
    common(ini)

    return parser


def _config_from(args: argparse.Namespace, **overrides):
    from clanquest.config import GameConfig

    return GameConfig(
        world_seed=args.seed,
        state_dir=args.state_dir,
        rules_dir=args.rules_dir,
        log_level=args.log_level,
        **overrides,
    )


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from clanquest.api.app import create_app

    app = create_app(_config_from(args))
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _load_actions(path: str | None, manager) -> list:
    from clanquest.actions.base import Action
    from clanquest.core.enums import ActionType

    if path is None:
        return []
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    actions: list[Action] = []
    commands: list[tuple[str, str]] = []
    for item in raw:
        if "text" in item:
            commands.append((str(item["player_id"]), item["text"]))
        else:
            actions.append(Action(str(item["player_id"]), ActionType(item["type"].upper()),
                                  item.get("target")))
    return actions + manager.parse_commands(commands)


def _run_tick(args: argparse.Namespace) -> None:
    from clanquest.api.manager import GameManager

    overrides = {"replay_file": args.replay} if args.replay else {}
    manager = GameManager(_config_from(args, **overrides))
    actions = _load_actions(args.actions, manager)
    result, _ = manager.tick(actions, record_replay=args.replay is not None)

    print(result.narrative_summary)
    for player_id, text in result.player_results.items():
        print(f"\n@{player_id}\n{text}")


def _run_enlist(args: argparse.Namespace) -> None:
    from clanquest.api.manager import GameManager
    from clanquest.core.enums import PlayerClass
    from clanquest.ingest.parser import parse_character_sheet

    name, player_class, backstory = args.name, PlayerClass(args.player_class), ""
    if args.sheet:
        sheet = parse_character_sheet(Path(args.sheet).read_text(encoding="utf-8"))
        name = sheet.name or name
        player_class = sheet.player_class or player_class
        backstory = sheet.backstory or ""
    player = GameManager(_config_from(args)).enlist(args.player_id, name, player_class, backstory)
    print(player.message)


def _run_look(args: argparse.Namespace) -> None:
    from clanquest.api.manager import GameManager

    print(GameManager(_config_from(args)).look(args.player_id))


def _run_init(args: argparse.Namespace) -> None:
    from clanquest.systems.generator import default_world
    from clanquest.utils.persistence import StateStore

    config = _config_from(args)
    store = StateStore.from_config(config)
    if store.exists() and not args.force:
        logger.error("%s already exists; pass --force to overwrite", store.path)
        sys.exit(1)
    store.save(default_world(config))
    print(f"New world written to {store.path}")


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])

    if args.command != "serve":
        from clanquest.utils.logging import setup_logging
        setup_logging(args.log_level)

    match args.command:
        case "serve":
            _run_server(args)
        case "tick":
            _run_tick(args)
        case "enlist":
            _run_enlist(args)
        case "look":
            _run_look(args)
        case "init":
            _run_init(args)


if __name__ == "__main__":
    main()
