
"""CLI entrypoint for the Pelita player adapter."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Optional

from pelita_adapter.bridge import load_layout, run_game
from pelita_adapter.config import load_config
from pelita_adapter.registry import load_player


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="pelita-adapter")
    parser.add_argument("--log-level", default=None, help="Logging level (default from config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout_parser = subparsers.add_parser("layout")
    layout_parser.add_argument("path", help="Layout file")

    check_parser = subparsers.add_parser("check-player")
    check_parser.add_argument("module", help="Importable player module")

    play_parser = subparsers.add_parser("play")
    play_parser.add_argument("--layout", required=True, help="Layout file")
    play_parser.add_argument("--blue", required=True, help="Blue player module")
    play_parser.add_argument("--red", required=True, help="Red player module")
    play_parser.add_argument("--rounds", type=int, default=300)

    args = parser.parse_args(argv)

    config = load_config(log_level=args.log_level)
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "layout":
        layout = load_layout(args.path)
        print(json.dumps(layout.to_host_dict(), indent=2, sort_keys=True))
        return 0

    if args.command == "check-player":
        player = load_player(args.module)
        print(player.TEAM_NAME)
        return 0

    layout = load_layout(args.layout)
    blue = load_player(args.blue)
    red = load_player(args.red)
    result = run_game(
        layout,
        blue.move,
        red.move,
        max_rounds=args.rounds,
        team_names=(blue.TEAM_NAME, red.TEAM_NAME),
    )
    if isinstance(result, dict):
        print(json.dumps(result, indent=2, sort_keys=True, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
