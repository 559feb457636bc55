# Area: Shared
"""
bb_engine.cli — Command-line interface
======================================

Simulates a full season with the auto-pilot in the human seat and
prints the narrative feed and the result.

Usage:
    python -m bb_engine --seed 7
    python -m bb_engine --seed 7 --players roster.json --json
    BB_ENABLE_TWISTS=true python -m bb_engine --config game.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .autopilot import AutoPilot
from .config import load_config, validate_config
from .engine import DEFAULT_SEED, GameEngine
from .errors import ConfigError
from .roster import default_roster, load_roster
from ._shared.logging_config import setup_logging
from ._shared.logging_formatters import disable_narrative_mode, enable_narrative_mode


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="bb_engine",
        description="Simulate a deterministic elimination season",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m bb_engine --seed 7
  python -m bb_engine --seed 7 --twists --jury-return
  python -m bb_engine --players roster.json --json
        """,
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Season seed")
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--players", type=str, help="Path to JSON roster file")
    parser.add_argument("--no-human", action="store_true",
                        help="Cast every houseguest as AI (default cast only)")
    parser.add_argument("--jury-size", type=int, help="Override jury size")
    parser.add_argument("--twists", action="store_true", help="Enable the Battle Back twist")
    parser.add_argument("--jury-return", action="store_true", help="Enable the jury return")
    parser.add_argument("--json", action="store_true", help="Print the final snapshots as JSON")
    parser.add_argument("--log-file", type=str, help="Write JSON-lines logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show engine logs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    setup_logging(args.log_file, level=logging.DEBUG if args.verbose else logging.INFO)
    if not args.verbose:
        enable_narrative_mode()
    try:
        return run(args)
    finally:
        disable_narrative_mode()


def run(args: argparse.Namespace) -> int:
    """Load config and roster, play one season and print the result."""
    try:
        config = load_config(args.config)
        overrides = {}
        if args.jury_size is not None:
            overrides["jury_size"] = args.jury_size
        if args.twists:
            overrides["enable_twists"] = True
        if args.jury_return:
            overrides["enable_jury_return"] = True
        if overrides:
            config = validate_config({**config.model_dump(), **overrides}, source="command line")
        if args.players:
            players = load_roster(args.players)
        else:
            players = default_roster(human_id=None if args.no_human else "p1")
    except ConfigError as e:
        print(e.format_error_log(), file=sys.stderr)
        return 1

    engine = GameEngine(players=players, seed=args.seed, config=config)
    AutoPilot(engine).play_season()
    archive = engine.archive_season()

    if args.json:
        print(json.dumps({
            "game": engine.snapshot(),
            "finale": engine.finale_snapshot(),
            "archive": archive.to_dict() if archive else None,
        }, indent=2))
        return 0

    for text in reversed(engine.state.narrative.texts()):
        print(text)
    finale = engine.finale_snapshot()
    print()
    print(f"Winner:    {engine.state.name_of(finale['winner_id'])}")
    print(f"Runner-up: {engine.state.name_of(finale['runner_up_id'])}")
    print(f"Jury:      {finale['tally']}")
    return 0
