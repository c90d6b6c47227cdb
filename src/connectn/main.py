from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from connectn.ai.minimax_agent import MinimaxAgent
from connectn.config import CONNECT_N, SEARCH_DEPTH, configure_logging
from connectn.core.board import Board
from connectn.core.eval_config import DIFFICULTY_CONFIGS, EvaluationConfig, preset
from connectn.errors import ConfigError, ConnectNError
from connectn.game.state import GameState
from connectn.scripts.league import print_standings, round_robin, write_csv
from connectn.scripts.league_play import MatchSettings
from connectn.scripts.league_roster import DEFAULT_DEPTHS, DEFAULT_PRESETS, build_roster

logger = logging.getLogger(__name__)


def _read_board(source: str) -> Board:
    text = sys.stdin.read() if source == "-" else Path(source).read_text()
    return Board.from_text(text)


def _load_config(args: argparse.Namespace) -> EvaluationConfig:
    config = preset(args.preset)
    if args.weights:
        with open(args.weights) as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ConfigError(f"{args.weights}: expected a JSON object of weight groups, got {type(overrides).__name__}.")
        config = config.with_overrides(**overrides)
    return config


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="connectn", description="Minimax move selection for connect-N.")
    ap.add_argument("--debug", action="store_true", help="Log search entry/exit at DEBUG level")
    sub = ap.add_subparsers(dest="cmd", required=True)

    mv = sub.add_parser("move", help="Choose a move for a board read from a text diagram")
    mv.add_argument("--board", type=str, default="-", help="Diagram file ('.', 'X', 'O' per cell, top row first); '-' reads stdin")
    mv.add_argument("--player", type=str, default="X", choices=["X", "O"], help="Player to move")
    mv.add_argument("--connect", type=int, default=CONNECT_N, help="Pieces in a row needed to win")
    mv.add_argument("--preset", type=str, default="medium", choices=sorted(DIFFICULTY_CONFIGS), help="Weight preset")
    mv.add_argument("--weights", type=str, default=None, help="JSON file of weight overrides, e.g. {\"immediate\": {\"can_win\": 1200}}")
    mv.add_argument("--depth", type=int, default=SEARCH_DEPTH, help="Search depth limit")
    mv.add_argument("--legacy", action="store_true", help="Stop searching at the first nonzero static score (may miss forced blocks)")
    mv.add_argument("--alpha-beta", action="store_true", help="Prune with alpha-beta (same move, fewer nodes)")
    mv.add_argument("--scores", action="store_true", help="Also print the score of every candidate")
    mv.add_argument("--debug", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    lg = sub.add_parser("league", help="Round robin between weight presets")
    lg.add_argument("--presets", nargs="+", default=list(DEFAULT_PRESETS), help="Presets to enter")
    lg.add_argument("--depths", nargs="+", type=int, default=list(DEFAULT_DEPTHS), help="Search depths to enter per preset")
    lg.add_argument("--legacy", action="store_true", help="Also enter legacy-terminal variants")
    lg.add_argument("--games-per-pair", type=int, default=2, help="Games per pairing (colours alternate)")
    lg.add_argument("--rows", type=int, default=6)
    lg.add_argument("--cols", type=int, default=7)
    lg.add_argument("--connect", type=int, default=CONNECT_N)
    lg.add_argument("--opening-plies", type=int, default=2, help="Random moves played before the agents take over")
    lg.add_argument("--workers", type=int, default=None, help="Worker processes (default = cpu cores, capped at 6)")
    lg.add_argument("--seed", type=int, default=1234)
    lg.add_argument("--csv-dir", type=str, default=None, help="Write the standings CSV into this directory")
    lg.add_argument("--debug", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    return ap


def cmd_move(args: argparse.Namespace) -> int:
    state = GameState(board=_read_board(args.board), current=args.player, connect_n=args.connect)
    agent = MinimaxAgent(
        name="cli",
        config=_load_config(args),
        depth_limit=args.depth,
        terminal_rule="legacy" if args.legacy else "strict",
        alpha_beta=args.alpha_beta,
        debug=args.debug,
    )

    if args.scores:
        for m, score in agent.score_moves(state):
            print(f"col {m.col}: {score:g}")

    move = agent.choose_move(state)
    print(f"{move.row} {move.col}")
    return 0


def cmd_league(args: argparse.Namespace) -> int:
    rules = ("strict", "legacy") if args.legacy else ("strict",)
    roster = build_roster(presets=args.presets, depths=args.depths, terminal_rules=rules)
    settings = MatchSettings(
        games_per_pair=args.games_per_pair,
        rows=args.rows,
        cols=args.cols,
        connect_n=args.connect,
        opening_plies=args.opening_plies,
    )

    start = time.perf_counter()
    agg = round_robin(roster, settings, seed=args.seed, max_workers=args.workers)
    print_standings(agg)

    if args.csv_dir:
        out_path = write_csv(agg, Path(args.csv_dir))
        print(f"Wrote CSV: {out_path}")

    print(f"Total runtime: {time.perf_counter() - start:.1f}s")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        if args.cmd == "move":
            return cmd_move(args)
        return cmd_league(args)
    except (ConnectNError, ValueError, OSError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
