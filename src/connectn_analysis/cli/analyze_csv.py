from __future__ import annotations

import argparse
from pathlib import Path

from ..io.load_results import RESULTS_GLOB, LoadSpec, load_latest_from_dir, load_results
from ..metrics.summarize import SummaryConfig, group_summary, numeric_summary, top_table

GROUPINGS = ("preset", "depth", "terminal_rule")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="connectn_analysis analyze",
        description="Rank and summarise connect-N preset league standings.",
    )
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--csv", type=str, default=None, help="Standings CSV to read")
    src.add_argument("--results-dir", type=str, default="data/results", help="Read the newest standings CSV in this directory")
    ap.add_argument("--pattern", type=str, default=RESULTS_GLOB, help="File pattern used with --results-dir")

    ap.add_argument("--metric", type=str, default="strength_wilson_lcb", help="Ranking column, e.g. strength_wilson_lcb, ppg, avg_ms_per_move")
    ap.add_argument("--top", type=int, default=20, help="Rows in the ranking table")
    ap.add_argument("--min-games", type=int, default=0, help="Leave out teams with fewer games")
    ap.add_argument("--by", nargs="*", default=list(GROUPINGS), choices=GROUPINGS, help="Pool standings by these name parts")
    ap.add_argument("--describe", action="store_true", help="Also print summary statistics of every numeric column")

    return ap


def _section(title: str, body: str) -> None:
    print(f"\n=== {title} ===")
    print(body)


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    csv_path = Path(args.csv) if args.csv else load_latest_from_dir(Path(args.results_dir), args.pattern)
    df = load_results(LoadSpec(csv_path=csv_path))
    print(f"\nLoaded {csv_path} ({len(df)} teams)")

    cfg = SummaryConfig(metric=args.metric, top_n=args.top, min_games=args.min_games)  # type: ignore[arg-type]
    _section("Top table", top_table(df, cfg).to_string(index=False))

    for by in args.by:
        if by in df.columns:
            _section(f"By {by}", group_summary(df, by).to_string(index=False))

    if args.describe:
        desc = numeric_summary(df)
        if not desc.empty:
            _section("Numeric summary", desc.to_string())

    return 0
