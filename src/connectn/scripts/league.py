from __future__ import annotations

import csv
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional

from .league_format import BOLD, DIM, Col, print_table, rule, style, term_width
from .league_play import MatchSettings, Pairing, add_result, chunked, run_pairings_batch
from .league_scoring import DEFAULT_Z, strength
from .league_types import Agg, Team

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "avg_nodes_per_move",
    "moves", "time_ms", "nodes",
]


def schedule_round_robin(teams: List[Team], seed: int) -> List[Pairing]:
    items: List[Pairing] = []
    n = len(teams)
    for i in range(n):
        for j in range(i + 1, n):
            a, b = teams[i], teams[j]
            base_seed = seed + i * 10_000 + j * 100
            items.append((a.name, b.name, a.make, b.make, base_seed))
    return items


def round_robin(
    teams: List[Team],
    settings: MatchSettings = MatchSettings(),
    seed: int = 1234,
    max_workers: Optional[int] = None,
    batch_pairings: int = 4,
) -> Dict[str, Agg]:
    """
    Every team plays every other team ``settings.games_per_pair`` times,
    alternating who moves first. Games run in worker processes; each search
    stays single-threaded.
    """
    if len(teams) < 2:
        raise ValueError("A league needs at least two teams.")

    agg: Dict[str, Agg] = {t.name: Agg() for t in teams}
    items = schedule_round_robin(teams, seed)

    if max_workers is None:
        max_workers = min(os.cpu_count() or 2, 6)

    logger.info(
        "Round robin: %d teams, %d pairings, %d games/pair, %d workers",
        len(teams), len(items), settings.games_per_pair, max_workers,
    )

    def apply_game_result(A_name: str, B_name: str, a_is_x: bool, outcome: str, stats) -> None:
        add_result(agg[A_name], agg[B_name], outcome, a_is_x=a_is_x)
        x_name, o_name = (A_name, B_name) if a_is_x else (B_name, A_name)
        agg[x_name].add_effort(stats["X"])
        agg[o_name].add_effort(stats["O"])

    if max_workers <= 1:
        for chunk in chunked(items, batch_pairings):
            for result in run_pairings_batch((chunk, settings)):
                apply_game_result(*result)
        return agg

    with ProcessPoolExecutor(max_workers=max_workers) as ex:
        futures = [ex.submit(run_pairings_batch, (chunk, settings)) for chunk in chunked(items, batch_pairings)]
        for fut in as_completed(futures):
            for result in fut.result():
                apply_game_result(*result)

    return agg


def standings(agg: Dict[str, Agg], z: float = DEFAULT_Z) -> List[tuple[str, Agg]]:
    return sorted(agg.items(), key=lambda kv: (strength(kv[1], z), kv[1].ppg), reverse=True)


def print_standings(agg: Dict[str, Agg], z: float = DEFAULT_Z) -> None:
    w = term_width(100)
    cols = [
        Col("rk", 3, right=True),
        Col("team", 28),
        Col("strength", 9, right=True),
        Col("ppg", 5, right=True),
        Col("g", 4, right=True),
        Col("W-D-L", 9, right=True),
        Col("ms/mv", 8, right=True),
        Col("nodes/mv", 9, right=True),
    ]
    rows = []
    for i, (name, a) in enumerate(standings(agg, z), start=1):
        rows.append([
            str(i),
            name,
            f"{strength(a, z):0.4f}",
            f"{a.ppg:0.3f}",
            str(a.games),
            f"{a.wins}-{a.draws}-{a.losses}",
            f"{a.ms_per_move:0.1f}",
            f"{a.nodes_per_move:0.0f}",
        ])
    print("\n" + style("=== Preset league ===", BOLD))
    print(style(rule(w, "═"), DIM))
    print_table("Standings (strength = Wilson lower bound of points per game)", cols, rows, width=w)


def write_csv(agg: Dict[str, Agg], out_dir: Path, z: float = DEFAULT_Z) -> Path:
    """Write the aggregate standings (one row per team) to a timestamped CSV."""
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"league_results_{ts}.csv"

    with open(out_path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_COLUMNS)
        for name, a in standings(agg, z):
            w.writerow([
                name,
                a.games, a.wins, a.draws, a.losses,
                a.points, round(a.ppg, 6),
                round(strength(a, z), 6),
                round(a.ms_per_move, 3),
                round(a.nodes_per_move, 1),
                a.moves, a.time_ms, a.nodes,
            ])

    logger.info("Wrote standings to %s", out_path)
    return out_path
