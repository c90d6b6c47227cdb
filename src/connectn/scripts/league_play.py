from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Sequence, Tuple

from connectn.config import COLS, CONNECT_N, ROWS
from connectn.game.controller import play_game
from connectn.game.state import GameState

from .league_types import Agg

# (A name, B name, A factory, B factory, base seed)
Pairing = Tuple[str, str, Callable[[], object], Callable[[], object], int]
# (A name, B name, A played X, outcome "X"/"O"/"D", per-side stats)
GameResult = Tuple[str, str, bool, str, Dict[str, Dict[str, int]]]


@dataclass(frozen=True)
class MatchSettings:
    games_per_pair: int = 2
    rows: int = ROWS
    cols: int = COLS
    connect_n: int = CONNECT_N
    opening_plies: int = 2


def play_headless(agent_x, agent_o, settings: MatchSettings, seed_base: int = 0) -> Tuple[str, Dict[str, Dict[str, int]]]:
    state = GameState.new(settings.rows, settings.cols, settings.connect_n)
    record = play_game(
        agent_x,
        agent_o,
        state=state,
        opening_plies=settings.opening_plies,
        rng=random.Random(seed_base),
    )
    return record.outcome, record.stats


def add_result(agg_a: Agg, agg_b: Agg, outcome: str, a_is_x: bool) -> None:
    """Book a game with ``outcome`` "X", "O" or "D" for both teams."""
    if outcome == "D":
        agg_a.record("D")
        agg_b.record("D")
        return

    a_won = (outcome == "X") == a_is_x
    agg_a.record("W" if a_won else "L")
    agg_b.record("L" if a_won else "W")


def run_pairings_batch(args: Tuple[Sequence[Pairing], MatchSettings]) -> List[GameResult]:
    """Worker entry point: play every game of a chunk of pairings, alternating colours."""
    (batch_items, settings) = args
    out: List[GameResult] = []
    for (A_name, B_name, A_make, B_make, base_seed) in batch_items:
        for g in range(settings.games_per_pair):
            if g % 2 == 0:
                outcome, stats = play_headless(A_make(), B_make(), settings, seed_base=(base_seed + g))
                out.append((A_name, B_name, True, outcome, stats))
            else:
                outcome, stats = play_headless(B_make(), A_make(), settings, seed_base=(base_seed + g))
                out.append((A_name, B_name, False, outcome, stats))
    return out


def chunked(lst: Sequence, size: int) -> Iterator[Sequence]:
    for i in range(0, len(lst), size):
        yield lst[i : i + size]
