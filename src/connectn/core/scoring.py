# src/connectn/core/scoring.py

from __future__ import annotations

import math
from typing import Iterable, Optional, Set, Tuple

from connectn.config import CONNECT_N
from connectn.core.eval_config import DEFAULT_EVAL_CONFIG, EvaluationConfig, RunWeights
from connectn.core.axes import NEIGHBOURS
from connectn.core.board import Board
from connectn.core.patterns import Run, find_runs, first_open_ends, immediate_threats
from connectn.core.rules import winning_line_through
from connectn.types import MovePosition, Player, Score


def center_columns(cols: int) -> Tuple[int, ...]:
    """The two middle columns; for seven columns these are 2 and 3."""
    mid = cols // 2
    return tuple(c for c in (mid - 1, mid) if 0 <= c < cols)


def near_center_columns(cols: int) -> Tuple[int, ...]:
    mid = cols // 2
    center = center_columns(cols)
    return tuple(c for c in (mid - 2, mid + 1) if 0 <= c < cols and c not in center)


def has_adjacent_pieces(board: Board, r: int, c: int, player: Player) -> bool:
    g = board.grid
    for dr, dc in NEIGHBOURS:
        nr, nc = r + dr, c + dc
        if board.in_bounds(nr, nc) and g[nr][nc] == player:
            return True
    return False


def _round1(value: float) -> float:
    # half-up, so 2.25 -> 2.3 rather than banker's rounding
    return math.floor(value * 10 + 0.5) / 10


def terminal_score(
    board: Board,
    mover: Player,
    last_move: Optional[MovePosition],
    depth: int,
    config: EvaluationConfig = DEFAULT_EVAL_CONFIG,
    connect_n: int = CONNECT_N,
) -> Optional[Score]:
    """
    Score of a finished game from ``mover``'s side, or None if play goes on.

    Faster wins score higher and slower losses score less negative.
    """
    if last_move is not None and winning_line_through(board, last_move, connect_n):
        if board[last_move] == mover:
            return config.terminal.win - depth
        return depth + config.terminal.loss
    if board.is_full():
        return config.terminal.tie
    return None


def _score_runs(
    board: Board,
    runs: Iterable[Run],
    weights: RunWeights,
    own: bool,
    skip: Set[Run],
    center: Tuple[int, ...] = (),
) -> Score:
    total = 0.0
    for run in runs:
        if run in skip:
            continue
        ends = first_open_ends(board, run)
        if ends.count == 0:
            continue

        if own:
            total += weights.both_ends_open if ends.count == 2 else weights.one_end_open
        else:
            total -= weights.block_opponent_both_ends if ends.count == 2 else weights.block_opponent_one_end

        if center and any(p.col in center for p in run.cells):
            total += weights.center_columns if own else -weights.center_columns
    return total


def positional_value(board: Board, player: Player, config: EvaluationConfig = DEFAULT_EVAL_CONFIG) -> Score:
    """
    Static value of where ``player``'s pieces sit, independent of runs.
    Rounded to one decimal place.
    """
    w = config.positional
    g = board.grid
    rows, cols = board.rows, board.cols
    center = center_columns(cols)
    near = near_center_columns(cols)

    value = 0.0

    for r in range(rows):
        for c in range(cols):
            if g[r][c] != player:
                continue

            if c in center:
                value += w.center_control
            elif c in near:
                value += w.center_control * 0.5

            from_bottom = rows - 1 - r
            if from_bottom <= 2:
                value += w.foundation_pieces * (3 - from_bottom)

            adjacent = has_adjacent_pieces(board, r, c, player)
            if adjacent:
                value += w.adjacent_to_pieces
            elif c in center:
                value += w.one_in_row_center
            else:
                value += w.one_in_row_edge

            # support: bottom row counts 3, plus each filled cell directly below, capped at 5
            support = 3 if r == rows - 1 else 0
            for below in range(r + 1, rows):
                if g[below][c] is None:
                    break
                support += 1
            value += min(support, 5) * 0.5

            if c in center and r < rows / 2:
                value += w.center_control * 0.3

    # empty cells that would join up existing pieces
    for r in range(rows):
        for c in range(cols):
            if g[r][c] is not None:
                continue

            link = 0.0
            if (c > 0 and g[r][c - 1] == player) or (c < cols - 1 and g[r][c + 1] == player):
                link += 1
            if r < rows - 1 and g[r + 1][c] == player:
                link += 1
            for dr, dc in ((-1, -1), (-1, 1), (1, -1), (1, 1)):
                nr, nc = r + dr, c + dc
                if board.in_bounds(nr, nc) and g[nr][nc] == player:
                    link += 0.5

            if link > 0:
                value += link * 0.5

    return _round1(value)


def count_isolated(board: Board, player: Player) -> int:
    return sum(1 for p in board.pieces(player) if not has_adjacent_pieces(board, p.row, p.col, player))


def count_edge_pieces(board: Board, player: Player) -> int:
    edges = {0, board.cols - 1}
    return sum(1 for p in board.pieces(player) if p.col in edges)


def edge_penalty(board: Board, player: Player, config: EvaluationConfig = DEFAULT_EVAL_CONFIG) -> Score:
    n = count_edge_pieces(board, player)
    penalty = n * config.penalties.edge_columns
    # edge-heavy play is penalised twice
    if n > board.rows / 2:
        penalty += n * config.penalties.edge_columns
    return penalty


def evaluate(
    board: Board,
    mover: Player,
    opponent: Player,
    last_move: Optional[MovePosition],
    depth: int = 0,
    config: EvaluationConfig = DEFAULT_EVAL_CONFIG,
    connect_n: int = CONNECT_N,
) -> Score:
    """
    Signed score of ``board`` from ``mover``'s point of view.

    A finished game short-circuits to the terminal weights. Otherwise the
    score adds up immediate threats, runs one and two short of a win,
    positional value and penalties, each term mirrored for the opponent.
    """
    term = terminal_score(board, mover, last_move, depth, config, connect_n)
    if term is not None:
        return term

    total = 0.0

    # immediate threats
    imm = config.immediate
    my_threats = immediate_threats(board, mover, connect_n)
    opp_threats = immediate_threats(board, opponent, connect_n)

    total += len(my_threats) * imm.can_win
    total -= len(opp_threats) * imm.must_block
    if len(my_threats) > 1:
        total += imm.fork_opportunity
    if len(opp_threats) > 1:
        total -= imm.fork_opportunity

    # runs one short, minus the ones already scored as threats
    counted = {t.run for t in my_threats} | {t.run for t in opp_threats}
    total += _score_runs(board, find_runs(board, mover, connect_n - 1), config.three_in_row, True, counted)
    total += _score_runs(board, find_runs(board, opponent, connect_n - 1), config.three_in_row, False, counted)

    # runs two short
    center = center_columns(board.cols)
    total += _score_runs(board, find_runs(board, mover, connect_n - 2), config.two_in_row, True, set(), center)
    total += _score_runs(board, find_runs(board, opponent, connect_n - 2), config.two_in_row, False, set(), center)

    total += positional_value(board, mover, config) - positional_value(board, opponent, config)

    iso = config.penalties.isolated_pieces
    total += count_isolated(board, mover) * iso
    total -= count_isolated(board, opponent) * iso
    total += edge_penalty(board, mover, config)
    total -= edge_penalty(board, opponent, config)

    return total
