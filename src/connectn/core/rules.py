from __future__ import annotations
from typing import Optional, List, Tuple

from connectn.config import CONNECT_N
from connectn.core.axes import AXES
from connectn.core.board import Board
from connectn.core.patterns import find_runs
from connectn.types import MovePosition, Player


def winning_line_through(
    board: Board, move: MovePosition, connect_n: int = CONNECT_N
) -> Optional[List[MovePosition]]:
    """
    The line of at least ``connect_n`` pieces that passes through ``move``,
    or None. Only the owner of the cell at ``move`` is considered.
    """
    player = board[move]
    if player is None:
        return None

    g = board.grid
    for axis in AXES:
        line = [move]
        for sign in (-1, 1):
            r, c = move.row + sign * axis.dr, move.col + sign * axis.dc
            while board.in_bounds(r, c) and g[r][c] == player:
                line.append(MovePosition(r, c))
                r, c = r + sign * axis.dr, c + sign * axis.dc
        if len(line) >= connect_n:
            return sorted(line, key=lambda p: (p.row, p.col))

    return None


def check_winner_with_line(
    board: Board, connect_n: int = CONNECT_N
) -> Optional[Tuple[Player, List[MovePosition]]]:
    for player in ("X", "O"):
        runs = find_runs(board, player, connect_n)
        if runs:
            return player, list(runs[0].cells)
    return None


def check_winner(board: Board, connect_n: int = CONNECT_N) -> Optional[Player]:
    res = check_winner_with_line(board, connect_n)
    return res[0] if res else None


def is_draw(board: Board, connect_n: int = CONNECT_N) -> bool:
    return board.is_full() and check_winner(board, connect_n) is None
