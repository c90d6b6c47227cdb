# src/connectn/core/patterns.py

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from connectn.core.axes import AXES, Axis
from connectn.core.board import Board
from connectn.types import MovePosition, Player


@dataclass(frozen=True, slots=True)
class Run:
    cells: Tuple[MovePosition, ...]
    axis: Axis
    player: Player

    @property
    def first(self) -> MovePosition:
        return self.cells[0]

    @property
    def last(self) -> MovePosition:
        return self.cells[-1]


@dataclass(frozen=True, slots=True)
class OpenEnds:
    front_open: bool
    back_open: bool

    @property
    def count(self) -> int:
        return int(self.front_open) + int(self.back_open)


@dataclass(frozen=True, slots=True)
class Threat:
    run: Run
    winning_moves: Tuple[MovePosition, ...]

    @property
    def axis(self) -> Axis:
        return self.run.axis


def find_runs(
    board: Board,
    player: Player,
    length: int,
    axes: Sequence[Axis] = AXES,
) -> List[Run]:
    """
    Every window of ``length`` consecutive ``player`` cells along each axis.

    A longer line yields one run per window it contains, so a line of four
    holds two runs of three.
    """
    if length <= 0:
        return []

    g = board.grid
    rows, cols = board.rows, board.cols
    runs: List[Run] = []

    for axis in axes:
        dr, dc = axis.dr, axis.dc
        for r in range(rows):
            end_r = r + dr * (length - 1)
            if not 0 <= end_r < rows:
                continue
            for c in range(cols):
                end_c = c + dc * (length - 1)
                if not 0 <= end_c < cols:
                    continue
                if all(g[r + dr * i][c + dc * i] == player for i in range(length)):
                    cells = tuple(MovePosition(r + dr * i, c + dc * i) for i in range(length))
                    runs.append(Run(cells, axis, player))

    return runs


def _end_cells(run: Run, axis: Axis) -> Tuple[MovePosition, Optional[MovePosition]]:
    front = MovePosition(run.first.row - axis.dr, run.first.col - axis.dc)
    if axis.single_ended:
        return front, None
    back = MovePosition(run.last.row + axis.dr, run.last.col + axis.dc)
    return front, back


def open_ends(board: Board, run: Run, axis: Optional[Axis] = None) -> OpenEnds:
    """
    Whether a piece could land right now just beyond each end of ``run``,
    measured along ``axis`` (the run's own axis by default).
    """
    axis = axis or run.axis
    front, back = _end_cells(run, axis)
    front_open = board.is_playable(front.row, front.col)
    back_open = back is not None and board.is_playable(back.row, back.col)
    return OpenEnds(front_open, back_open)


def first_open_ends(board: Board, run: Run) -> OpenEnds:
    """
    Probe the axes in table order and return the first result with an open end.

    Returns an empty OpenEnds when no axis has one.
    """
    for axis in AXES:
        ends = open_ends(board, run, axis)
        if ends.count > 0:
            return ends
    return OpenEnds(False, False)


def winning_moves(board: Board, run: Run) -> Tuple[MovePosition, ...]:
    front, back = _end_cells(run, run.axis)
    return tuple(
        cell for cell in (front, back)
        if cell is not None and board.is_playable(cell.row, cell.col)
    )


def immediate_threats(board: Board, player: Player, connect_n: int) -> List[Threat]:
    """
    Runs one short of ``connect_n`` whose completing cell can be played now.

    Empty cells with nothing underneath them do not count.
    """
    threats: List[Threat] = []
    for run in find_runs(board, player, connect_n - 1):
        moves = winning_moves(board, run)
        if moves:
            threats.append(Threat(run, moves))
    return threats
