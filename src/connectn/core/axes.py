from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Axis:
    """
    A line direction on the board as a (row-step, col-step) pair.

    Runs are stored first-to-last along the step, so the "front" end of a run
    is one step before its first cell and the "back" end one step after its
    last cell.
    """
    name: str
    dr: int
    dc: int
    # Gravity fills a column from below, so the cell under a vertical run is never empty.
    single_ended: bool = False


HORIZONTAL = Axis("horizontal", 0, 1)
VERTICAL = Axis("vertical", 1, 0, single_ended=True)
DIAGONAL_DOWN_RIGHT = Axis("diagonal_down_right", 1, 1)
DIAGONAL_DOWN_LEFT = Axis("diagonal_down_left", 1, -1)

# Order matters: open-end probing scores the first axis that reports an open end.
AXES: Tuple[Axis, ...] = (HORIZONTAL, VERTICAL, DIAGONAL_DOWN_RIGHT, DIAGONAL_DOWN_LEFT)

NEIGHBOURS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)
