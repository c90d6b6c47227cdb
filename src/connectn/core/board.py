# src/connectn/core/board.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from connectn.config import ROWS, COLS
from connectn.errors import BoardShapeError
from connectn.types import Cell, MovePosition, Player

Grid = Tuple[Tuple[Cell, ...], ...]

_EMPTY_CHARS = ".-_"
_PLAYERS = ("X", "O")


@dataclass(frozen=True, slots=True)
class Board:
    """
    Immutable grid. Row 0 is the top row, row ``rows - 1`` is the bottom.

    Every move produces a new Board; rows that did not change are shared
    between boards, which is safe because they are tuples.
    """
    grid: Grid

    @classmethod
    def empty(cls, rows: int = ROWS, cols: int = COLS) -> "Board":
        if rows <= 0 or cols <= 0:
            raise BoardShapeError(f"Board must have at least one row and column, got {rows}x{cols}.")
        return cls(tuple(tuple(None for _ in range(cols)) for _ in range(rows)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]], check_gravity: bool = True) -> "Board":
        if not rows:
            raise BoardShapeError("Board has no rows.")
        width = len(rows[0])
        if width == 0:
            raise BoardShapeError("Board rows are empty.")
        for i, row in enumerate(rows):
            if len(row) != width:
                raise BoardShapeError(f"Row {i} has {len(row)} cells, expected {width}.")
            for cell in row:
                if cell is not None and cell not in _PLAYERS:
                    raise BoardShapeError(f"Unknown cell value {cell!r} in row {i}.")

        board = cls(tuple(tuple(row) for row in rows))
        if check_gravity:
            floating = board.floating_cells()
            if floating:
                r, c = floating[0]
                raise BoardShapeError(f"Piece at row {r}, col {c} has an empty cell beneath it.")
        return board

    @classmethod
    def from_text(cls, text: str) -> "Board":
        """
        Parse a diagram such as::

            . . . . . . .
            . . . X . . .
            . . O X O . .

        Blank lines and spaces are ignored.
        """
        rows: List[List[Cell]] = []
        for line in text.strip().splitlines():
            chars = line.replace(" ", "").strip()
            if not chars:
                continue
            row: List[Cell] = []
            for ch in chars:
                if ch in _EMPTY_CHARS:
                    row.append(None)
                elif ch.upper() in _PLAYERS:
                    row.append(ch.upper())  # type: ignore[arg-type]
                else:
                    raise BoardShapeError(f"Unknown board character {ch!r}.")
            rows.append(row)
        return cls.from_rows(rows)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0])

    def __getitem__(self, pos: MovePosition) -> Cell:
        return self.grid[pos.row][pos.col]

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_playable(self, r: int, c: int) -> bool:
        """
        An empty cell is playable if it is on the bottom row or there is a piece below it.
        Out-of-range cells are never playable.
        """
        if not self.in_bounds(r, c) or self.grid[r][c] is not None:
            return False
        return r == self.rows - 1 or self.grid[r + 1][c] is not None

    def available_moves(self) -> List[MovePosition]:
        moves: List[MovePosition] = []
        for c in range(self.cols):
            for r in range(self.rows - 1, -1, -1):
                if self.grid[r][c] is None:
                    moves.append(MovePosition(r, c))
                    break
        return moves

    def is_full(self) -> bool:
        return all(self.grid[0][c] is not None for c in range(self.cols))

    def is_move_valid(self, col: int) -> bool:
        return 0 <= col < self.cols and self.grid[0][col] is None

    def drop_position(self, col: int) -> MovePosition:
        """Cell a piece dropped into ``col`` would land on."""
        if col < 0 or col >= self.cols:
            raise ValueError("Column out of range.")
        for r in range(self.rows - 1, -1, -1):
            if self.grid[r][col] is None:
                return MovePosition(r, col)
        raise ValueError("Column is full.")

    def apply_move(self, move: MovePosition, player: Player) -> "Board":
        # No legality check: callers pass positions from available_moves().
        row = list(self.grid[move.row])
        row[move.col] = player
        return Board(self.grid[: move.row] + (tuple(row),) + self.grid[move.row + 1 :])

    def pieces(self, player: Player) -> Iterable[MovePosition]:
        for r, row in enumerate(self.grid):
            for c, cell in enumerate(row):
                if cell == player:
                    yield MovePosition(r, c)

    def floating_cells(self) -> List[Tuple[int, int]]:
        out: List[Tuple[int, int]] = []
        for c in range(self.cols):
            seen_empty = False
            for r in range(self.rows - 1, -1, -1):
                if self.grid[r][c] is None:
                    seen_empty = True
                elif seen_empty:
                    out.append((r, c))
        return out

    def to_text(self) -> str:
        return "\n".join(" ".join(cell or "." for cell in row) for row in self.grid)
