from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from connectn.config import COLS, CONNECT_N, ROWS
from connectn.core.board import Board
from connectn.errors import ConfigError
from connectn.types import MovePosition, Player, other

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameState:
    board: Board
    current: Player = "X"
    last_move: Optional[MovePosition] = None
    connect_n: int = CONNECT_N

    def __post_init__(self) -> None:
        if self.current not in ("X", "O"):
            raise ConfigError(f"Unknown player {self.current!r}.")
        if self.connect_n < 2:
            raise ConfigError(f"Run length must be at least 2, got {self.connect_n}.")
        if self.connect_n > max(self.board.rows, self.board.cols):
            logger.warning(
                "Run length %d does not fit on a %dx%d board; no one can win.",
                self.connect_n, self.board.rows, self.board.cols,
            )

    @classmethod
    def new(cls, rows: int = ROWS, cols: int = COLS, connect_n: int = CONNECT_N) -> "GameState":
        return cls(Board.empty(rows, cols), "X", None, connect_n)

    @property
    def opponent(self) -> Player:
        return other(self.current)

    def next(self, move: MovePosition) -> "GameState":
        """State after ``current`` plays ``move``."""
        return GameState(
            board=self.board.apply_move(move, self.current),
            current=self.opponent,
            last_move=move,
            connect_n=self.connect_n,
        )
