# src/connectn/types.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

Player = Literal["X", "O"]
Cell = Optional[Player]
Score = float


@dataclass(frozen=True, slots=True)
class MovePosition:
    row: int
    col: int


def other(player: Player) -> Player:
    return "O" if player == "X" else "X"
