from __future__ import annotations
from typing import List

from connectn.core.board import Board
from connectn.types import MovePosition, Player


def available_moves(board: Board) -> List[MovePosition]:
    return board.available_moves()


def apply_move(board: Board, move: MovePosition, player: Player) -> Board:
    return board.apply_move(move, player)


def is_full(board: Board) -> bool:
    return board.is_full()
