"""Tests for win and draw detection."""

from __future__ import annotations

from connectn.core.board import Board
from connectn.core.rules import check_winner, check_winner_with_line, is_draw, winning_line_through
from connectn.types import MovePosition

DIAGONAL_WIN = """
.......
.......
...X...
..XO...
.XOX...
XOOO...
"""


def test_horizontal_win_through_last_move():
    board = Board.from_text(
        """
        .......
        OOO....
        XXXX...
        """
    )
    line = winning_line_through(board, MovePosition(2, 3))
    assert line == [MovePosition(2, c) for c in range(4)]
    assert winning_line_through(board, MovePosition(1, 0)) is None
    assert winning_line_through(board, MovePosition(0, 0)) is None


def test_diagonal_win():
    board = Board.from_text(DIAGONAL_WIN)
    line = winning_line_through(board, MovePosition(2, 3))
    assert line == [MovePosition(2, 3), MovePosition(3, 2), MovePosition(4, 1), MovePosition(5, 0)]

    winner, cells = check_winner_with_line(board)
    assert winner == "X"
    assert cells == line
    assert check_winner(board) == "X"


def test_connect_n_is_a_parameter():
    board = Board.from_text(
        """
        ....
        XXX.
        """
    )
    assert check_winner(board, 4) is None
    assert check_winner(board, 3) == "X"
    assert winning_line_through(board, MovePosition(1, 1), 3) is not None


def test_draw(draw_board, empty_board):
    assert check_winner(draw_board) is None
    assert is_draw(draw_board)
    assert not is_draw(empty_board)
