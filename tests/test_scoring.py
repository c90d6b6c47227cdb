"""Tests for the heuristic evaluator."""

from __future__ import annotations

import pytest

from connectn.core.board import Board
from connectn.core.eval_config import DEFAULT_EVAL_CONFIG
from connectn.core.scoring import (
    center_columns,
    count_edge_pieces,
    count_isolated,
    edge_penalty,
    evaluate,
    near_center_columns,
    positional_value,
    terminal_score,
)
from connectn.types import MovePosition

MIDGAME = """
.......
.......
.......
...O...
..XXO..
.OXOX..
"""


def test_center_columns():
    assert center_columns(7) == (2, 3)
    assert near_center_columns(7) == (1, 4)
    assert center_columns(1) == (0,)


def test_empty_board_scores_zero(empty_board):
    assert evaluate(empty_board, "X", "O", None) == 0


def test_single_piece_positional_values(empty_board):
    # center + foundation + lone-center bonus + support + empty-cell links
    center = empty_board.apply_move(MovePosition(5, 3), "X")
    assert positional_value(center, "X") == pytest.approx(31.5)
    assert positional_value(center, "O") == 0

    corner = empty_board.apply_move(MovePosition(5, 0), "X")
    # 18.75 rounds half-up
    assert positional_value(corner, "X") == pytest.approx(18.8)


def test_single_piece_evaluation(empty_board):
    scores = [
        evaluate(empty_board.apply_move(m, "X"), "X", "O", m)
        for m in empty_board.available_moves()
    ]
    assert scores == pytest.approx([13.8, 21.5, 28.5, 28.5, 21.5, 16.5, 13.8])


def test_terminal_scores_prefer_fast_wins():
    board = Board.from_text(
        """
        .......
        OOO....
        XXXX...
        """
    )
    last = MovePosition(2, 3)
    assert terminal_score(board, "X", last, 2) == 10_000 - 2
    assert evaluate(board, "X", "O", last, depth=2) == 10_000 - 2
    assert evaluate(board, "O", "X", last, depth=2) == 2 - 10_000
    assert terminal_score(board, "X", None, 0) is None


def test_full_board_is_a_tie_for_both_sides(draw_board):
    last = MovePosition(0, 0)
    assert evaluate(draw_board, "X", "O", last) == DEFAULT_EVAL_CONFIG.terminal.tie
    assert evaluate(draw_board, "O", "X", last) == DEFAULT_EVAL_CONFIG.terminal.tie


def test_evaluation_is_antisymmetric_with_mirrored_weights():
    cfg = DEFAULT_EVAL_CONFIG.with_overrides(
        immediate={"must_block": 1000},
        three_in_row={"block_opponent_both_ends": 300, "block_opponent_one_end": 150},
        two_in_row={"block_opponent_both_ends": 50, "block_opponent_one_end": 25},
    )
    board = Board.from_text(MIDGAME)
    x_view = evaluate(board, "X", "O", None, config=cfg)
    assert x_view == pytest.approx(-evaluate(board, "O", "X", None, config=cfg))


def test_immediate_threat_weight():
    board = Board.from_text(
        """
        .......
        OO.....
        XXX....
        """
    )
    base = evaluate(board, "X", "O", None)
    boosted = evaluate(board, "X", "O", None, config=DEFAULT_EVAL_CONFIG.with_overrides(immediate={"can_win": 2000}))
    assert boosted - base == pytest.approx(1000)

    block = evaluate(board, "O", "X", None, config=DEFAULT_EVAL_CONFIG.with_overrides(immediate={"must_block": 1900}))
    assert block - evaluate(board, "O", "X", None) == pytest.approx(-1000)


def test_fork_bonus():
    board = Board.from_text(
        """
        .......
        .......
        .......
        ......X
        OO....X
        XXX.OOX
        """
    )
    base = evaluate(board, "X", "O", None)
    boosted = evaluate(board, "X", "O", None, config=DEFAULT_EVAL_CONFIG.with_overrides(immediate={"fork_opportunity": 850}))
    assert boosted - base == pytest.approx(100)


def test_threat_runs_are_not_scored_twice():
    board = Board.from_text(
        """
        .......
        OO.....
        XXX....
        """
    )
    base = evaluate(board, "X", "O", None)
    cfg = DEFAULT_EVAL_CONFIG.with_overrides(three_in_row={"one_end_open": 999, "both_ends_open": 999})
    assert evaluate(board, "X", "O", None, config=cfg) == pytest.approx(base)


def test_penalties():
    board = Board.from_text(
        """
        .......
        .......
        .......
        O......
        X.....X
        X.....X
        """
    )
    assert count_edge_pieces(board, "X") == 4
    # more edge pieces than half the height: applied twice
    assert edge_penalty(board, "X") == -16
    assert edge_penalty(board, "O") == -2
    assert count_isolated(board, "O") == 1
    assert count_isolated(board, "X") == 0
