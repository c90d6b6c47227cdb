"""Tests for game state and the headless game loop."""

from __future__ import annotations

import logging
import random

import pytest

from connectn.ai.minimax_agent import MinimaxAgent
from connectn.core.board import Board
from connectn.errors import ConfigError
from connectn.game.controller import column_moves, play_game
from connectn.game.state import GameState
from connectn.types import MovePosition


class ColumnZeroAgent:
    name = "stubborn"

    def choose_move(self, state: GameState) -> MovePosition:
        return MovePosition(0, 0)


def test_next_flips_player_and_keeps_input():
    state = GameState.new()
    after = state.next(MovePosition(5, 3))

    assert after.current == "O"
    assert after.opponent == "X"
    assert after.last_move == MovePosition(5, 3)
    assert after.board[MovePosition(5, 3)] == "X"
    assert state.board[MovePosition(5, 3)] is None


def test_state_validation(caplog):
    with pytest.raises(ConfigError):
        GameState.new(connect_n=1)
    with pytest.raises(ConfigError):
        GameState(Board.empty(), current="Z")  # type: ignore[arg-type]

    with caplog.at_level(logging.WARNING, logger="connectn.game.state"):
        GameState.new(rows=6, cols=7, connect_n=8)
    assert any("does not fit" in r.getMessage() for r in caplog.records)


def test_column_moves():
    state, played = column_moves([3, 3, 4])
    assert played == [MovePosition(5, 3), MovePosition(4, 3), MovePosition(5, 4)]
    assert state.current == "O"
    assert state.board[MovePosition(4, 3)] == "O"


def test_play_game_between_agents():
    state = GameState.new(rows=4, cols=5, connect_n=3)
    record = play_game(
        MinimaxAgent(name="a", depth_limit=1),
        MinimaxAgent(name="b", depth_limit=1),
        state=state,
        opening_plies=1,
        rng=random.Random(3),
    )

    assert record.outcome in ("X", "O", "D")
    pieces = sum(1 for row in record.final.board.grid for cell in row if cell is not None)
    assert len(record.moves) == pieces
    if record.winner is not None:
        assert len(record.line) >= 3
        assert all(record.final.board[p] == record.winner for p in record.line)
    else:
        assert record.final.board.is_full()

    agent_moves = record.stats["X"]["moves"] + record.stats["O"]["moves"]
    assert agent_moves == len(record.moves) - 1


def test_first_player_wins_a_race():
    state, _ = column_moves([0, 6, 1, 6, 2, 5])
    record = play_game(MinimaxAgent(depth_limit=1), MinimaxAgent(depth_limit=1), state=state)
    assert record.winner == "X"
    assert record.moves[0] == MovePosition(5, 3)


def test_illegal_move_is_rejected():
    state, _ = column_moves([0] * 6)
    with pytest.raises(ValueError):
        play_game(ColumnZeroAgent(), ColumnZeroAgent(), state=state)
