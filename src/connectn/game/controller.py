from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from connectn.ai.base import Agent
from connectn.core.rules import winning_line_through
from connectn.game.state import GameState
from connectn.types import MovePosition, Player

logger = logging.getLogger(__name__)


def _agent_name(agent: Agent, fallback: str) -> str:
    name = getattr(agent, "name", None)
    if not name:
        return fallback
    return str(name)


def _empty_stats() -> Dict[str, Dict[str, int]]:
    return {
        "X": {"moves": 0, "time_ms": 0, "nodes": 0},
        "O": {"moves": 0, "time_ms": 0, "nodes": 0},
    }


@dataclass(slots=True)
class GameRecord:
    winner: Optional[Player]
    line: Optional[List[MovePosition]]
    moves: List[MovePosition]
    final: GameState
    stats: Dict[str, Dict[str, int]] = field(default_factory=_empty_stats)

    @property
    def outcome(self) -> str:
        """Winner token, or "D" for a draw."""
        return self.winner or "D"


def play_game(
    agent_x: Agent,
    agent_o: Agent,
    state: Optional[GameState] = None,
    opening_plies: int = 0,
    rng: Optional[random.Random] = None,
) -> GameRecord:
    """
    Play one game between two agents without any rendering.

    ``opening_plies`` random moves are made first so repeated games between
    deterministic agents do not all follow the same line.
    """
    state = state or GameState.new()
    rng = rng or random.Random(0)
    moves: List[MovePosition] = []
    stats = _empty_stats()

    for _ in range(opening_plies):
        options = state.board.available_moves()
        if not options:
            break
        move = rng.choice(options)
        state = state.next(move)
        moves.append(move)
        if winning_line_through(state.board, move, state.connect_n):
            break

    while True:
        if state.last_move is not None:
            line = winning_line_through(state.board, state.last_move, state.connect_n)
            if line is not None:
                winner = state.board[state.last_move]
                logger.debug("%s wins after %d moves", winner, len(moves))
                return GameRecord(winner, line, moves, state, stats)

        if state.board.is_full():
            logger.debug("Draw after %d moves", len(moves))
            return GameRecord(None, None, moves, state, stats)

        agent = agent_x if state.current == "X" else agent_o
        move = agent.choose_move(state)
        if move not in state.board.available_moves():
            raise ValueError(
                f"{_agent_name(agent, 'Player ' + state.current)} played illegal move {move}."
            )

        info = getattr(agent, "last_info", None) or {}
        side = stats[state.current]
        side["moves"] += 1
        side["time_ms"] += max(1, int(info.get("time_ms", 0)))
        side["nodes"] += int(info.get("nodes", 0))

        state = state.next(move)
        moves.append(move)


def column_moves(columns: List[int], state: Optional[GameState] = None) -> Tuple[GameState, List[MovePosition]]:
    """Drop pieces into ``columns`` in turn; handy for building positions."""
    state = state or GameState.new()
    played: List[MovePosition] = []
    for col in columns:
        move = state.board.drop_position(col)
        state = state.next(move)
        played.append(move)
    return state, played
