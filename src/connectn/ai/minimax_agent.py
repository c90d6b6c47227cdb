from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from math import inf
from typing import List, Literal, Optional, Tuple

from connectn.config import DEBUG, SEARCH_DEPTH
from connectn.core.board import Board
from connectn.core.eval_config import DEFAULT_EVAL_CONFIG, EvaluationConfig
from connectn.core.scoring import evaluate, terminal_score
from connectn.errors import ConfigError, NoLegalMoveError
from connectn.game.state import GameState
from connectn.types import MovePosition, Player, Score, other

logger = logging.getLogger(__name__)

# "strict" (default): stop only at a won, lost or tied position, or at the depth limit.
# "legacy": stop descending at the first node whose evaluation is nonzero. A
# counter-threat can then outscore a forced block.
TerminalRule = Literal["legacy", "strict"]
TERMINAL_RULES = ("legacy", "strict")


def _center_first(moves: List[MovePosition], cols: int) -> List[MovePosition]:
    center = (cols - 1) / 2
    return sorted(moves, key=lambda m: abs(m.col - center))


@dataclass(slots=True)
class MinimaxAgent:
    """
    Depth-limited minimax over the weighted heuristic in ``core.scoring``.

    Every root candidate is searched as a minimising node at depth 0, since
    the opponent replies next. The candidate with the strictly greatest score
    wins, so ties go to the leftmost column.

    ``alpha_beta`` prunes and orders interior nodes center-first; the root
    keeps left-to-right order and the chosen move is the same either way.
    """
    name: str = "Minimax AI"
    config: EvaluationConfig = DEFAULT_EVAL_CONFIG
    depth_limit: int = SEARCH_DEPTH
    terminal_rule: TerminalRule = "strict"
    alpha_beta: bool = False
    # checked between root candidates only; None searches every candidate
    time_limit_sec: Optional[float] = None
    debug: bool = DEBUG

    # Stats
    last_info: dict = field(default_factory=dict)

    _nodes: int = 0
    _cutoffs: int = 0

    def __post_init__(self) -> None:
        if self.terminal_rule not in TERMINAL_RULES:
            raise ConfigError(f"Unknown terminal rule {self.terminal_rule!r}; choose from {TERMINAL_RULES}.")
        if self.depth_limit < 0:
            raise ConfigError("Search depth limit must be >= 0.")

    def choose_move(self, state: GameState) -> MovePosition:
        board = state.board
        me: Player = state.current

        moves = board.available_moves()
        if not moves:
            raise NoLegalMoveError("No legal move: every column is full.")

        if self.debug:
            logger.debug(
                "%s choosing for %s: %d candidates, depth_limit=%d, rule=%s, alpha_beta=%s",
                self.name, me, len(moves), self.depth_limit, self.terminal_rule, self.alpha_beta,
            )

        start = time.perf_counter()
        deadline = None if self.time_limit_sec is None else start + max(0.0, float(self.time_limit_sec))

        self._nodes = 0
        self._cutoffs = 0

        best_move = moves[0]
        best_score = -inf
        searched = 0

        for m in moves:
            if deadline is not None and searched and time.perf_counter() >= deadline:
                logger.info("%s hit its %.3fs limit after %d of %d candidates", self.name, self.time_limit_sec, searched, len(moves))
                break

            # a child scoring <= best_score cannot be picked, so a bound is enough
            alpha = best_score if self.alpha_beta else -inf
            score = self._min_value(board.apply_move(m, me), 0, me, m, state.connect_n, alpha, inf)
            searched += 1

            if score > best_score:
                best_score = score
                best_move = m

        elapsed = time.perf_counter() - start
        self.last_info = {
            "depth": self.depth_limit,
            "nodes": self._nodes,
            "cutoffs": self._cutoffs,
            "eval": best_score,
            "move_col": best_move.col + 1,
            "candidates": searched,
            "time_ms": max(1, int(elapsed * 1000)),
        }

        if self.debug:
            logger.debug(
                "%s chose row=%d col=%d score=%s nodes=%d cutoffs=%d in %dms",
                self.name, best_move.row, best_move.col, best_score,
                self._nodes, self._cutoffs, self.last_info["time_ms"],
            )

        return best_move

    def score_moves(self, state: GameState) -> List[Tuple[MovePosition, Score]]:
        """Exact minimax score of every root candidate, left to right."""
        board = state.board
        me = state.current
        moves = board.available_moves()
        if not moves:
            raise NoLegalMoveError("No legal move: every column is full.")
        return [
            (m, self._min_value(board.apply_move(m, me), 0, me, m, state.connect_n, -inf, inf))
            for m in moves
        ]

    def _cutoff_value(
        self, board: Board, depth: int, me: Player, last_move: MovePosition, connect_n: int
    ) -> Optional[Score]:
        """Score at which the search stops at this node, or None to expand it."""
        opp = other(me)

        if self.terminal_rule == "legacy":
            score = evaluate(board, me, opp, last_move, depth, self.config, connect_n)
            if score != 0:
                return score
            if board.is_full():
                return self.config.terminal.tie
            if depth >= self.depth_limit:
                return score
            return None

        term = terminal_score(board, me, last_move, depth, self.config, connect_n)
        if term is not None:
            return term
        if depth >= self.depth_limit:
            return evaluate(board, me, opp, last_move, depth, self.config, connect_n)
        return None

    def _children(self, board: Board) -> List[MovePosition]:
        moves = board.available_moves()
        if self.alpha_beta:
            return _center_first(moves, board.cols)
        return moves

    def _max_value(
        self, board: Board, depth: int, me: Player, last_move: MovePosition,
        connect_n: int, alpha: float, beta: float,
    ) -> Score:
        self._nodes += 1

        stop = self._cutoff_value(board, depth, me, last_move, connect_n)
        if stop is not None:
            return stop

        v = -inf
        for m in self._children(board):
            v = max(v, self._min_value(board.apply_move(m, me), depth + 1, me, m, connect_n, alpha, beta))
            if self.alpha_beta:
                if v >= beta:
                    self._cutoffs += 1
                    break
                alpha = max(alpha, v)
        return v

    def _min_value(
        self, board: Board, depth: int, me: Player, last_move: MovePosition,
        connect_n: int, alpha: float, beta: float,
    ) -> Score:
        self._nodes += 1

        stop = self._cutoff_value(board, depth, me, last_move, connect_n)
        if stop is not None:
            return stop

        opp = other(me)
        v = inf
        for m in self._children(board):
            v = min(v, self._max_value(board.apply_move(m, opp), depth + 1, me, m, connect_n, alpha, beta))
            if self.alpha_beta:
                if v <= alpha:
                    self._cutoffs += 1
                    break
                beta = min(beta, v)
        return v


def choose_move(
    state: GameState,
    config: EvaluationConfig = DEFAULT_EVAL_CONFIG,
    *,
    depth_limit: int = SEARCH_DEPTH,
    terminal_rule: TerminalRule = "strict",
    alpha_beta: bool = False,
) -> MovePosition:
    """Pick the move for ``state.current``; see :class:`MinimaxAgent`."""
    agent = MinimaxAgent(
        config=config,
        depth_limit=depth_limit,
        terminal_rule=terminal_rule,
        alpha_beta=alpha_beta,
    )
    return agent.choose_move(state)
