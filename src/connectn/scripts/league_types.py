from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping


@dataclass(frozen=True)
class Team:
    """One preset / depth / terminal-rule combination entered in the league."""
    name: str
    make: Callable[[], object]  # must be picklable (functools.partial over a module-level factory)
    preset: str = ""
    depth: int = 0
    terminal_rule: str = "strict"


@dataclass
class Agg:
    games: int = 0
    points: float = 0.0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    # search effort, summed over the moves this team chose
    moves: int = 0
    time_ms: int = 0
    nodes: int = 0

    def record(self, result: str) -> None:
        """Count one game that this team won ("W"), drew ("D") or lost ("L")."""
        if result not in ("W", "D", "L"):
            raise ValueError(f"Unknown game result {result!r}.")
        self.games += 1
        if result == "W":
            self.wins += 1
            self.points += 1.0
        elif result == "D":
            self.draws += 1
            self.points += 0.5
        else:
            self.losses += 1

    def add_effort(self, side_stats: Mapping[str, int]) -> None:
        self.moves += side_stats["moves"]
        self.time_ms += side_stats["time_ms"]
        self.nodes += side_stats["nodes"]

    @property
    def ppg(self) -> float:
        return self.points / self.games if self.games else 0.0

    @property
    def ms_per_move(self) -> float:
        return self.time_ms / self.moves if self.moves else 0.0

    @property
    def nodes_per_move(self) -> float:
        return self.nodes / self.moves if self.moves else 0.0
