from __future__ import annotations
from typing import Protocol

from connectn.game.state import GameState
from connectn.types import MovePosition


class Agent(Protocol):
    name: str

    def choose_move(self, state: GameState) -> MovePosition:
        ...
