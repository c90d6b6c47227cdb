"""Shared board fixtures."""

from __future__ import annotations

import pytest

from connectn.core.board import Board

# Full 6x7 board with no run of four anywhere.
DRAW_TEXT = """
XOXOXOX
XOXOXOX
OXOXOXO
OXOXOXO
XOXOXOX
XOXOXOX
"""


@pytest.fixture
def empty_board() -> Board:
    return Board.empty()


@pytest.fixture
def draw_board() -> Board:
    return Board.from_text(DRAW_TEXT)
