from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from typing import Iterable, List, Sequence

BOLD = "1"
DIM = "2"
CYAN = "36"

_COLOR = os.environ.get("NO_COLOR") is None and os.environ.get("TERM") not in (None, "", "dumb")


def style(s: str, *codes: str) -> str:
    if not _COLOR or not codes:
        return s
    return f"\x1b[{';'.join(codes)}m{s}\x1b[0m"


def term_width(default: int = 100) -> int:
    return shutil.get_terminal_size(fallback=(default, 24)).columns


def rule(width: int, char: str = "─") -> str:
    return char * max(10, width)


def fit(s: str, width: int) -> str:
    """Cut ``s`` to ``width`` characters, marking the cut with an ellipsis."""
    if len(s) <= width:
        return s
    if width <= 1:
        return s[: max(0, width)]
    return s[: width - 1] + "…"


@dataclass(frozen=True)
class Col:
    title: str
    width: int
    right: bool = False


def format_row(values: Sequence[str], cols: Sequence[Col]) -> str:
    cells: List[str] = []
    for value, col in zip(values, cols):
        s = fit(str(value), col.width)
        cells.append(s.rjust(col.width) if col.right else s.ljust(col.width))
    return "  ".join(cells)


def print_table(title: str, cols: Sequence[Col], rows: Iterable[Sequence[str]], width: int | None = None) -> None:
    w = width or term_width()
    print(style(title, BOLD, CYAN))
    print(style(format_row([c.title for c in cols], cols), DIM))
    print(style(rule(w), DIM))
    for row in rows:
        print(format_row(row, cols))
    print(style(rule(w), DIM))
