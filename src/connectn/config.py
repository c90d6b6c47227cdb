# src/connectn/config.py

from __future__ import annotations

import logging
import os

ROWS = 6
COLS = 7
CONNECT_N = 4

# Minimax plies explored below each root candidate before the static score is used
SEARCH_DEPTH = 3

# Search tracing (entry/exit of move selection only)
DEBUG = os.environ.get("CONNECTN_DEBUG", "").lower() in ("1", "true", "yes", "on")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(debug: bool = DEBUG) -> None:
    """Install a root handler for command-line entry points."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )
