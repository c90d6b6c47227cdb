from __future__ import annotations


class ConnectNError(Exception):
    """Base class for engine errors."""


class BoardShapeError(ConnectNError, ValueError):
    """Rows are missing, empty or not all the same width."""


class NoLegalMoveError(ConnectNError, ValueError):
    """Move selection was asked for on a board with every column full."""


class ConfigError(ConnectNError, ValueError):
    """Invalid run length, preset name or weight override."""
