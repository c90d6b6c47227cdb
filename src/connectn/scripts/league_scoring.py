from __future__ import annotations

import math

from .league_types import Agg

# one-sided ~90% confidence
DEFAULT_Z = 1.28


def wilson_lcb(p: float, n: int, z: float = DEFAULT_Z) -> float:
    """
    Lower end of the Wilson score interval for a rate ``p`` seen over ``n``
    games. Draws count as half a success, so ``p`` is points per game.
    """
    if n <= 0:
        return 0.0
    p = min(1.0, max(0.0, p))
    zz = z * z
    mid = p + zz / (2 * n)
    spread = z * math.sqrt(p * (1 - p) / n + zz / (4 * n * n))
    return max(0.0, (mid - spread) / (1 + zz / n))


def strength(a: Agg, z: float = DEFAULT_Z) -> float:
    """Ranking key: a team needs both a high score and enough games to rank high."""
    return wilson_lcb(a.ppg, a.games, z)
