from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

MetricKey = Literal[
    "strength_wilson_lcb",
    "ppg",
    "points",
    "wins",
    "avg_ms_per_move",
    "avg_nodes_per_move",
]

# cost metrics rank lowest first
LOWER_IS_BETTER = frozenset({"avg_ms_per_move", "avg_nodes_per_move"})

TABLE_COLUMNS = [
    "name",
    "games", "wins", "draws", "losses",
    "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "avg_nodes_per_move",
]

_POOLED = ["games", "wins", "draws", "losses", "points"]


@dataclass(frozen=True)
class SummaryConfig:
    metric: MetricKey = "strength_wilson_lcb"
    top_n: int = 20
    min_games: int = 0


def _check_columns(df: pd.DataFrame, needed: list[str]) -> None:
    absent = [c for c in needed if c not in df.columns]
    if absent:
        raise ValueError(f"Missing required columns: {absent}. Present: {list(df.columns)}")


def filter_rows(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    if cfg.min_games <= 0:
        return df
    _check_columns(df, ["games"])
    return df[df["games"].fillna(0) >= cfg.min_games]


def top_table(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    """Best ``cfg.top_n`` teams by ``cfg.metric``, with a 1-based ``rk`` column."""
    _check_columns(df, ["name", cfg.metric])

    ranked = filter_rows(df, cfg).sort_values(
        cfg.metric,
        ascending=cfg.metric in LOWER_IS_BETTER,
        kind="stable",
    )
    shown = [c for c in TABLE_COLUMNS if c in ranked.columns]
    table = ranked[shown].head(cfg.top_n).reset_index(drop=True)
    table.insert(0, "rk", table.index + 1)
    return table


def group_summary(df: pd.DataFrame, by: str) -> pd.DataFrame:
    """
    Pool results of every team sharing a value of ``by`` (``preset``,
    ``depth`` or ``terminal_rule``) and recompute points per game from the
    pooled totals.
    """
    _check_columns(df, [by, *_POOLED])

    grouped = df.groupby(by)
    pooled = grouped[_POOLED].sum()
    pooled["ppg"] = pooled["points"].div(pooled["games"].where(pooled["games"] > 0))
    pooled["teams"] = grouped.size()
    if "avg_ms_per_move" in df.columns:
        pooled["mean_ms_per_move"] = grouped["avg_ms_per_move"].mean()
    return pooled.sort_values("ppg", ascending=False).reset_index()


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    numbers = df.select_dtypes("number")
    if numbers.empty:
        return pd.DataFrame()
    return numbers.describe().transpose()
