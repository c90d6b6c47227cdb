from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import pandas as pd

# Columns written by ``connectn league --csv-dir``.
STANDINGS_COLUMNS = (
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "avg_nodes_per_move",
    "moves", "time_ms", "nodes",
)

RESULTS_GLOB = "league_results_*.csv"


@dataclass(frozen=True)
class LoadSpec:
    csv_path: Path
    required: Sequence[str] = ("name",)
    split_names: bool = True


def split_team_name(df: pd.DataFrame) -> pd.DataFrame:
    """
    League team names read ``"<preset> d<depth> <terminal rule>"``. Add those
    three parts as ``preset``, ``depth`` and ``terminal_rule`` columns; names
    in any other shape leave the frame unchanged.
    """
    parts = df["name"].str.extract(r"^(?P<preset>\S+) d(?P<depth>\d+) (?P<terminal_rule>\S+)$")
    if parts["preset"].isna().any():
        return df
    out = df.copy()
    out["preset"] = parts["preset"]
    out["depth"] = parts["depth"].astype(int)
    out["terminal_rule"] = parts["terminal_rule"]
    return out


def load_results(spec: LoadSpec) -> pd.DataFrame:
    """Read one standings CSV into a frame with numeric stat columns."""
    if not spec.csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {spec.csv_path}")

    df = pd.read_csv(spec.csv_path, skipinitialspace=True)
    df = df.rename(columns=str.strip)

    missing = [c for c in spec.required if c not in df.columns]
    if missing:
        raise ValueError(f"{spec.csv_path} is missing columns {missing}; found {list(df.columns)}")

    numeric = [c for c in STANDINGS_COLUMNS[1:] if c in df.columns]
    if numeric:
        df[numeric] = df[numeric].apply(pd.to_numeric, errors="coerce")

    df = df.dropna(subset=["name"])
    df["name"] = df["name"].astype(str).str.strip()
    df = df[df["name"] != ""].reset_index(drop=True)

    return split_team_name(df) if spec.split_names else df


def load_latest_from_dir(results_dir: Path, pattern: str = RESULTS_GLOB) -> Path:
    """Newest results file in ``results_dir`` (file names carry a sortable timestamp)."""
    if not results_dir.is_dir():
        raise FileNotFoundError(f"Results directory not found: {results_dir}")

    newest = max(results_dir.glob(pattern), default=None)
    if newest is None:
        raise FileNotFoundError(f"No files matching {pattern} in {results_dir}")
    return newest
