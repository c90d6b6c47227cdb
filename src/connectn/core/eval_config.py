# src/connectn/core/eval_config.py

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping

from connectn.errors import ConfigError


@dataclass(frozen=True, slots=True)
class TerminalWeights:
    win: float = 10_000
    loss: float = -10_000
    tie: float = 0


@dataclass(frozen=True, slots=True)
class ImmediateWeights:
    can_win: float = 1_000
    must_block: float = 900
    # Kept for weight-file compatibility; forks are scored with fork_opportunity.
    create_multiple_threats: float = 800
    fork_opportunity: float = 750


@dataclass(frozen=True, slots=True)
class RunWeights:
    both_ends_open: float
    one_end_open: float
    block_opponent_both_ends: float
    block_opponent_one_end: float
    center_columns: float = 0


@dataclass(frozen=True, slots=True)
class PositionalWeights:
    center_control: float = 10
    foundation_pieces: float = 5
    one_in_row_center: float = 3
    one_in_row_edge: float = 1
    adjacent_to_pieces: float = 2


@dataclass(frozen=True, slots=True)
class PenaltyWeights:
    edge_columns: float = -2
    isolated_pieces: float = -3
    # Not scored; accepted so weight files from the browser game load unchanged.
    blocking_own_sequence: float = -50


def _three_in_row() -> RunWeights:
    return RunWeights(
        both_ends_open=300,
        one_end_open=150,
        block_opponent_both_ends=250,
        block_opponent_one_end=125,
    )


def _two_in_row() -> RunWeights:
    return RunWeights(
        both_ends_open=50,
        one_end_open=25,
        block_opponent_both_ends=40,
        block_opponent_one_end=20,
        center_columns=10,
    )


@dataclass(frozen=True, slots=True)
class EvaluationConfig:
    """
    Heuristic weights grouped by concern.

    ``three_in_row`` and ``two_in_row`` are named after the default run length
    of four: they weight runs one and two pieces short of a win.
    """
    terminal: TerminalWeights = field(default_factory=TerminalWeights)
    immediate: ImmediateWeights = field(default_factory=ImmediateWeights)
    three_in_row: RunWeights = field(default_factory=_three_in_row)
    two_in_row: RunWeights = field(default_factory=_two_in_row)
    positional: PositionalWeights = field(default_factory=PositionalWeights)
    penalties: PenaltyWeights = field(default_factory=PenaltyWeights)

    def with_overrides(self, **groups: Mapping[str, float]) -> "EvaluationConfig":
        """
        Return a copy with some fields of some groups replaced::

            cfg.with_overrides(immediate={"can_win": 1200})
        """
        changes: Dict[str, Any] = {}
        for group_name, values in groups.items():
            group_name = _snake(group_name)
            if group_name not in _GROUPS:
                raise ConfigError(f"Unknown weight group {group_name!r}.")
            if not isinstance(values, Mapping):
                raise ConfigError(f"Weights for {group_name!r} must be a mapping, got {values!r}.")
            current = getattr(self, group_name)
            allowed = {f.name for f in fields(current)}
            updates: Dict[str, float] = {}
            for key, value in values.items():
                key = _snake(key)
                if key not in allowed:
                    raise ConfigError(f"Unknown weight {group_name}.{key}.")
                try:
                    updates[key] = float(value)
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"Weight {group_name}.{key} must be a number, got {value!r}.") from e
            changes[group_name] = replace(current, **updates)
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, float]]) -> "EvaluationConfig":
        """Overlay a nested mapping (snake_case or camelCase keys) on the defaults."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"Weight overrides must be a mapping of groups, got {type(data).__name__}.")
        return DEFAULT_EVAL_CONFIG.with_overrides(**{str(k): v for k, v in data.items()})

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            name: {f.name: getattr(getattr(self, name), f.name) for f in fields(getattr(self, name))}
            for name in _GROUPS
        }


_GROUPS = tuple(f.name for f in fields(EvaluationConfig))

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL.sub("_", name).lower()


DEFAULT_EVAL_CONFIG = EvaluationConfig()

DIFFICULTY_CONFIGS: Dict[str, EvaluationConfig] = {
    "easy": DEFAULT_EVAL_CONFIG.with_overrides(
        immediate={
            "can_win": 500,
            "must_block": 400,
            "create_multiple_threats": 300,
            "fork_opportunity": 250,
        },
        three_in_row={
            "both_ends_open": 100,
            "one_end_open": 50,
            "block_opponent_both_ends": 80,
            "block_opponent_one_end": 40,
        },
    ),
    "medium": DEFAULT_EVAL_CONFIG,
    "hard": DEFAULT_EVAL_CONFIG.with_overrides(
        immediate={
            "can_win": 1500,
            "must_block": 1400,
            "create_multiple_threats": 1200,
            "fork_opportunity": 1000,
        },
        positional={
            "center_control": 15,
            "foundation_pieces": 8,
            "one_in_row_center": 5,
            "one_in_row_edge": 1,
            "adjacent_to_pieces": 4,
        },
    ),
}


def preset(name: str) -> EvaluationConfig:
    try:
        return DIFFICULTY_CONFIGS[name.lower()]
    except KeyError:
        raise ConfigError(f"Unknown preset {name!r}; choose from {sorted(DIFFICULTY_CONFIGS)}.") from None
