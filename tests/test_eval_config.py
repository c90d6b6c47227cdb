"""Tests for weight records and presets."""

from __future__ import annotations

import pytest

from connectn.core.eval_config import DEFAULT_EVAL_CONFIG, DIFFICULTY_CONFIGS, EvaluationConfig, preset
from connectn.errors import ConfigError


def test_default_weights():
    cfg = DEFAULT_EVAL_CONFIG
    assert cfg.terminal.win == 10_000
    assert cfg.terminal.loss == -10_000
    assert cfg.immediate.can_win == 1_000
    assert cfg.three_in_row.both_ends_open == 300
    assert cfg.two_in_row.center_columns == 10
    assert cfg.three_in_row.center_columns == 0
    assert cfg.penalties.isolated_pieces == -3


def test_presets_override_only_their_groups():
    easy = preset("easy")
    hard = preset("HARD")

    assert preset("medium") is DEFAULT_EVAL_CONFIG
    assert sorted(DIFFICULTY_CONFIGS) == ["easy", "hard", "medium"]

    assert easy.immediate.can_win == 500
    assert easy.three_in_row.both_ends_open == 100
    assert easy.positional == DEFAULT_EVAL_CONFIG.positional

    assert hard.immediate.must_block == 1400
    assert hard.positional.center_control == 15
    assert hard.three_in_row == DEFAULT_EVAL_CONFIG.three_in_row
    assert hard.terminal == DEFAULT_EVAL_CONFIG.terminal


def test_unknown_preset():
    with pytest.raises(ConfigError):
        preset("impossible")


def test_with_overrides_returns_a_copy():
    cfg = DEFAULT_EVAL_CONFIG.with_overrides(immediate={"can_win": 1200})
    assert cfg.immediate.can_win == 1200
    assert cfg.immediate.must_block == 900
    assert DEFAULT_EVAL_CONFIG.immediate.can_win == 1_000


def test_camel_case_keys():
    cfg = EvaluationConfig.from_dict({"threeInRow": {"bothEndsOpen": 400}, "penalties": {"edgeColumns": -5}})
    assert cfg.three_in_row.both_ends_open == 400
    assert cfg.penalties.edge_columns == -5


def test_dict_round_trip():
    cfg = preset("hard")
    assert EvaluationConfig.from_dict(cfg.to_dict()) == cfg


@pytest.mark.parametrize(
    "overrides",
    [
        {"no_such_group": {"win": 1}},
        {"terminal": {"no_such_weight": 1}},
        {"terminal": {"win": "lots"}},
        {"immediate": 5},
        {"terminal": [("win", 1)]},
    ],
)
def test_bad_overrides(overrides):
    with pytest.raises(ConfigError):
        DEFAULT_EVAL_CONFIG.with_overrides(**overrides)


@pytest.mark.parametrize("data", [{"immediate": 5}, [("terminal", {"win": 1})], "terminal"])
def test_from_dict_rejects_non_mappings(data):
    with pytest.raises(ConfigError):
        EvaluationConfig.from_dict(data)
