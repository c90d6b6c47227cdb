"""Tests for the preset league."""

from __future__ import annotations

import csv

import pytest

from connectn.errors import ConfigError
from connectn.scripts.league import CSV_COLUMNS, round_robin, standings, write_csv
from connectn.scripts.league_play import MatchSettings, add_result
from connectn.scripts.league_roster import build_roster
from connectn.scripts.league_scoring import strength, wilson_lcb
from connectn.scripts.league_types import Agg

SMALL = MatchSettings(games_per_pair=2, rows=4, cols=5, connect_n=3, opening_plies=1)


def test_roster_names():
    teams = build_roster(presets=("easy", "hard"), depths=(1, 2), terminal_rules=("legacy", "strict"))
    names = [t.name for t in teams]
    assert len(names) == 8
    assert names[0] == "easy d1 legacy"
    assert "hard d2 strict" in names

    agent = teams[-1].make()
    assert agent.name == "hard d2 strict"
    assert agent.depth_limit == 2
    assert agent.terminal_rule == "strict"
    assert (teams[-1].preset, teams[-1].depth, teams[-1].terminal_rule) == ("hard", 2, "strict")


def test_roster_rejects_unknown_preset():
    with pytest.raises(ConfigError):
        build_roster(presets=("easy", "nightmare"))


def test_unknown_result():
    with pytest.raises(ValueError):
        Agg().record("X")


def test_add_result():
    a, b = Agg(), Agg()
    add_result(a, b, "O", a_is_x=False)
    add_result(a, b, "D", a_is_x=True)
    assert (a.wins, a.draws, a.losses, a.points) == (1, 1, 0, 1.5)
    assert (b.wins, b.draws, b.losses, b.points) == (0, 1, 1, 0.5)
    assert a.ppg == 0.75
    assert 0.0 < strength(a) < 0.75


def test_wilson_lower_bound():
    assert wilson_lcb(0.5, 0, 1.28) == 0.0
    assert 0.0 < wilson_lcb(0.8, 10, 1.28) < 0.8
    assert wilson_lcb(0.8, 100, 1.28) > wilson_lcb(0.8, 10, 1.28)


def test_round_robin_inline(tmp_path):
    teams = build_roster(presets=("easy", "hard"), depths=(1,))
    agg = round_robin(teams, SMALL, seed=7, max_workers=1)

    a, b = agg["easy d1 strict"], agg["hard d1 strict"]
    assert a.games == b.games == 2
    assert a.points + b.points == 2
    assert a.wins == b.losses
    assert a.moves > 0 and b.moves > 0

    ranked = [name for name, _ in standings(agg)]
    assert sorted(ranked) == sorted(agg)

    out = write_csv(agg, tmp_path)
    with open(out, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == CSV_COLUMNS
    assert len(rows) == 3


def test_round_robin_needs_two_teams():
    with pytest.raises(ValueError):
        round_robin(build_roster(presets=("easy",), depths=(1,)), SMALL, max_workers=1)
