from __future__ import annotations

from functools import partial
from typing import List, Sequence

from connectn.ai.minimax_agent import MinimaxAgent
from connectn.core.eval_config import preset

from .league_types import Team

DEFAULT_PRESETS = ("easy", "medium", "hard")
DEFAULT_DEPTHS = (1, 2)


def make_preset_agent(name: str, preset_name: str, depth: int, terminal_rule: str, alpha_beta: bool) -> MinimaxAgent:
    return MinimaxAgent(
        name=name,
        config=preset(preset_name),
        depth_limit=depth,
        terminal_rule=terminal_rule,  # type: ignore[arg-type]
        alpha_beta=alpha_beta,
    )


def team_name(preset_name: str, depth: int, terminal_rule: str) -> str:
    return f"{preset_name} d{depth} {terminal_rule}"


def build_roster(
    presets: Sequence[str] = DEFAULT_PRESETS,
    depths: Sequence[int] = DEFAULT_DEPTHS,
    terminal_rules: Sequence[str] = ("strict",),
    alpha_beta: bool = True,
) -> List[Team]:
    teams: List[Team] = []
    for preset_name in presets:
        preset(preset_name)  # fail fast on typos before any worker starts
        for depth in depths:
            for rule in terminal_rules:
                name = team_name(preset_name, depth, rule)
                make = partial(make_preset_agent, name, preset_name, depth, rule, alpha_beta)
                teams.append(Team(name, make, preset=preset_name, depth=depth, terminal_rule=rule))
    return teams
