from __future__ import annotations

import pytest

from maze_sim.agent import Direction
from maze_sim.config import SimConfig, load_yaml
from maze_sim.errors import MapConfigError
from maze_sim.world import World


def test_yaml_matches_defaults(sim_yaml_path: str) -> None:
    assert SimConfig.from_yaml(sim_yaml_path) == SimConfig()


def test_partial_dict_keeps_defaults() -> None:
    cfg = SimConfig.from_dict({"vel_max": 3, "start_x": "50"})
    assert cfg.vel_max == 3.0
    assert cfg.start_x == 50
    assert cfg.player_size == 20


def test_invalid_sizes_rejected() -> None:
    with pytest.raises(MapConfigError):
        SimConfig(player_size=0)
    with pytest.raises(MapConfigError):
        SimConfig(screen_width=0)


@pytest.mark.parametrize(
    "override",
    [
        {"time_step_ms": 0},
        {"time_step_ms": -25},
        {"vel_max": 0.0},
        {"vel_max": -1.0},
        {"force_scale": 0.0},
        {"force_scale": float("nan")},
    ],
)
def test_non_positive_rates_rejected(override) -> None:
    with pytest.raises(MapConfigError):
        SimConfig(**override)
    with pytest.raises(MapConfigError):
        SimConfig.from_dict(override)


def test_independent_worlds_use_their_own_config(sim_yaml_path: str) -> None:
    capped = World(config=SimConfig(vel_max=2.0))
    default = World(config=SimConfig.from_dict(load_yaml(sim_yaml_path)["sim"]))
    capped.agent.set_velocity(2.0, 0.0)
    default.agent.set_velocity(2.0, 0.0)

    capped.step(Direction.RIGHT)
    default.step(Direction.RIGHT)

    assert capped.agent.vx == 2.0 and capped.agent.ax == 0.0
    assert default.agent.vx == 2.5 and default.agent.ax == 0.5
