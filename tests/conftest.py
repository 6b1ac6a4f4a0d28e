from __future__ import annotations

from pathlib import Path

import pytest

from maze_sim.config import map_path
from maze_sim.world import World


PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def sim_yaml_path() -> str:
    return str(PROJECT_ROOT / "configs" / "sim.yaml")


@pytest.fixture
def reference_world() -> World:
    return World.from_map_file(map_path("reference"))
