from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .errors import MapConfigError, UnknownConstant


MAPS_DIR = Path(__file__).resolve().parent / "maps"


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def map_path(name: str) -> str:
    """Path of a bundled arena layout, e.g. ``map_path("reference")``."""
    return str(MAPS_DIR / f"{name}.json")


@dataclass(frozen=True)
class SimConfig:
    """Fixed simulation parameters for one World.

    Attributes
    ----------
    time_step_ms : int
        Wall-clock interval between steps in interactive play (ms).
    force_scale : float
        Velocity change per step per unit of acceleration force.
    vel_max : float
        Per-axis speed at which further acceleration requests are refused.
    acceleration_force : float
        Force applied by one accelerate intent.
    screen_width, screen_height : int
        Arena size in pixels.
    start_x, start_y : int
        Spawn position of the agent (top-left of its bounding box).
    player_size : int
        Side of the agent's bounding box in pixels.
    """

    time_step_ms: int = 25
    force_scale: float = 0.5
    vel_max: float = 5.0
    acceleration_force: float = 1.0
    screen_width: int = 300
    screen_height: int = 300
    start_x: int = 140
    start_y: int = 240
    player_size: int = 20

    def __post_init__(self) -> None:
        if self.player_size <= 0:
            raise MapConfigError(f"player_size must be positive, got {self.player_size}")
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise MapConfigError(
                f"arena must be non-empty, got {self.screen_width}x{self.screen_height}"
            )
        # Play loops and the env divide by the timestep; zero speeds freeze the agent
        for name in ("time_step_ms", "vel_max", "force_scale"):
            value = getattr(self, name)
            if not value > 0:
                raise MapConfigError(f"{name} must be positive, got {value}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimConfig":
        """Build from the ``sim`` section of a YAML config; missing keys keep defaults."""
        defaults = cls()
        return cls(
            time_step_ms=int(data.get("time_step_ms", defaults.time_step_ms)),
            force_scale=float(data.get("force_scale", defaults.force_scale)),
            vel_max=float(data.get("vel_max", defaults.vel_max)),
            acceleration_force=float(data.get("acceleration_force", defaults.acceleration_force)),
            screen_width=int(data.get("screen_width", defaults.screen_width)),
            screen_height=int(data.get("screen_height", defaults.screen_height)),
            start_x=int(data.get("start_x", defaults.start_x)),
            start_y=int(data.get("start_y", defaults.start_y)),
            player_size=int(data.get("player_size", defaults.player_size)),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "SimConfig":
        cfg = load_yaml(path) or {}
        return cls.from_dict(cfg.get("sim", {}))

    @property
    def spawn(self) -> Tuple[int, int]:
        return self.start_x, self.start_y

    def constant(self, index: int) -> int:
        """Integer constants exposed to remote callers by index.

        0 spawn x, 1 spawn y, 2 arena width, 3 arena height, 4 timestep (ms).
        """
        table = (
            self.start_x,
            self.start_y,
            self.screen_width,
            self.screen_height,
            self.time_step_ms,
        )
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(table):
            raise UnknownConstant(index)
        return table[index]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
