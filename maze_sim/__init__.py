"""
Top-level package for the floating maze simulator.

Components:
- geometry: rectangles, overlap and contact-face tests
- agent: disc-shaped body, thrust control and integration
- obstacles: Wall, DeathWall, ScoreZone, Goal
- world: obstacle collections, step and episode reset
- driver: step entry point for players, gateways and trainers
- render: pygame rendering, pixel export and the interactive window
- env: Gymnasium-compatible RL environment
"""

from .agent import Agent, AgentState, Direction
from .config import SimConfig, map_path
from .driver import StepDriver
from .errors import InvalidDirection, MapConfigError, UnknownConstant
from .geometry import Collision, Rect
from .obstacles import DeathWall, Goal, ScoreZone, Wall
from .world import StepResult, World

__all__ = [
    "Agent",
    "AgentState",
    "Direction",
    "SimConfig",
    "map_path",
    "StepDriver",
    "InvalidDirection",
    "MapConfigError",
    "UnknownConstant",
    "Collision",
    "Rect",
    "DeathWall",
    "Goal",
    "ScoreZone",
    "Wall",
    "StepResult",
    "World",
]
