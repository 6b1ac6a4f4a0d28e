from __future__ import annotations

from typing import Any, Dict, List, NamedTuple, Optional, Tuple
import json

from .agent import Agent, Direction
from .config import SimConfig
from .errors import MapConfigError
from .geometry import Collision
from .obstacles import DeathWall, Goal, ScoreZone, Wall


class StepResult(NamedTuple):
    """Outcome of one simulation step."""

    score: int
    terminated: bool


class World:
    """Bounded arena with static obstacles and the single agent.

    Parameters
    ----------
    config : SimConfig
        Physics constants, arena size and spawn.
    walls, death_walls, score_zones, goals : list, optional
        Initial obstacle collections. Order inside each collection is kept
        and matters for wall resolution and score-zone collection.
    """

    def __init__(
        self,
        config: Optional[SimConfig] = None,
        walls: Optional[List[Wall]] = None,
        death_walls: Optional[List[DeathWall]] = None,
        score_zones: Optional[List[ScoreZone]] = None,
        goals: Optional[List[Goal]] = None,
    ) -> None:
        self.config = config if config is not None else SimConfig()
        self.agent = Agent(
            x=self.config.start_x,
            y=self.config.start_y,
            size=self.config.player_size,
            vel_max=self.config.vel_max,
            force_scale=self.config.force_scale,
        )
        self.walls: List[Wall] = list(walls) if walls is not None else []
        self.death_walls: List[DeathWall] = list(death_walls) if death_walls is not None else []
        self.score_zones: List[ScoreZone] = list(score_zones) if score_zones is not None else []
        self.goals: List[Goal] = list(goals) if goals is not None else []
        self.terminated = False

    @property
    def width(self) -> int:
        return self.config.screen_width

    @property
    def height(self) -> int:
        return self.config.screen_height

    # ------------------------------------------------------------------
    # Map loading
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any], config: Optional[SimConfig] = None) -> "World":
        """Create world from a dict with ``walls``, ``death_walls``, ``score_zones`` and ``goals``."""
        if not isinstance(data, dict):
            raise MapConfigError(f"map must be a JSON object, got {type(data).__name__}")
        try:
            walls = [
                Wall.from_bounds(o["x1"], o["x2"], o["y1"], o["y2"])
                for o in data.get("walls", [])
            ]
            death_walls = [
                DeathWall.from_bounds(o["x1"], o["x2"], o["y1"], o["y2"])
                for o in data.get("death_walls", [])
            ]
            score_zones = [
                ScoreZone.from_bounds(o["x1"], o["x2"], o["y1"], o["y2"], score=int(o["score"]))
                for o in data.get("score_zones", [])
            ]
            goals = [
                Goal.from_bounds(o["x1"], o["x2"], o["y1"], o["y2"], score=int(o["score"]))
                for o in data.get("goals", [])
            ]
        except MapConfigError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise MapConfigError(f"malformed map entry: {exc!r}") from exc
        return cls(
            config=config,
            walls=walls,
            death_walls=death_walls,
            score_zones=score_zones,
            goals=goals,
        )

    @classmethod
    def from_map_file(cls, path: str, config: Optional[SimConfig] = None) -> "World":
        """Create world from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise MapConfigError(f"{path} is not valid JSON: {exc}") from exc
        return cls.from_map_dict(data, config=config)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the arena layout to a Python dict."""
        return {
            "walls": [w.to_dict() for w in self.walls],
            "death_walls": [w.to_dict() for w in self.death_walls],
            "score_zones": [z.to_dict() for z in self.score_zones],
            "goals": [g.to_dict() for g in self.goals],
        }

    # ------------------------------------------------------------------
    # Obstacle management
    # ------------------------------------------------------------------
    def add_wall(self, wall: Wall) -> None:
        self.walls.append(wall)

    def add_death_wall(self, death_wall: DeathWall) -> None:
        self.death_walls.append(death_wall)

    def add_score_zone(self, zone: ScoreZone) -> None:
        self.score_zones.append(zone)

    def add_goal(self, goal: Goal) -> None:
        self.goals.append(goal)

    def clear_obstacles(self) -> None:
        """Remove all obstacles."""
        self.walls.clear()
        self.death_walls.clear()
        self.score_zones.clear()
        self.goals.clear()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def step(self, direction: Optional[Direction] = None, accelerate: bool = True) -> StepResult:
        """Advance the world by one fixed timestep.

        A step requested after a terminal step, without ``reset()`` in
        between, starts a fresh episode first.
        """
        if self.terminated:
            self.reset()

        if direction is not None:
            if accelerate:
                self.agent.accelerate(direction, self.config.acceleration_force)
            else:
                self.agent.stop_acceleration(direction)

        self.agent.integrate()
        self._resolve_walls()

        terminated = False
        for death_wall in self.death_walls:
            if death_wall.contains(self.agent):
                terminated = True

        for zone in self.score_zones:
            if not zone.is_used() and zone.contains(self.agent):
                self.agent.add_score(zone.score)
                zone.set_status(True)
                break

        for goal in self.goals:
            if goal.contains(self.agent):
                self.agent.add_score(goal.score)
                terminated = True

        self.terminated = terminated
        return StepResult(score=self.agent.score, terminated=terminated)

    def _resolve_walls(self) -> None:
        # Overlapping walls may each correct the agent in the same step.
        for wall in self.walls:
            face = wall.check_collision(self.agent)
            if face != Collision.NONE:
                self.agent.deflect(face, wall.rect)

    def reset(self) -> None:
        """Start a new episode: agent back at spawn, score zones collectible again."""
        self.agent.reset(self.config.start_x, self.config.start_y)
        for zone in self.score_zones:
            zone.set_status(False)
        self.terminated = False

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def player_position(self) -> Tuple[int, int]:
        """Rounded (x, y) position of the agent."""
        return self.agent.position

    def obstacles(self) -> List[Tuple[str, Tuple[int, int, int, int]]]:
        """Visible obstacles as (kind, (x1, x2, y1, y2)) in drawing order.

        Used score zones are left out.
        """
        visible: List[Tuple[str, Tuple[int, int, int, int]]] = []
        visible.extend((w.kind, w.rect.as_tuple()) for w in self.walls)
        visible.extend((w.kind, w.rect.as_tuple()) for w in self.death_walls)
        visible.extend((z.kind, z.rect.as_tuple()) for z in self.score_zones if not z.is_used())
        visible.extend((g.kind, g.rect.as_tuple()) for g in self.goals)
        return visible
