"""
Static obstacle kinds placed in the arena.

- Wall: bounces the agent off the face it struck
- DeathWall: ends the episode on contact
- ScoreZone: grants its reward once per episode, then disappears
- Goal: grants its reward and ends the episode
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .agent import Agent
from .geometry import Collision, Rect, contains, directional_hit


@dataclass(frozen=True)
class Obstacle:
    """Base for every rectangular obstacle; ``kind`` is the renderer tag."""

    rect: Rect

    kind = "obstacle"

    @classmethod
    def from_bounds(cls, x1: int, x2: int, y1: int, y2: int, **kwargs: Any) -> "Obstacle":
        return cls(Rect(int(x1), int(x2), int(y1), int(y2)), **kwargs)

    def contains(self, agent: Agent) -> bool:
        """True if the agent's bounding box overlaps this obstacle."""
        return contains(self.rect, agent.coord_x, agent.coord_y, agent.size)

    def to_dict(self) -> Dict[str, Any]:
        x1, x2, y1, y2 = self.rect.as_tuple()
        return {"x1": x1, "x2": x2, "y1": y1, "y2": y2}


@dataclass(frozen=True)
class Wall(Obstacle):
    kind = "wall"

    def check_collision(self, agent: Agent) -> Collision:
        """Face of this wall the agent is in contact with, or NONE."""
        return directional_hit(self.rect, agent.coord_x, agent.coord_y, agent.size)


@dataclass(frozen=True)
class DeathWall(Obstacle):
    kind = "death_wall"


@dataclass(frozen=True)
class Goal(Obstacle):
    score: int = 0

    kind = "goal"

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["score"] = self.score
        return d


@dataclass
class ScoreZone:
    """One-shot reward zone; ``used`` is cleared at every episode reset."""

    rect: Rect
    score: int = 0
    used: bool = False

    kind = "score_zone"

    @classmethod
    def from_bounds(cls, x1: int, x2: int, y1: int, y2: int, score: int = 0) -> "ScoreZone":
        return cls(Rect(int(x1), int(x2), int(y1), int(y2)), score=int(score))

    def contains(self, agent: Agent) -> bool:
        return contains(self.rect, agent.coord_x, agent.coord_y, agent.size)

    def is_used(self) -> bool:
        return self.used

    def set_status(self, used: bool) -> None:
        self.used = bool(used)

    def to_dict(self) -> Dict[str, Any]:
        x1, x2, y1, y2 = self.rect.as_tuple()
        return {"x1": x1, "x2": x2, "y1": y1, "y2": y2, "score": self.score}
