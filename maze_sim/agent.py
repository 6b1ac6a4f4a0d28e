from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple, Dict, Any
import math

from .geometry import Collision, Rect


class Direction(IntEnum):
    """Thrust directions; the integer values are the wire codes."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@dataclass
class AgentState:
    """State of the agent in screen coordinates.

    Attributes
    ----------
    x, y : float
        Continuous position of the bounding box's top-left corner (pixels).
    vx, vy : float
        Velocity (pixels per step).
    ax, ay : float
        Acceleration (pixels per step per step).
    coord_x, coord_y : int
        Rounded position used for every collision and zone test.
    score : int
        Cumulative score in the current episode.
    """

    x: float
    y: float
    vx: float
    vy: float
    ax: float
    ay: float
    coord_x: int
    coord_y: int
    score: int


class Agent:
    """Disc-shaped body drifting under directional thrust.

    Velocity is only clamped when an acceleration request arrives in a
    direction that is already saturated; integration itself never clamps.
    """

    def __init__(self, x: int, y: int, size: int, vel_max: float, force_scale: float) -> None:
        self.size = int(size)
        self.vel_max = float(vel_max)
        self.force_scale = float(force_scale)

        self.vx = 0.0
        self.vy = 0.0
        self.ax = 0.0
        self.ay = 0.0
        self.score = 0
        self.set_position(x, y)

    # ------------------------------------------------------------------
    # State manipulation
    # ------------------------------------------------------------------
    def set_position(self, x: int, y: int) -> None:
        self.coord_x = int(x)
        self.coord_y = int(y)
        self.x = float(x)
        self.y = float(y)

    def set_velocity(self, vx: float, vy: float) -> None:
        self.vx = float(vx)
        self.vy = float(vy)

    def set_acceleration(self, ax: float, ay: float) -> None:
        self.ax = float(ax)
        self.ay = float(ay)

    def add_score(self, amount: int) -> None:
        self.score += int(amount)

    def reset(self, x: int, y: int) -> None:
        """Return to spawn at rest with a zero score."""
        self.set_acceleration(0.0, 0.0)
        self.set_velocity(0.0, 0.0)
        self.set_position(x, y)
        self.score = 0

    @property
    def position(self) -> Tuple[int, int]:
        """Rounded (x, y) position."""
        return self.coord_x, self.coord_y

    def get_state(self) -> AgentState:
        """Return a copy of current state."""
        return AgentState(
            x=self.x,
            y=self.y,
            vx=self.vx,
            vy=self.vy,
            ax=self.ax,
            ay=self.ay,
            coord_x=self.coord_x,
            coord_y=self.coord_y,
            score=self.score,
        )

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------
    def accelerate(self, direction: Direction, force: float) -> None:
        """Request thrust in ``direction``.

        If the velocity on that axis has already reached ``vel_max`` in the
        requested direction, the acceleration on the axis is zeroed and the
        velocity is pinned to exactly ``+-vel_max`` instead.
        """
        thrust = force * self.force_scale
        if direction == Direction.UP:
            if self.vy > -self.vel_max:
                self.ay = -thrust
            else:
                self.ay = 0.0
                self.vy = -self.vel_max
        elif direction == Direction.DOWN:
            if self.vy < self.vel_max:
                self.ay = thrust
            else:
                self.ay = 0.0
                self.vy = self.vel_max
        elif direction == Direction.LEFT:
            if self.vx > -self.vel_max:
                self.ax = -thrust
            else:
                self.ax = 0.0
                self.vx = -self.vel_max
        elif direction == Direction.RIGHT:
            if self.vx < self.vel_max:
                self.ax = thrust
            else:
                self.ax = 0.0
                self.vx = self.vel_max

    def stop_acceleration(self, direction: Direction) -> None:
        """Zero the acceleration on the axis of ``direction``; velocity is kept."""
        if direction in (Direction.UP, Direction.DOWN):
            self.ay = 0.0
        elif direction in (Direction.LEFT, Direction.RIGHT):
            self.ax = 0.0

    # ------------------------------------------------------------------
    # Integration and wall response
    # ------------------------------------------------------------------
    def integrate(self) -> None:
        """Advance one step: position with the current velocity, then velocity."""
        self.x += self.vx
        self.y += self.vy
        self.coord_x = int(math.floor(self.x))
        self.coord_y = int(math.floor(self.y))
        self.vx += self.ax
        self.vy += self.ay

    def deflect(self, face: Collision, rect: Rect) -> None:
        """Push the agent flush against ``face`` of ``rect`` and bounce.

        The velocity component is only negated while it still points into
        the wall. The rounded position is left as integrated.
        """
        if face == Collision.LEFT:
            self.x = float(rect.x1 - self.size)
            if self.vx > 0:
                self.vx = -self.vx
        elif face == Collision.RIGHT:
            self.x = float(rect.x2)
            if self.vx < 0:
                self.vx = -self.vx
        elif face == Collision.ABOVE:
            self.y = float(rect.y1 - self.size)
            if self.vy > 0:
                self.vy = -self.vy
        elif face == Collision.BELOW:
            self.y = float(rect.y2)
            if self.vy < 0:
                self.vy = -self.vy

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialize current agent state to a dict for logging/telemetry."""
        return {
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "ax": self.ax,
            "ay": self.ay,
            "coord_x": self.coord_x,
            "coord_y": self.coord_y,
            "score": self.score,
        }
