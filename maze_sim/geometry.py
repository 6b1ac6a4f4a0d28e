"""
Geometry and collision primitives for the floating maze.

All obstacles are integer axis-aligned rectangles in screen coordinates
(origin top-left, y grows downward). The agent is collided as the square
bounding box of side ``size`` anchored at its rounded position.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .errors import MapConfigError


class Collision(Enum):
    """Face of a rectangle the agent is in contact with."""

    LEFT = "left"
    RIGHT = "right"
    ABOVE = "above"
    BELOW = "below"
    NONE = "none"


@dataclass(frozen=True)
class Rect:
    """Immutable axis-aligned rectangle ``[x1, x2) x [y1, y2)``.

    Attributes
    ----------
    x1, x2 : int
        Left and right edges (pixels), ``x1 < x2``.
    y1, y2 : int
        Top and bottom edges (pixels), ``y1 < y2``.
    """

    x1: int
    x2: int
    y1: int
    y2: int

    def __post_init__(self) -> None:
        if self.x1 >= self.x2 or self.y1 >= self.y2:
            raise MapConfigError(
                f"degenerate rectangle x1={self.x1} x2={self.x2} y1={self.y1} y2={self.y2}"
            )

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    @property
    def center(self) -> Tuple[int, int]:
        """Integer centre, truncated the same way the contact test uses it."""
        return (self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return (x1, x2, y1, y2)."""
        return (self.x1, self.x2, self.y1, self.y2)


# ---------------------------------------------------------------------------
# Overlap and contact tests
# ---------------------------------------------------------------------------


def contains(rect: Rect, x: int, y: int, size: int) -> bool:
    """Return True if the ``size`` x ``size`` box at (x, y) overlaps ``rect``.

    Touching the near edge counts as contact, touching the far edge does not.
    """
    return (
        x + size > rect.x1
        and x < rect.x2
        and y + size > rect.y1
        and y < rect.y2
    )


def directional_hit(rect: Rect, x: int, y: int, size: int) -> Collision:
    """Return the face of ``rect`` the box at (x, y) is pressing against.

    The box midpoint is placed in one of the four quadrants around the
    rectangle centre; within that quadrant the axis with the smaller
    distance from the near edge to the midpoint wins. Ties go to
    ABOVE/BELOW.
    """
    if not contains(rect, x, y, size):
        return Collision.NONE

    mid_x = x + size // 2
    mid_y = y + size // 2
    cx, cy = rect.center

    if mid_x < cx:
        if mid_y < cy:
            if mid_x - rect.x1 < mid_y - rect.y1:
                return Collision.LEFT
            return Collision.ABOVE
        if mid_x - rect.x1 < rect.y2 - mid_y:
            return Collision.LEFT
        return Collision.BELOW

    if mid_y < cy:
        if rect.x2 - mid_x < mid_y - rect.y1:
            return Collision.RIGHT
        return Collision.ABOVE
    if rect.x2 - mid_x < rect.y2 - mid_y:
        return Collision.RIGHT
    return Collision.BELOW
