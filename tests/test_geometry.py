from __future__ import annotations

import pytest

from maze_sim.errors import MapConfigError
from maze_sim.geometry import Collision, Rect, contains, directional_hit


RECT = Rect(100, 200, 100, 200)
SIZE = 20


def test_contains_edges() -> None:
    # Box ending exactly on x1 does not overlap, one pixel further does
    assert not contains(RECT, 80, 150, SIZE)
    assert contains(RECT, 81, 150, SIZE)
    # Box starting exactly on x2 does not overlap
    assert not contains(RECT, 200, 150, SIZE)
    assert contains(RECT, 199, 150, SIZE)
    assert not contains(RECT, 150, 80, SIZE)
    assert contains(RECT, 150, 81, SIZE)
    assert not contains(RECT, 150, 200, SIZE)


def test_directional_hit_faces() -> None:
    assert directional_hit(RECT, 85, 140, SIZE) == Collision.LEFT
    assert directional_hit(RECT, 195, 140, SIZE) == Collision.RIGHT
    assert directional_hit(RECT, 140, 85, SIZE) == Collision.ABOVE
    assert directional_hit(RECT, 140, 195, SIZE) == Collision.BELOW


def test_directional_hit_none_without_overlap() -> None:
    assert directional_hit(RECT, 10, 10, SIZE) == Collision.NONE
    assert directional_hit(RECT, 80, 140, SIZE) == Collision.NONE


def test_corner_ties_resolve_vertically() -> None:
    # Equal penetration on both axes at each corner
    assert directional_hit(RECT, 85, 85, SIZE) == Collision.ABOVE
    assert directional_hit(RECT, 85, 195, SIZE) == Collision.BELOW
    assert directional_hit(RECT, 195, 85, SIZE) == Collision.ABOVE
    assert directional_hit(RECT, 195, 195, SIZE) == Collision.BELOW


def test_corner_prefers_shallower_axis() -> None:
    # Midpoint (94, 96) sits further outside horizontally: left face
    assert directional_hit(RECT, 84, 86, SIZE) == Collision.LEFT
    # Midpoint (96, 94) sits further outside vertically: top face
    assert directional_hit(RECT, 86, 84, SIZE) == Collision.ABOVE


def test_center_uses_integer_division() -> None:
    rect = Rect(0, 5, 0, 5)
    assert rect.center == (2, 2)


def test_degenerate_rect_rejected() -> None:
    with pytest.raises(MapConfigError):
        Rect(10, 10, 0, 5)
    with pytest.raises(MapConfigError):
        Rect(0, 5, 7, 3)
