from __future__ import annotations

import numpy as np
import pytest

from maze_sim.render import THEME, downsample, pixel_bytes, render_frame, save_frame
from maze_sim.world import World


def test_frame_shows_reference_layout(reference_world: World) -> None:
    frame = render_frame(reference_world)
    assert frame.shape == (300, 300, 3)
    assert frame.dtype == np.uint8

    # Indexed [row (y), column (x)]
    assert tuple(frame[150, 5]) == THEME["wall"]
    assert tuple(frame[100, 100]) == THEME["bg"]
    assert tuple(frame[150, 50]) == THEME["score_zone"]
    assert tuple(frame[30, 150]) == THEME["goal"]
    # Player centre at spawn (140, 240) with size 20
    assert tuple(frame[250, 150]) == THEME["player"]


def test_used_score_zone_hidden(reference_world: World) -> None:
    reference_world.score_zones[0].set_status(True)
    frame = render_frame(reference_world)
    assert tuple(frame[150, 50]) == THEME["bg"]


def test_death_walls_drawn() -> None:
    world = World.from_map_dict({"death_walls": [{"x1": 20, "x2": 60, "y1": 20, "y2": 40}]})
    frame = render_frame(world)
    assert tuple(frame[30, 40]) == THEME["death_wall"]


def test_downsample_and_pixel_bytes(reference_world: World) -> None:
    frame = render_frame(reference_world)
    small = downsample(frame, 4)
    assert small.shape == (75, 75, 3)
    assert tuple(small[0, 0]) == tuple(frame[0, 0])
    assert tuple(small[1, 2]) == tuple(frame[4, 8])

    data = pixel_bytes(frame, 4)
    assert len(data) == 75 * 75
    assert data[:1] == bytes([frame[0, 0, 0]])

    # Non-divisible factors drop the remainder
    assert len(pixel_bytes(frame, 7)) == (300 // 7) ** 2
    assert len(pixel_bytes(frame)) == 300 * 300


def test_downsample_rejects_bad_factor(reference_world: World) -> None:
    frame = render_frame(reference_world)
    for bad in (0, -2, 1.5):
        with pytest.raises(ValueError):
            downsample(frame, bad)


def test_save_frame_writes_image(tmp_path, reference_world: World) -> None:
    path = tmp_path / "vision_test.bmp"
    saved = save_frame(render_frame(reference_world), str(path), factor=2)
    assert saved == str(path)
    assert path.stat().st_size > 0
