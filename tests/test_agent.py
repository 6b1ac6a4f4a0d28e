from __future__ import annotations

import math

from maze_sim.agent import Agent, Direction
from maze_sim.geometry import Collision, Rect


def make_agent(x: int = 0, y: int = 0) -> Agent:
    return Agent(x=x, y=y, size=20, vel_max=5.0, force_scale=0.5)


def test_integrate_moves_before_accelerating() -> None:
    agent = make_agent()
    agent.set_velocity(1.5, 0.0)
    agent.set_acceleration(0.5, -0.5)
    agent.integrate()

    assert math.isclose(agent.x, 1.5)
    assert agent.coord_x == 1
    assert agent.y == 0.0
    assert math.isclose(agent.vx, 2.0)
    assert math.isclose(agent.vy, -0.5)


def test_rounded_position_floors_negative() -> None:
    agent = make_agent()
    agent.set_velocity(-0.5, -1.25)
    agent.integrate()
    assert agent.position == (-1, -2)


def test_accelerate_sets_scaled_force() -> None:
    agent = make_agent()
    agent.accelerate(Direction.RIGHT, 1.0)
    agent.accelerate(Direction.UP, 2.0)
    assert agent.ax == 0.5
    assert agent.ay == -1.0


def test_accelerate_at_vel_max_clamps_exactly() -> None:
    agent = make_agent()
    agent.set_velocity(7.0, -5.0)
    agent.set_acceleration(0.5, -0.5)

    agent.accelerate(Direction.RIGHT, 1.0)
    agent.accelerate(Direction.UP, 1.0)

    assert agent.vx == 5.0
    assert agent.ax == 0.0
    assert agent.vy == -5.0
    assert agent.ay == 0.0


def test_clamp_only_on_request() -> None:
    agent = make_agent()
    agent.set_velocity(4.8, 0.0)
    agent.accelerate(Direction.RIGHT, 1.0)
    agent.integrate()
    # Integration alone may overshoot
    assert math.isclose(agent.vx, 5.3)
    agent.accelerate(Direction.RIGHT, 1.0)
    assert agent.vx == 5.0
    assert agent.ax == 0.0


def test_opposite_thrust_not_blocked_by_saturation() -> None:
    agent = make_agent()
    agent.set_velocity(5.0, 0.0)
    agent.accelerate(Direction.LEFT, 1.0)
    assert agent.vx == 5.0
    assert agent.ax == -0.5


def test_stop_acceleration_only_zeroes_axis() -> None:
    agent = make_agent()
    agent.set_velocity(2.0, 3.0)
    agent.set_acceleration(0.5, 0.5)
    for _ in range(5):
        agent.stop_acceleration(Direction.LEFT)
    assert agent.ax == 0.0
    assert agent.ay == 0.5
    assert (agent.vx, agent.vy) == (2.0, 3.0)

    agent.stop_acceleration(Direction.DOWN)
    assert agent.ay == 0.0


def test_deflect_clamps_and_flips_inward_velocity() -> None:
    rect = Rect(100, 200, 100, 200)
    agent = make_agent(83, 140)
    agent.set_velocity(5.0, 1.0)
    agent.deflect(Collision.LEFT, rect)
    assert agent.x == 80.0
    assert agent.vx == -5.0
    assert agent.vy == 1.0

    # Already moving away: clamp but no flip
    agent.set_velocity(-3.0, 0.0)
    agent.deflect(Collision.LEFT, rect)
    assert agent.vx == -3.0


def test_reset_clears_motion_and_score() -> None:
    agent = make_agent(10, 10)
    agent.set_velocity(1.0, 1.0)
    agent.set_acceleration(0.5, 0.5)
    agent.add_score(12)
    agent.integrate()
    agent.reset(140, 240)

    state = agent.get_state()
    assert (state.x, state.y, state.coord_x, state.coord_y) == (140.0, 240.0, 140, 240)
    assert (state.vx, state.vy, state.ax, state.ay) == (0.0, 0.0, 0.0, 0.0)
    assert state.score == 0
