from __future__ import annotations

from typing import Optional, Tuple, Union

from .agent import Direction
from .errors import InvalidDirection
from .world import StepResult, World
from telemetry.logger import TelemetryLogger


def direction_from_code(code: Optional[int]) -> Optional[Direction]:
    """Map a wire code (0=UP, 1=DOWN, 2=LEFT, 3=RIGHT) to a Direction.

    ``None`` means no intent. Anything else raises InvalidDirection.
    """
    if code is None:
        return None
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidDirection(code)
    try:
        return Direction(code)
    except ValueError as exc:
        raise InvalidDirection(code) from exc


class StepDriver:
    """Single entry point for interactive loops, the gateway and the RL env.

    Parameters
    ----------
    world : World
        The world this driver owns. Exactly one driver should step it.
    auto_reset : bool
        Reset the world right after a terminal step, so the state seen by
        renderers after the call already belongs to the next episode.
    telemetry : TelemetryLogger, optional
        Receives one record per step and a summary per finished episode.
    """

    def __init__(
        self,
        world: World,
        auto_reset: bool = True,
        telemetry: Optional[TelemetryLogger] = None,
    ) -> None:
        self.world = world
        self.auto_reset = auto_reset
        self.telemetry = telemetry
        self.episode = 0
        self.step_count = 0
        self.episode_steps = 0

    def step(self, direction: Optional[Union[Direction, int]], accelerate: bool = True) -> StepResult:
        """Advance one tick. ``direction`` may also be a raw wire code."""
        direction = direction_from_code(direction)
        result = self.world.step(direction, accelerate)
        self.step_count += 1
        self.episode_steps += 1
        if self.telemetry is not None:
            record = {
                "episode": self.episode,
                "step": self.step_count,
                "direction": None if direction is None else direction.name,
                "accelerate": bool(accelerate),
                "score": result.score,
                "terminated": result.terminated,
            }
            record.update(self.world.agent.to_dict())
            self.telemetry.log_step(record)
        if result.terminated:
            if self.telemetry is not None:
                self.telemetry.log_episode(self.episode, result.score, self.episode_steps)
            self.episode += 1
            self.episode_steps = 0
            if self.auto_reset:
                self.world.reset()
        return result

    def step_no_input(self) -> StepResult:
        return self.step(None)

    def step_code(self, code: Optional[int], accelerate: bool = True) -> StepResult:
        """Step with an integer direction code; bad codes leave the world untouched."""
        return self.step(code, accelerate)

    def player_position(self) -> Tuple[int, int]:
        return self.world.player_position()

    def reset(self) -> None:
        self.world.reset()
        self.episode_steps = 0

    def constant(self, index: int) -> int:
        """See SimConfig.constant for the index table."""
        return self.world.config.constant(index)
