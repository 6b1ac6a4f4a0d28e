from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from .agent import Direction
from .config import SimConfig, map_path
from .driver import StepDriver
from .render import PygameRenderer, greyscale, render_frame
from .world import World


NUM_ACTIONS = 1 + 2 * len(Direction)


def decode_action(action: int) -> Tuple[Optional[Direction], bool]:
    """Action 0 is no input; 1 + 2*direction (+1 to release instead of accelerate)."""
    action = int(action)
    if not 0 <= action < NUM_ACTIONS:
        raise ValueError(f"action {action} outside [0, {NUM_ACTIONS})")
    if action == 0:
        return None, True
    direction = Direction((action - 1) // 2)
    accelerate = (action - 1) % 2 == 0
    return direction, accelerate


class MazeEnv(gym.Env):
    """Gymnasium-compatible environment over the floating maze.

    Observations are downsampled greyscale frames, the reward is the score
    gained during the step.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 40}

    def __init__(
        self,
        world: World,
        downsample: int = 4,
        max_steps: int = 2000,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode {render_mode!r}")
        self.world = world
        self.driver = StepDriver(world, auto_reset=False)
        self.downsample = int(downsample)
        self.max_steps = int(max_steps)
        self.render_mode = render_mode
        self.metadata = dict(self.metadata, render_fps=max(1, 1000 // world.config.time_step_ms))

        self._step_count = 0
        self._last_score = 0
        self._viewer = None

        obs_h = world.height // self.downsample
        obs_w = world.width // self.downsample
        self.observation_space = spaces.Box(
            low=0, high=255, shape=(obs_h, obs_w, 1), dtype=np.uint8
        )
        self.action_space = spaces.Discrete(NUM_ACTIONS)

    # ------------------------------------------------------------------
    # Gym API
    # ------------------------------------------------------------------
    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.driver.reset()
        self._step_count = 0
        self._last_score = 0
        return self._get_obs(), self._info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        direction, accelerate = decode_action(action)
        result = self.driver.step(direction, accelerate)
        self._step_count += 1

        reward = float(result.score - self._last_score)
        self._last_score = result.score
        terminated = bool(result.terminated)
        truncated = bool(self._step_count >= self.max_steps and not terminated)

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), reward, terminated, truncated, self._info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            return render_frame(self.world)
        if self.render_mode == "human":
            if self._viewer is None:
                self._viewer = PygameRenderer(self.world)
            fps = self._viewer.tick(self.metadata["render_fps"])
            self._viewer.draw(fps=fps)
        return None

    def close(self) -> None:
        if self._viewer is not None:
            self._viewer.close()
            self._viewer = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    def _get_obs(self) -> np.ndarray:
        pixels = greyscale(render_frame(self.world), self.downsample)
        return pixels[..., np.newaxis]

    def _info(self) -> Dict[str, Any]:
        x, y = self.world.player_position()
        return {"score": self.world.agent.score, "x": x, "y": y, "steps": self._step_count}


def make_env(cfg: Dict[str, Any], map_name: str = "reference", render_mode: Optional[str] = None) -> MazeEnv:
    """Build a MazeEnv with its own World from a loaded YAML config dict."""
    sim_cfg = SimConfig.from_dict(cfg.get("sim", {}))
    world = World.from_map_file(map_path(map_name), config=sim_cfg)
    return MazeEnv(
        world=world,
        downsample=int(cfg.get("render", {}).get("downsample", 4)),
        max_steps=int(cfg.get("train", {}).get("max_steps", 2000)),
        render_mode=render_mode,
    )
