from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict

# Ensure project root is on path when running this script directly
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import gymnasium as gym
from stable_baselines3 import PPO
from stable_baselines3.common.callbacks import CheckpointCallback
from stable_baselines3.common.monitor import Monitor
from stable_baselines3.common.vec_env import DummyVecEnv, VecMonitor

from maze_sim.config import load_yaml
from maze_sim.env import make_env


def make_env_fn(cfg: Dict[str, Any], map_name: str) -> Callable[[], gym.Env]:
    """Factory creating MazeEnv instances for vectorized training.

    Every env gets its own World, so the vectorized copies never share state.
    """

    def _init() -> gym.Env:
        return Monitor(make_env(cfg, map_name=map_name))

    return _init


def main() -> None:
    parser = argparse.ArgumentParser(description="Train PPO on floating maze pixels.")
    parser.add_argument("--config", type=str, default="configs/sim.yaml", help="Path to sim YAML config.")
    parser.add_argument("--map", type=str, default=None, help="Bundled map name (overrides config).")
    parser.add_argument(
        "--total-timesteps",
        type=int,
        default=None,
        help="Override total training timesteps (for smoke tests).",
    )
    args = parser.parse_args()

    cfg = load_yaml(args.config)
    train_cfg = cfg.get("train", {})
    map_name = args.map or cfg.get("maps", {}).get("default_map", "reference")
    seed = int(cfg.get("seed", 0))
    n_envs = int(train_cfg.get("n_envs", 4))

    vec_env = VecMonitor(DummyVecEnv([make_env_fn(cfg, map_name) for _ in range(n_envs)]))

    run_dir = os.path.join(train_cfg.get("run_dir", "runs/ppo_maze"), time.strftime("%Y-%m-%d_%H-%M-%S"))
    checkpoints_dir = os.path.join(run_dir, "checkpoints")
    os.makedirs(checkpoints_dir, exist_ok=True)

    total_timesteps = args.total_timesteps or int(train_cfg.get("total_timesteps", 200000))

    model = PPO(
        policy="CnnPolicy",
        env=vec_env,
        n_steps=int(train_cfg.get("n_steps", 256)),
        batch_size=int(train_cfg.get("batch_size", 64)),
        learning_rate=float(train_cfg.get("learning_rate", 3e-4)),
        gamma=float(train_cfg.get("gamma", 0.99)),
        ent_coef=float(train_cfg.get("ent_coef", 0.01)),
        tensorboard_log=run_dir,
        seed=seed,
        verbose=1,
    )

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, int(train_cfg.get("checkpoint_freq", 20000)) // n_envs),
        save_path=checkpoints_dir,
        name_prefix="ppo_maze",
    )

    print(f"Training on map '{map_name}' with {n_envs} envs for {total_timesteps} steps")
    model.learn(total_timesteps=total_timesteps, callback=[checkpoint_callback])

    model_path = os.path.join(checkpoints_dir, "final_model.zip")
    model.save(model_path)
    print(f"Training complete. Final model saved to {model_path}")


if __name__ == "__main__":
    main()
