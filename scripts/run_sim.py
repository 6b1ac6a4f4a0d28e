from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pygame

from maze_sim.agent import Direction
from maze_sim.config import SimConfig, load_yaml, map_path
from maze_sim.driver import StepDriver
from maze_sim.errors import MapConfigError
from maze_sim.render import PygameRenderer, render_frame, save_frame
from maze_sim.world import World
from telemetry.logger import TelemetryLogger


KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Play the floating maze with the arrow keys.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/sim.yaml",
        help="Path to sim YAML config.",
    )
    parser.add_argument("--map", type=str, default=None, help="Bundled map name (overrides config).")
    parser.add_argument("--telemetry", action="store_true", help="Log every step to the telemetry path.")
    args = parser.parse_args()

    cfg = load_yaml(args.config)
    sim_cfg = SimConfig.from_dict(cfg.get("sim", {}))
    render_cfg = cfg.get("render", {})
    map_name = args.map or cfg.get("maps", {}).get("default_map", "reference")

    try:
        world = World.from_map_file(map_path(map_name), config=sim_cfg)
    except (OSError, MapConfigError) as exc:
        print(f"Could not load map '{map_name}': {exc}", file=sys.stderr)
        sys.exit(1)

    telemetry = None
    if args.telemetry:
        telemetry = TelemetryLogger(cfg.get("logging", {}).get("telemetry_path", os.path.join("runs", "telemetry.jsonl")))
    driver = StepDriver(world, auto_reset=True, telemetry=telemetry)

    renderer = PygameRenderer(world, window_scale=int(render_cfg.get("window_scale", 2)))
    # Held arrow keys keep re-sending thrust so a saturated axis is re-clamped
    pygame.key.set_repeat(sim_cfg.time_step_ms, sim_cfg.time_step_ms)
    target_fps = 1000.0 / sim_cfg.time_step_ms
    downsample = int(render_cfg.get("downsample", 4))
    export_path = render_cfg.get("export_path", "vision_test.jpg")

    print("Arrow keys thrust, E exports what the trainer sees, ESC to quit.")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_e:
                    path = save_frame(render_frame(world), export_path, downsample)
                    print(f"Saved frame to {path}")
                elif event.key in KEY_DIRECTIONS:
                    world.agent.accelerate(KEY_DIRECTIONS[event.key], sim_cfg.acceleration_force)
            elif event.type == pygame.KEYUP and event.key in KEY_DIRECTIONS:
                world.agent.stop_acceleration(KEY_DIRECTIONS[event.key])

        result = driver.step_no_input()
        if result.terminated:
            print(f"Episode {driver.episode} finished with score {result.score}")

        fps = renderer.tick(target_fps)
        renderer.draw(fps=fps)

    renderer.close()
    if telemetry is not None:
        telemetry.close()


if __name__ == "__main__":
    main()
