"""
gateway/server.py
=================
FastAPI server that lets an external trainer drive one maze world step by
step over HTTP.

Start the server::

    python gateway/server.py --config configs/sim.yaml   # -> http://127.0.0.1:8000

Endpoints
---------
* ``POST /step``              body ``{direction, accelerate, downsample}``,
  returns ``application/octet-stream``: ``[score, terminated, pixels...]``
* ``POST /reset``             start a new episode
* ``GET  /player``            rounded agent position
* ``GET  /pixels``            current frame bytes (``?downsample=N``)
* ``GET  /constants/{index}`` 0 spawn x, 1 spawn y, 2 width, 3 height, 4 timestep

Each app owns exactly one world; every call that touches it holds a lock,
so concurrent requests are applied one after another.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from pathlib import Path
from typing import Optional

# Ensure project root is on path when running this script directly
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import uvicorn
from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, StrictBool, StrictInt

from maze_sim.config import SimConfig, load_yaml, map_path
from maze_sim.driver import StepDriver, direction_from_code
from maze_sim.errors import InvalidDirection, UnknownConstant
from maze_sim.protocol import encode_step_response
from maze_sim.render import pixel_bytes, render_frame
from maze_sim.world import World
from telemetry.logger import TelemetryLogger

log = logging.getLogger("gateway")


class StepRequest(BaseModel):
    """One step intent; ``direction`` is 0=UP, 1=DOWN, 2=LEFT, 3=RIGHT or null."""

    direction: Optional[StrictInt] = None
    accelerate: StrictBool = True
    downsample: Optional[StrictInt] = None


def _frame_headers(world: World, factor: int) -> dict:
    return {
        "X-Frame-Width": str(world.width // factor),
        "X-Frame-Height": str(world.height // factor),
    }


def create_app(
    world: Optional[World] = None,
    downsample: int = 4,
    telemetry: Optional[TelemetryLogger] = None,
) -> FastAPI:
    """Build a gateway app around ``world`` (reference layout if omitted)."""
    if world is None:
        world = World.from_map_file(map_path("reference"))
    driver = StepDriver(world, auto_reset=True, telemetry=telemetry)
    lock = threading.Lock()

    app = FastAPI(
        title="Floating Maze Gateway",
        description="Step a floating maze world and read back score, termination and pixels.",
        version="1.0",
    )
    app.state.driver = driver

    def _factor(requested: Optional[int]) -> int:
        factor = downsample if requested is None else requested
        if factor < 1:
            raise HTTPException(status_code=400, detail=f"downsample must be >= 1, got {factor}")
        return factor

    @app.post("/step")
    def step(request: StepRequest) -> Response:
        factor = _factor(request.downsample)
        with lock:
            try:
                direction = direction_from_code(request.direction)
            except InvalidDirection as exc:
                log.warning("rejected step: %s", exc)
                raise HTTPException(status_code=400, detail=str(exc))
            result = driver.step(direction, request.accelerate)
            payload = encode_step_response(result, pixel_bytes(render_frame(driver.world), factor))
        if result.terminated:
            log.info("episode %d ended with score %d", driver.episode, result.score)
        return Response(
            content=payload,
            media_type="application/octet-stream",
            headers=_frame_headers(driver.world, factor),
        )

    @app.post("/reset")
    def reset() -> dict:
        with lock:
            driver.reset()
        return {"status": "ok"}

    @app.get("/player")
    def player() -> dict:
        with lock:
            x, y = driver.player_position()
        return {"x": x, "y": y}

    @app.get("/pixels")
    def pixels(downsample: Optional[int] = None) -> Response:
        factor = _factor(downsample)
        with lock:
            payload = pixel_bytes(render_frame(driver.world), factor)
        return Response(
            content=payload,
            media_type="application/octet-stream",
            headers=_frame_headers(driver.world, factor),
        )

    @app.get("/constants/{index}")
    def constant(index: int) -> dict:
        try:
            value = driver.constant(index)
        except UnknownConstant as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        return {"index": index, "value": value}

    return app


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve a floating maze world over HTTP.")
    parser.add_argument("--config", type=str, default="configs/sim.yaml", help="Path to sim YAML config.")
    parser.add_argument("--map", type=str, default=None, help="Bundled map name (overrides config).")
    parser.add_argument("--host", type=str, default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--telemetry", action="store_true", help="Log every step to the telemetry path.")
    args = parser.parse_args()

    cfg = load_yaml(args.config)
    sim_cfg = SimConfig.from_dict(cfg.get("sim", {}))
    render_cfg = cfg.get("render", {})
    server_cfg = cfg.get("server", {})
    map_name = args.map or cfg.get("maps", {}).get("default_map", "reference")

    world = World.from_map_file(map_path(map_name), config=sim_cfg)
    telemetry = None
    if args.telemetry:
        telemetry = TelemetryLogger(cfg.get("logging", {}).get("telemetry_path", os.path.join("runs", "telemetry.jsonl")))

    app = create_app(world, downsample=int(render_cfg.get("downsample", 4)), telemetry=telemetry)
    host = args.host or server_cfg.get("host", "127.0.0.1")
    port = args.port or int(server_cfg.get("port", 8000))
    print(f"Starting floating maze gateway on http://{host}:{port} (map '{map_name}')")
    try:
        uvicorn.run(app, host=host, port=port)
    finally:
        if telemetry is not None:
            telemetry.close()


if __name__ == "__main__":
    main()
