"""
Byte layout of a step response sent to an external trainer.

    [score & 0xFF, terminated (0 or 1), pixel 0, pixel 1, ...]

Pixels are one greyscale channel, row-major, after downsampling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .world import StepResult


HEADER_SIZE = 2


@dataclass
class StepResponse:
    """Decoded step response."""

    score: int
    terminated: bool
    pixels: bytes

    def frame(self, shape: Tuple[int, int]) -> np.ndarray:
        """Pixels reshaped to (height, width) uint8."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(shape)


def encode_step_response(result: StepResult, pixels: bytes) -> bytes:
    # Score wraps to a single byte, like a signed byte cast read back unsigned.
    header = bytes([result.score & 0xFF, 1 if result.terminated else 0])
    return header + bytes(pixels)


def decode_step_response(payload: bytes) -> StepResponse:
    if len(payload) < HEADER_SIZE:
        raise ValueError(f"step response too short: {len(payload)} bytes")
    return StepResponse(
        score=payload[0],
        terminated=bool(payload[1]),
        pixels=bytes(payload[HEADER_SIZE:]),
    )
