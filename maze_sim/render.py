from __future__ import annotations

import numpy as np
import pygame

from .world import World


# Greyscale palette, so any single channel carries the whole image
THEME = {
    "bg": (255, 255, 255),
    "wall": (0, 0, 0),
    "death_wall": (77, 77, 77),
    "score_zone": (230, 230, 230),
    "goal": (64, 64, 64),
    "player": (0, 0, 0),
    "hud_bg": (240, 240, 240),
    "hud_border": (120, 120, 120),
    "hud_text": (20, 20, 20),
}


# ------------------------------------------------------------------
# Off-screen rendering
# ------------------------------------------------------------------
def draw_world(surface: pygame.Surface, world: World) -> None:
    """Draw the arena at 1:1 scale onto ``surface``.

    Used score zones are not drawn. The player is drawn last, as an
    ellipse inscribed in its bounding box at the rounded position.
    """
    surface.fill(THEME["bg"])
    for kind, (x1, x2, y1, y2) in world.obstacles():
        pygame.draw.rect(surface, THEME[kind], pygame.Rect(x1, y1, x2 - x1, y2 - y1))

    x, y = world.player_position()
    size = world.agent.size
    pygame.draw.ellipse(surface, THEME["player"], pygame.Rect(x, y, size, size))


def render_frame(world: World) -> np.ndarray:
    """Render the world to an (height, width, 3) uint8 array."""
    surface = pygame.Surface((world.width, world.height))
    draw_world(surface, world)
    # surfarray is indexed [x, y]
    return np.ascontiguousarray(pygame.surfarray.array3d(surface).transpose(1, 0, 2))


# ------------------------------------------------------------------
# Pixel export
# ------------------------------------------------------------------
def downsample(frame: np.ndarray, factor: int) -> np.ndarray:
    """Keep every ``factor``-th pixel on both axes (nearest neighbour).

    The result has shape (height // factor, width // factor, ...).
    """
    if isinstance(factor, bool) or not isinstance(factor, (int, np.integer)) or factor < 1:
        raise ValueError(f"downsample factor must be a positive integer, got {factor!r}")
    height = (frame.shape[0] // factor) * factor
    width = (frame.shape[1] // factor) * factor
    return frame[:height:factor, :width:factor]


def greyscale(frame: np.ndarray, factor: int = 1) -> np.ndarray:
    """Downsampled single channel, shape (height // factor, width // factor)."""
    return np.ascontiguousarray(downsample(frame, factor)[..., 0])


def pixel_bytes(frame: np.ndarray, factor: int = 1) -> bytes:
    """Flat row-major bytes of one channel after downsampling."""
    return greyscale(frame, factor).tobytes()


def save_frame(frame: np.ndarray, path: str = "vision_test.jpg", factor: int = 1) -> str:
    """Write what a trainer sees (downsampled frame) as an image file."""
    small = np.ascontiguousarray(downsample(frame, factor))
    surface = pygame.surfarray.make_surface(small.transpose(1, 0, 2))
    pygame.image.save(surface, path)
    return path


# ------------------------------------------------------------------
# Interactive window
# ------------------------------------------------------------------
class PygameRenderer:
    """Window showing the world, scaled up by an integer factor."""

    def __init__(self, world: World, window_scale: int = 2, show_hud: bool = True) -> None:
        pygame.init()
        pygame.display.set_caption("Floating Maze")
        self.world = world
        self.window_scale = max(1, int(window_scale))
        self.window_width = world.width * self.window_scale
        self.window_height = world.height * self.window_scale
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        self.clock = pygame.time.Clock()
        self.show_hud = show_hud
        self._canvas = pygame.Surface((world.width, world.height))

    def draw(self, fps: float = 0.0) -> None:
        """Render one frame."""
        draw_world(self._canvas, self.world)
        if self.window_scale == 1:
            self.screen.blit(self._canvas, (0, 0))
        else:
            scaled = pygame.transform.scale(self._canvas, (self.window_width, self.window_height))
            self.screen.blit(scaled, (0, 0))
        if self.show_hud:
            self._draw_hud(fps)
        pygame.display.flip()

    def _draw_hud(self, fps: float) -> None:
        pad = 6
        font = pygame.font.SysFont("monospace", 13)
        agent = self.world.agent
        text = f" score={agent.score}  v=({agent.vx:+.1f},{agent.vy:+.1f})  FPS={fps:.0f} "
        surf = font.render(text, True, THEME["hud_text"])
        r = surf.get_rect(topleft=(pad, pad))
        panel = r.inflate(pad, pad)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        self.screen.blit(surf, (panel.x + 3, panel.y + 3))

    def tick(self, target_fps: float) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
