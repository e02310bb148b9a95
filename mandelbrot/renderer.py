"""Rendering primitives for Mandelbrot tiles."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .kernel import Complex, escape_counts
from .palette import build_palette, colorize
from .tiles import Tile, partition

ESCAPE_RADIUS = 2.0


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set.

    ``anchor_re``/``anchor_im`` is the plane coordinate of the top-left pixel;
    ``viewport_width``/``viewport_height`` is the extent of the plane covered at
    ``zoom == 1``.
    """

    width: int
    height: int
    tile_edge: int
    viewport_width: float
    viewport_height: float
    zoom: float
    anchor_re: float
    anchor_im: float
    max_iterations: int
    escape_radius: float = ESCAPE_RADIUS

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive.")
        if self.tile_edge <= 0:
            raise ValueError("tile_edge must be positive.")
        if self.zoom == 0:
            raise ValueError("zoom must be non-zero.")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1.")
        if self.escape_radius <= 0:
            raise ValueError("escape_radius must be positive.")
        for name in ("viewport_width", "viewport_height", "zoom", "anchor_re", "anchor_im", "escape_radius"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be a finite number.")

    def pixel_to_complex(self, x: int, y: int) -> Complex:
        """Map a canvas pixel to its point in the complex plane."""

        re = self.anchor_re + (x / self.width) * self.viewport_width / self.zoom
        im = self.anchor_im + (y / self.height) * self.viewport_height / self.zoom
        return Complex(re, im)

    def plane_grid(self, tile: Tile) -> tuple[np.ndarray, np.ndarray]:
        """Plane coordinates of every pixel in ``tile`` as ``(height, width)`` grids."""

        xs = np.arange(tile.start_x, tile.end_x, dtype=np.float64)
        ys = np.arange(tile.start_y, tile.end_y, dtype=np.float64)
        re = np.float64(self.anchor_re) + (xs / np.float64(self.width)) * np.float64(self.viewport_width) / np.float64(self.zoom)
        im = np.float64(self.anchor_im) + (ys / np.float64(self.height)) * np.float64(self.viewport_height) / np.float64(self.zoom)
        c_re, c_im = np.meshgrid(re, im)
        return c_re, c_im


@dataclass(frozen=True)
class TileTask:
    """Everything a worker needs to render one tile."""

    tile: Tile
    params: RenderParameters


def build_tasks(params: RenderParameters) -> list[TileTask]:
    """One task per tile, in row-major dispatch order."""

    return [TileTask(tile=tile, params=params) for tile in partition(params.width, params.height, params.tile_edge)]


def render_tile(task: TileTask, palette: np.ndarray | None = None) -> np.ndarray:
    """Render ``task`` into a private ``(height, width, 3)`` uint8 buffer."""

    params = task.params
    if palette is None:
        palette = build_palette(params.max_iterations)
    c_re, c_im = params.plane_grid(task.tile)
    counts = escape_counts(c_re, c_im, params.max_iterations, params.escape_radius)
    return colorize(counts, palette)
