"""
Hue wheel coloring for escape-time results.

Escaped points are colored by walking once around the hue wheel as the escape
iteration goes from 0 to ``max_iterations``; bounded points are black.

Whole tiles are colored through a lookup table built from ``color_for``, so
the per-tile path cannot drift from the scalar rule.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
SECTOR_WIDTH = math.pi / 3


def _channel(value: float) -> int:
    return max(0, min(255, int(value * 255.0)))


def hue_to_rgb(angle: float) -> Color:
    """Map an angle in radians, ``[0, 2π)``, to a fully saturated RGB color."""

    x = 1.0 - abs((angle / SECTOR_WIDTH) % 2.0 - 1.0)
    x8 = _channel(x)

    if angle < SECTOR_WIDTH:
        return (255, x8, 0)
    if angle < SECTOR_WIDTH * 2.0:
        return (x8, 255, 0)
    if angle < SECTOR_WIDTH * 3.0:
        return (0, 255, x8)
    if angle < SECTOR_WIDTH * 4.0:
        return (0, x8, 255)
    return (255, 0, x8)


def color_for(result: Optional[int], max_iterations: int) -> Color:
    """Color of a stability result: black when bounded, a hue otherwise."""

    if result is None:
        return BLACK
    return hue_to_rgb((result / max_iterations) * math.pi * 2.0)


def build_palette(max_iterations: int) -> np.ndarray:
    """
    Build a ``(max_iterations + 1, 3)`` uint8 lookup table.

    Row ``k`` is the color of a point escaping at iteration ``k``; the last row
    is the bounded color, matching how ``escape_counts`` encodes bounded points.
    """
    palette = np.zeros((max_iterations + 1, 3), dtype=np.uint8)
    for k in range(max_iterations):
        palette[k] = color_for(k, max_iterations)
    palette[max_iterations] = BLACK
    return palette


def colorize(counts: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """Turn a grid of escape counts into an RGB buffer of shape ``counts.shape + (3,)``."""

    return palette[counts]
