"""Partitioning of the canvas into independently computable tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Tile:
    """A half-open rectangle ``[start_x, end_x) x [start_y, end_y)`` of the canvas."""

    start_x: int
    end_x: int
    start_y: int
    end_y: int

    @property
    def width(self) -> int:
        return self.end_x - self.start_x

    @property
    def height(self) -> int:
        return self.end_y - self.start_y

    @property
    def origin(self) -> tuple[int, int]:
        return (self.start_x, self.start_y)


def _cells(extent: int, tile_edge: int) -> int:
    return -(-extent // tile_edge)


def tile_count(width: int, height: int, tile_edge: int) -> int:
    """Number of tiles ``partition`` yields for the given canvas."""

    _check_dimensions(width, height, tile_edge)
    return _cells(width, tile_edge) * _cells(height, tile_edge)


def partition(width: int, height: int, tile_edge: int) -> Iterator[Tile]:
    """Yield tiles row by row, clipping the last row and column to the canvas."""

    _check_dimensions(width, height, tile_edge)
    for row in range(_cells(height, tile_edge)):
        start_y = row * tile_edge
        end_y = min(height, start_y + tile_edge)
        for column in range(_cells(width, tile_edge)):
            start_x = column * tile_edge
            end_x = min(width, start_x + tile_edge)
            yield Tile(start_x=start_x, end_x=end_x, start_y=start_y, end_y=end_y)


def _check_dimensions(width: int, height: int, tile_edge: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be positive.")
    if tile_edge <= 0:
        raise ValueError("tile edge must be positive.")
