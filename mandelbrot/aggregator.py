"""Single-consumer composition of finished tiles into the output canvas."""

from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np

from .errors import ChannelError, CompositionError
from .pool import TileFailure, TileResult


class Aggregator:
    """
    Owns the canvas while tiles are composited into it.

    Tiles are copied in with a straight slice assignment. A per-pixel write
    counter lets ``collect`` prove that every pixel was written exactly once
    before the canvas is handed over.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError("canvas width and height must be positive.")
        self.width = width
        self.height = height
        self._canvas: Optional[np.ndarray] = np.zeros((height, width, 3), dtype=np.uint8)
        self._writes = np.zeros((height, width), dtype=np.uint16)
        self.received = 0

    @property
    def canvas(self) -> np.ndarray:
        if self._canvas is None:
            raise CompositionError("canvas has already been handed off.")
        return self._canvas

    def composite(self, origin: tuple[int, int], buffer: np.ndarray) -> None:
        """Copy ``buffer`` into the canvas with its top-left corner at ``origin``."""

        canvas = self.canvas
        x, y = origin
        if buffer.ndim != 3 or buffer.shape[2] != 3 or buffer.dtype != np.uint8:
            raise CompositionError(
                f"tile at {origin} has shape {buffer.shape} and dtype {buffer.dtype}, expected (h, w, 3) uint8."
            )
        tile_height, tile_width = buffer.shape[:2]
        if x < 0 or y < 0 or x + tile_width > self.width or y + tile_height > self.height:
            raise CompositionError(
                f"tile {tile_width}x{tile_height} at {origin} does not fit a {self.width}x{self.height} canvas."
            )
        region = self._writes[y:y + tile_height, x:x + tile_width]
        if region.any():
            raise CompositionError(f"tile at {origin} overlaps pixels that were already composited.")

        canvas[y:y + tile_height, x:x + tile_width] = buffer
        region += 1
        self.received += 1

    def collect(self, channel: Any, expected: int, log: Optional[Callable[[str], None]] = None) -> np.ndarray:
        """
        Receive and composite ``expected`` tiles from ``channel``, then hand off the canvas.

        Blocks on ``channel.get()`` until the count is reached; there is no idle
        timeout. A ``TileFailure`` message aborts composition.
        """
        while self.received < expected:
            try:
                item = channel.get()
            except (OSError, EOFError) as exc:
                raise ChannelError(f"receiving tiles failed after {self.received}/{expected}: {exc}") from exc

            if isinstance(item, TileFailure):
                raise ChannelError(f"tile at {item.origin} failed: {item.reason}")
            if not isinstance(item, TileResult):
                raise ChannelError(f"unexpected message on tile channel: {item!r}")

            self.composite(item.origin, item.buffer)
            if log is not None:
                log(f"composited tile {item.origin} ({self.received}/{expected})")

        return self.release()

    def release(self) -> np.ndarray:
        """Verify full coverage and transfer ownership of the canvas to the caller."""

        canvas = self.canvas
        missing = int(np.count_nonzero(self._writes == 0))
        if missing:
            raise CompositionError(f"{missing} canvas pixels were never written.")
        self._canvas = None
        return canvas
