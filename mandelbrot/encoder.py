"""PNG output for finished canvases."""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import PIL.Image

from .errors import EncoderError

STRATEGIES = {
    "default": zlib.Z_DEFAULT_STRATEGY,
    "filtered": zlib.Z_FILTERED,
    "huffman": zlib.Z_HUFFMAN_ONLY,
    "rle": zlib.Z_RLE,
    "fixed": zlib.Z_FIXED,
}


@dataclass(frozen=True)
class EncoderSettings:
    """Compression settings for the PNG writer.

    Pillow picks the PNG row filter for each scanline adaptively; ``strategy``
    selects how zlib compresses the filtered rows.
    """

    compress_level: int = 9
    strategy: str = "filtered"

    def __post_init__(self) -> None:
        if not 0 <= self.compress_level <= 9:
            raise ValueError("compress_level must be between 0 and 9.")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{self.strategy}'. Valid choices: {', '.join(sorted(STRATEGIES))}.")


def output_filename(width: int, height: int) -> str:
    return f"mandelbrot-{width}x{height}.png"


def write_png(canvas: np.ndarray, output_path: Path, settings: EncoderSettings = EncoderSettings()) -> Path:
    """Write a ``(height, width, 3)`` uint8 canvas to ``output_path`` as PNG."""

    if canvas.ndim != 3 or canvas.shape[2] != 3 or canvas.dtype != np.uint8:
        raise EncoderError(f"expected an RGB uint8 canvas, got shape {canvas.shape} and dtype {canvas.dtype}.")

    output_path = Path(output_path)
    image = PIL.Image.fromarray(np.ascontiguousarray(canvas))
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(
            str(output_path),
            format="PNG",
            compress_level=settings.compress_level,
            compress_type=STRATEGIES[settings.strategy],
        )
    except (OSError, ValueError) as exc:
        if output_path.is_file():
            output_path.unlink()
        raise EncoderError(f"could not write {output_path}: {exc}") from exc
    return output_path
