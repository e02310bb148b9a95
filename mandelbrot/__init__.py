"""Public API for tiled Mandelbrot rendering."""

from .aggregator import Aggregator
from .encoder import EncoderSettings, output_filename, write_png
from .errors import ChannelError, CompositionError, EncoderError, PoolError, RenderError
from .kernel import Complex, escape_counts, stability
from .palette import build_palette, color_for, colorize, hue_to_rgb
from .pipeline import render_canvas, render_to_file
from .pool import TileFailure, TileResult, WorkerPool, default_pool_size
from .renderer import RenderParameters, TileTask, build_tasks, render_tile
from .tiles import Tile, partition, tile_count

__all__ = [
    "Aggregator",
    "ChannelError",
    "Complex",
    "CompositionError",
    "EncoderError",
    "EncoderSettings",
    "PoolError",
    "RenderError",
    "RenderParameters",
    "Tile",
    "TileFailure",
    "TileResult",
    "TileTask",
    "WorkerPool",
    "build_palette",
    "build_tasks",
    "color_for",
    "colorize",
    "default_pool_size",
    "escape_counts",
    "hue_to_rgb",
    "output_filename",
    "partition",
    "render_canvas",
    "render_tile",
    "render_to_file",
    "stability",
    "tile_count",
    "write_png",
]
