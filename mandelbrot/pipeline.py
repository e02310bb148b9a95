"""Dispatch tiles to the worker pool, composite them, and write the image."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import numpy as np

from .aggregator import Aggregator
from .encoder import EncoderSettings, output_filename, write_png
from .pool import WorkerPool
from .renderer import RenderParameters, build_tasks

Log = Callable[[str], None]


def _quiet(message: str) -> None:
    pass


def render_canvas(params: RenderParameters, *, workers: Optional[int] = None, log: Optional[Log] = None) -> np.ndarray:
    """Render the full canvas in parallel and return it as a ``(height, width, 3)`` array."""

    log = log or _quiet
    tasks = build_tasks(params)
    aggregator = Aggregator(params.width, params.height)

    with WorkerPool(workers) as pool:
        log(f"rendering {len(tasks)} tiles on {pool.size} workers")
        for task in tasks:
            pool.submit(task)
            log(f"dispatched tile {task.tile.origin}")
        return aggregator.collect(pool.channel, len(tasks), log=log)


def render_to_file(
    params: RenderParameters,
    output_dir: Path = Path("."),
    *,
    settings: EncoderSettings = EncoderSettings(),
    workers: Optional[int] = None,
    log: Optional[Log] = None,
) -> Path:
    """Render ``params`` and save ``mandelbrot-<w>x<h>.png`` inside ``output_dir``."""

    log = log or _quiet
    canvas = render_canvas(params, workers=workers, log=log)
    output_path = Path(output_dir) / output_filename(params.width, params.height)
    log(f"received all tiles, saving {output_path}")
    write_png(canvas, output_path, settings)
    log(f"saved {output_path}")
    return output_path
