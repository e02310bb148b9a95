"""Fixed-size worker pool that renders tiles and publishes them on a shared channel."""

from __future__ import annotations

import multiprocessing
import os
from concurrent.futures import Future, ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Any, Optional

import numpy as np

from .errors import ChannelError, PoolError
from .renderer import TileTask, render_tile


@dataclass(frozen=True)
class TileResult:
    """A finished tile, ready to be composited at ``origin``."""

    origin: tuple[int, int]
    buffer: np.ndarray


@dataclass(frozen=True)
class TileFailure:
    """Published in place of a tile whose task did not complete."""

    origin: tuple[int, int]
    reason: str


def available_parallelism() -> int:
    """CPUs this process may run on, honouring affinity masks where the OS reports them."""

    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count() or 1


def default_pool_size() -> int:
    """Available parallelism minus one unit kept for the aggregating process."""

    return max(1, available_parallelism() - 1)


def run_task(task: TileTask, channel: Any) -> tuple[int, int]:
    """Worker entry point: render the tile and publish it."""

    buffer = render_tile(task)
    channel.put(TileResult(origin=task.tile.origin, buffer=buffer))
    return task.tile.origin


def _report_failure(channel: Any, origin: tuple[int, int], future: Future) -> None:
    if future.cancelled():
        channel.put(TileFailure(origin=origin, reason="task was cancelled"))
        return
    exc = future.exception()
    if exc is not None:
        channel.put(TileFailure(origin=origin, reason=f"{type(exc).__name__}: {exc}"))


class WorkerPool:
    """
    Process pool plus the many-producer, single-consumer ingestion channel.

    Usage:
        with WorkerPool(size=4) as pool:
            for task in tasks:
                pool.submit(task)
            item = pool.channel.get()

    Every submitted task eventually puts exactly one message on ``channel``:
    a ``TileResult`` on success or a ``TileFailure`` if the task raised or its
    worker died.
    """

    def __init__(self, size: Optional[int] = None):
        self.size = default_pool_size() if size is None else int(size)
        if self.size < 1:
            raise PoolError(f"worker pool size must be at least 1, got {self.size}.")
        self.channel: Any = None
        self._manager = None
        self._executor: Optional[ProcessPoolExecutor] = None

    def __enter__(self) -> WorkerPool:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def start(self) -> None:
        try:
            self._manager = multiprocessing.Manager()
            self.channel = self._manager.Queue()
            self._executor = ProcessPoolExecutor(max_workers=self.size)
        except (OSError, EOFError, ValueError) as exc:
            self.close()
            raise PoolError(f"could not start a pool of {self.size} workers: {exc}") from exc

    def submit(self, task: TileTask) -> Future:
        """Dispatch ``task``; its tile will arrive on ``channel``."""

        if self._executor is None:
            raise PoolError("worker pool is not running.")
        try:
            future = self._executor.submit(run_task, task, self.channel)
        except OSError as exc:
            raise PoolError(f"could not start workers for tile {task.tile.origin}: {exc}") from exc
        except RuntimeError as exc:
            raise ChannelError(f"could not dispatch tile {task.tile.origin}: {exc}") from exc
        future.add_done_callback(partial(_report_failure, self.channel, task.tile.origin))
        return future

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._manager is not None:
            self._manager.shutdown()
            self._manager = None
        self.channel = None
