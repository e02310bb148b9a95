"""Exceptions raised by the tiled rendering pipeline."""

from __future__ import annotations


class RenderError(RuntimeError):
    """Base class for failures that abort a render."""


class PoolError(RenderError):
    """The worker pool or its ingestion channel could not be created."""


class ChannelError(RenderError):
    """A tile could not be published or received."""


class CompositionError(RenderError):
    """A tile does not fit the canvas, or the canvas was not fully covered."""


class EncoderError(RenderError):
    """The finished canvas could not be written to disk."""
