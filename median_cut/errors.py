# median_cut/errors.py
from __future__ import annotations

"""
Error kinds raised by the quantization pipeline.

Config and input problems subclass ValueError so callers that already catch
ValueError keep working. Worker failures in the parallel stages surface as
StageError, chained to the original exception.
"""


class MedianCutError(Exception):
    """Base class for all median_cut errors."""


class InvalidConfigError(MedianCutError, ValueError):
    """Bad bucket count, channel priority or colour-space name."""


class UnknownColourSpaceError(InvalidConfigError):
    """No converter registered under the requested colour-space name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no converter registered for colour space {name!r}")
        self.name = name


class EmptyImageError(MedianCutError, ValueError):
    """Nothing to quantize: empty pixel grid, pixel list or palette."""


class StageError(MedianCutError, RuntimeError):
    """A worker inside a parallel stage failed; the whole stage is aborted."""

    def __init__(self, stage: str, detail: str) -> None:
        super().__init__(f"{stage} failed: {detail}")
        self.stage = stage
        self.detail = detail


__all__ = [
    "MedianCutError",
    "InvalidConfigError",
    "UnknownColourSpaceError",
    "EmptyImageError",
    "StageError",
]
