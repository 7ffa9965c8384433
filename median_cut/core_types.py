# median_cut/core_types.py
from __future__ import annotations

"""
Core type aliases, the Pixel value object, and packed-ARGB helpers.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

ChannelValues = Tuple[float, float, float]
RGBTuple = Tuple[int, int, int]
HexStr = str

ArgbGrid = NDArray[np.uint32]  # (H, W) packed 0xAARRGGBB
ArgbArray = NDArray[np.uint32]  # (N,) packed 0xAARRGGBB
ChannelArray = NDArray[np.float64]  # (N, 3) normalised channel rows
WeightArray = NDArray[np.int64]  # (N,) occurrence counts

ChannelSelector = Union[None, int, str]  # None / "none", channel index, channel name
ChannelPriority = Tuple[Optional[int], ...]  # resolved indices, None = no priority

# Plugin signatures

ToNormalized = Callable[[ArgbArray], ChannelArray]
ToPackedRGB = Callable[[ChannelArray], ArgbArray]

RGB_MASK = np.uint32(0x00FFFFFF)

# Value objects


@dataclass(unsafe_hash=True)
class Pixel:
    """
    Three channel values in some colour space plus an occurrence count.

    Equality and hashing look at the channel values only, so two pixels with
    the same colour but different counts compare equal. Only count changes
    after construction.
    """

    values: ChannelValues
    count: int = field(default=1, compare=False, hash=False)

    @classmethod
    def of(cls, a: float, b: float, c: float, count: int = 1) -> "Pixel":
        return cls((float(a), float(b), float(c)), int(count))

    def merge(self, count: int = 1) -> None:
        """Fold `count` more occurrences of this colour into the entry."""
        self.count += int(count)


# Small helpers


def split_argb(
    argb: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Packed 0xAARRGGBB -> (a, r, g, b) uint32 arrays of the same shape."""
    packed = np.asarray(argb, dtype=np.uint32)
    a = (packed >> np.uint32(24)) & np.uint32(0xFF)
    r = (packed >> np.uint32(16)) & np.uint32(0xFF)
    g = (packed >> np.uint32(8)) & np.uint32(0xFF)
    b = packed & np.uint32(0xFF)
    return a, r, g, b


def pack_argb(a: np.ndarray, r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """(a, r, g, b) channel arrays in 0..255 -> packed 0xAARRGGBB uint32."""
    a = np.asarray(a, dtype=np.uint32)
    r = np.asarray(r, dtype=np.uint32)
    g = np.asarray(g, dtype=np.uint32)
    b = np.asarray(b, dtype=np.uint32)
    return (
        (a << np.uint32(24)) | (r << np.uint32(16)) | (g << np.uint32(8)) | b
    ).astype(np.uint32, copy=False)


def unit_to_byte(unit: np.ndarray) -> np.ndarray:
    """Map [0,1] floats to 0..255, rounding half up and clamping."""
    scaled = np.floor(np.asarray(unit, dtype=np.float64) * 255.0 + 0.5)
    return np.clip(scaled, 0, 255).astype(np.uint32)


def packed_to_rgb(argb: int) -> RGBTuple:
    """Packed 0x??RRGGBB int -> (r, g, b)."""
    v = int(argb)
    return ((v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF)


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def as_argb_array(values: Union[int, Sequence[int], np.ndarray]) -> ArgbArray:
    """Coerce a packed int, sequence or array into a flat uint32 array."""
    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros(0, dtype=np.uint32)
    if arr.dtype.kind == "f":
        raise TypeError("packed ARGB values must be integers")
    return arr.astype(np.uint32).reshape(-1)


def assert_argb_grid(grid: np.ndarray) -> ArgbGrid:
    """Validate a 2-D (H,W) packed ARGB grid and return it typed as uint32."""
    arr = np.asarray(grid)
    if arr.ndim != 2 or arr.dtype.kind not in "iu":
        raise TypeError("expected integer (H,W) packed ARGB grid")
    return arr.astype(np.uint32, copy=False)  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "ChannelValues",
    "RGBTuple",
    "HexStr",
    "ArgbGrid",
    "ArgbArray",
    "ChannelArray",
    "WeightArray",
    "ChannelSelector",
    "ChannelPriority",
    "ToNormalized",
    "ToPackedRGB",
    "RGB_MASK",
    # value objects
    "Pixel",
    # helpers
    "split_argb",
    "pack_argb",
    "unit_to_byte",
    "packed_to_rgb",
    "rgb_to_hex",
    "as_argb_array",
    "assert_argb_grid",
]
