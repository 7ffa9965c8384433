# median_cut/spaces/rgb.py
from __future__ import annotations

"""
RGB converter: each channel scaled linearly from 0..255 to [0,1].

GRAYSCALE reuses these two functions and only differs in how it sorts (by r+g+b).
"""

import numpy as np

from ..core_types import (
    ArgbArray,
    ChannelArray,
    as_argb_array,
    pack_argb,
    split_argb,
    unit_to_byte,
)


def rgb_to_normalized(argb: ArgbArray) -> ChannelArray:
    """Packed ARGB [N] -> float64 [N,3] of (r, g, b) in [0,1]. Alpha is ignored."""
    _a, r, g, b = split_argb(as_argb_array(argb))
    out = np.empty((r.shape[0], 3), dtype=np.float64)
    out[:, 0] = r / 255.0
    out[:, 1] = g / 255.0
    out[:, 2] = b / 255.0
    return out


def rgb_to_packed(values: ChannelArray) -> ArgbArray:
    """float64 [N,3] (r, g, b) in [0,1] -> opaque packed ARGB [N]."""
    v = np.asarray(values, dtype=np.float64).reshape(-1, 3)
    return pack_argb(
        np.full(v.shape[0], 0xFF, dtype=np.uint32),
        unit_to_byte(v[:, 0]),
        unit_to_byte(v[:, 1]),
        unit_to_byte(v[:, 2]),
    )


__all__ = ["rgb_to_normalized", "rgb_to_packed"]
