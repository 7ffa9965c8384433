# median_cut/spaces/hsb.py
from __future__ import annotations

"""
HSB (a.k.a. HSV) converter. Hue in [0,1), saturation and brightness in [0,1].
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


def hsb_to_normalized(argb: ArgbArray) -> ChannelArray:
    """Packed ARGB [N] -> float64 [N,3] of (hue, saturation, brightness)."""
    _a, r8, g8, b8 = split_argb(as_argb_array(argb))
    r = r8.astype(np.float64)
    g = g8.astype(np.float64)
    b = b8.astype(np.float64)

    cmax = np.maximum(r, np.maximum(g, b))
    cmin = np.minimum(r, np.minimum(g, b))
    spread = cmax - cmin

    brightness = cmax / 255.0
    sat = np.where(cmax > 0.0, spread / np.where(cmax > 0.0, cmax, 1.0), 0.0)

    chromatic = sat > 0.0
    safe_spread = np.where(chromatic, spread, 1.0)
    redc = (cmax - r) / safe_spread
    greenc = (cmax - g) / safe_spread
    bluec = (cmax - b) / safe_spread
    hue = np.select(
        [r == cmax, g == cmax],
        [bluec - greenc, 2.0 + redc - bluec],
        default=4.0 + greenc - redc,
    ) / 6.0
    hue = np.where(hue < 0.0, hue + 1.0, hue)
    hue = np.where(chromatic, hue, 0.0)

    out = np.empty((r.shape[0], 3), dtype=np.float64)
    out[:, 0] = hue
    out[:, 1] = sat
    out[:, 2] = brightness
    return out


def hsb_to_packed(values: ChannelArray) -> ArgbArray:
    """float64 [N,3] (hue, saturation, brightness) -> opaque packed ARGB [N]."""
    v = np.asarray(values, dtype=np.float64).reshape(-1, 3)
    hue, sat, bri = v[:, 0], v[:, 1], v[:, 2]

    h = (hue - np.floor(hue)) * 6.0
    f = h - np.floor(h)
    p = bri * (1.0 - sat)
    q = bri * (1.0 - sat * f)
    t = bri * (1.0 - sat * (1.0 - f))

    sector = np.clip(np.floor(h), 0, 5).astype(np.int64)
    r = np.choose(sector, [bri, q, p, p, t, bri])
    g = np.choose(sector, [t, bri, bri, q, p, p])
    b = np.choose(sector, [p, p, t, bri, bri, q])

    grey = sat == 0.0
    r = np.where(grey, bri, r)
    g = np.where(grey, bri, g)
    b = np.where(grey, bri, b)

    return pack_argb(
        np.full(v.shape[0], 0xFF, dtype=np.uint32),
        unit_to_byte(r),
        unit_to_byte(g),
        unit_to_byte(b),
    )


__all__ = ["hsb_to_normalized", "hsb_to_packed"]
