# median_cut/spaces/hsl.py
from __future__ import annotations

"""
HSL converter. Hue is stored in [0,1) standing for [0,360) degrees.

Saturation uses the canonical delta / (1 - |2L - 1|), defined as 0 when the
denominator is not positive. All three channels are clamped to [0,1].
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


def hsl_to_normalized(argb: ArgbArray) -> ChannelArray:
    """Packed ARGB [N] -> float64 [N,3] of (hue, saturation, lightness)."""
    _a, r8, g8, b8 = split_argb(as_argb_array(argb))
    rn = r8 / 255.0
    gn = g8 / 255.0
    bn = b8 / 255.0

    cmax = np.maximum(rn, np.maximum(gn, bn))
    cmin = np.minimum(rn, np.minimum(gn, bn))
    delta = cmax - cmin
    lightness = (cmax + cmin) / 2.0

    chromatic = delta > 0.0
    safe_delta = np.where(chromatic, delta, 1.0)
    h_prime = np.select(
        [cmax == rn, cmax == gn],
        [
            (gn - bn) / safe_delta,
            (bn - rn) / safe_delta + 2.0,
        ],
        default=(rn - gn) / safe_delta + 4.0,
    )
    hue_deg = np.mod(h_prime * 60.0, 360.0)
    hue = np.where(chromatic, hue_deg / 360.0, 0.0)

    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    safe_denom = np.where(denom > 0.0, denom, 1.0)
    sat = np.where(chromatic & (denom > 0.0), delta / safe_denom, 0.0)

    out = np.empty((rn.shape[0], 3), dtype=np.float64)
    out[:, 0] = np.clip(hue, 0.0, 1.0)
    out[:, 1] = np.clip(sat, 0.0, 1.0)
    out[:, 2] = np.clip(lightness, 0.0, 1.0)
    return out


def hsl_to_packed(values: ChannelArray) -> ArgbArray:
    """float64 [N,3] (hue, saturation, lightness) -> opaque packed ARGB [N]."""
    v = np.asarray(values, dtype=np.float64).reshape(-1, 3)
    h, s, l = v[:, 0], v[:, 1], v[:, 2]

    hue_deg = np.mod(h * 360.0, 360.0)
    c = (1.0 - np.abs(2.0 * l - 1.0)) * s
    section = hue_deg / 60.0
    x = c * (1.0 - np.abs(np.mod(section, 2.0) - 1.0))
    m = l - c / 2.0
    zero = np.zeros_like(c)

    sector = np.clip(np.floor(section), 0, 5).astype(np.int64)
    # rows: (r1, g1, b1) for sectors 0..5
    r1 = np.choose(sector, [c, x, zero, zero, x, c])
    g1 = np.choose(sector, [x, c, c, x, zero, zero])
    b1 = np.choose(sector, [zero, zero, x, c, c, x])

    return pack_argb(
        np.full(v.shape[0], 0xFF, dtype=np.uint32),
        unit_to_byte(np.clip(r1 + m, 0.0, 1.0)),
        unit_to_byte(np.clip(g1 + m, 0.0, 1.0)),
        unit_to_byte(np.clip(b1 + m, 0.0, 1.0)),
    )


__all__ = ["hsl_to_normalized", "hsl_to_packed"]
