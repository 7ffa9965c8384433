# median_cut/spaces/oklab.py
from __future__ import annotations

"""
OKLab converter with iterative gamut mapping.

Channels are carried unnormalised: L is roughly 0..1, a and b roughly
-0.4..0.4. Nothing downstream assumes [0,1] for this space; the median cut
only needs consistent distances and means.

Inverse:
  Try the direct OKLab -> linear sRGB inverse. If any channel leaves [0,1],
  scale the (a, b) chroma down by another GAMUT_STEP of the input and retry, up to
  GAMUT_MAX_STEPS reductions. The last attempt is scale 0 (pure lightness),
  which is always returned if nothing earlier fits. Results are then
  gamma-encoded and clamped to 0..255.
"""

from typing import Tuple

import numpy as np

from ..core_types import (
    ArgbArray,
    ChannelArray,
    as_argb_array,
    pack_argb,
    split_argb,
    unit_to_byte,
)

GAMUT_STEP = 0.05
GAMUT_MAX_STEPS = 20
# float round-off of the matrix pair; far below one 8-bit step
GAMUT_TOLERANCE = 1e-6

_RGB_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ],
    dtype=np.float64,
)

_LMS_TO_LAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ],
    dtype=np.float64,
)

# rows give the a and b coefficients for l', m', s' (L enters with weight 1)
_LAB_TO_LMS_AB = np.array(
    [
        [0.3963377774, 0.2158037573],
        [-0.1055613458, -0.0638541728],
        [-0.0894841775, -1.2914855480],
    ],
    dtype=np.float64,
)

_LMS_TO_RGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ],
    dtype=np.float64,
)


def srgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """sRGB (non-linear 0..1) -> linear RGB (0..1). Vectorised."""
    u = np.asarray(srgb, dtype=np.float64)
    return np.where(u <= 0.04045, u / 12.92, ((u + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Linear RGB -> sRGB (non-linear). Negative inputs stay on the linear segment."""
    u = np.asarray(linear, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        curved = 1.055 * np.power(np.maximum(u, 0.0), 1.0 / 2.4) - 0.055
    return np.where(u <= 0.0031308, 12.92 * u, curved)


def oklab_to_normalized(argb: ArgbArray) -> ChannelArray:
    """Packed ARGB [N] -> float64 [N,3] of (L, a, b)."""
    _a, r8, g8, b8 = split_argb(as_argb_array(argb))
    srgb = np.stack([r8, g8, b8], axis=1) / 255.0
    linear = srgb_to_linear(srgb)
    lms = linear @ _RGB_TO_LMS.T
    return np.cbrt(lms) @ _LMS_TO_LAB.T


def _lab_to_linear(lab: np.ndarray, scale: np.ndarray) -> np.ndarray:
    """OKLab [N,3] with per-row chroma scale [N] -> linear sRGB [N,3]."""
    ab = lab[:, 1:] * scale[:, None]
    lms_ = lab[:, :1] + ab @ _LAB_TO_LMS_AB.T
    return (lms_ ** 3) @ _LMS_TO_RGB.T


def gamut_map_oklab(lab: ChannelArray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map OKLab rows into the sRGB gamut by shrinking chroma.

    Args:
      lab: float [N,3] or [3]
    Returns:
      (linear_rgb float64 [N,3], scale float64 [N]) where scale is the chroma
      factor that produced the returned row.
    """
    rows = np.asarray(lab, dtype=np.float64).reshape(-1, 3)
    n = rows.shape[0]
    linear = np.zeros((n, 3), dtype=np.float64)
    used_scale = np.zeros(n, dtype=np.float64)
    pending = np.ones(n, dtype=bool)

    lo = -GAMUT_TOLERANCE
    hi = 1.0 + GAMUT_TOLERANCE
    for step in range(GAMUT_MAX_STEPS + 1):
        if not np.any(pending):
            break
        scale = max(0.0, 1.0 - GAMUT_STEP * step)
        idx = np.flatnonzero(pending)
        trial = _lab_to_linear(rows[idx], np.full(idx.size, scale))
        fits = np.all((trial >= lo) & (trial <= hi), axis=1)
        if step == GAMUT_MAX_STEPS:
            fits[:] = True
        done = idx[fits]
        linear[done] = trial[fits]
        used_scale[done] = scale
        pending[done] = False

    return linear, used_scale


def oklab_to_packed(values: ChannelArray) -> ArgbArray:
    """float64 [N,3] (L, a, b) -> opaque packed ARGB [N], gamut mapped."""
    linear, _scale = gamut_map_oklab(values)
    srgb = linear_to_srgb(np.clip(linear, 0.0, 1.0))
    return pack_argb(
        np.full(srgb.shape[0], 0xFF, dtype=np.uint32),
        unit_to_byte(srgb[:, 0]),
        unit_to_byte(srgb[:, 1]),
        unit_to_byte(srgb[:, 2]),
    )


__all__ = [
    "GAMUT_STEP",
    "GAMUT_MAX_STEPS",
    "GAMUT_TOLERANCE",
    "srgb_to_linear",
    "linear_to_srgb",
    "oklab_to_normalized",
    "oklab_to_packed",
    "gamut_map_oklab",
]
