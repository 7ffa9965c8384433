# median_cut/image_io.py
from __future__ import annotations

"""
In-memory Pillow adapters between PIL images and packed ARGB grids.

No file access happens here; decoding and encoding stay with the caller.
"""

import numpy as np
from PIL import Image, ImageOps

from .core_types import ArgbGrid, assert_argb_grid, pack_argb, split_argb


def image_to_argb(im: Image.Image) -> ArgbGrid:
    """PIL image (any mode) -> uint32 [H,W] packed 0xAARRGGBB, EXIF-oriented."""
    rgba = ImageOps.exif_transpose(im).convert("RGBA")
    arr = np.array(rgba, dtype=np.uint8)
    return pack_argb(arr[..., 3], arr[..., 0], arr[..., 1], arr[..., 2])


def argb_to_rgba_array(argb: ArgbGrid) -> np.ndarray:
    """uint32 [H,W] packed ARGB -> uint8 [H,W,4] RGBA."""
    grid = assert_argb_grid(argb)
    a, r, g, b = split_argb(grid)
    out = np.empty(grid.shape + (4,), dtype=np.uint8)
    out[..., 0] = r
    out[..., 1] = g
    out[..., 2] = b
    out[..., 3] = a
    return out


def argb_to_image(argb: ArgbGrid) -> Image.Image:
    """uint32 [H,W] packed ARGB -> PIL RGBA image."""
    return Image.fromarray(argb_to_rgba_array(argb))


__all__ = ["image_to_argb", "argb_to_rgba_array", "argb_to_image"]
