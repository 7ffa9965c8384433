# median_cut/palette_export.py
from __future__ import annotations

"""
Diagnostic palette output.

palette_to_rgba turns the averaged palette back into packed colours;
palette_image lays them out as a square swatch grid for display.
"""

import math
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image

from .core_types import ArgbArray, Pixel, as_argb_array, packed_to_rgb, rgb_to_hex
from .image_io import argb_to_image
from .spaces import ColourSpace


def palette_to_rgba(palette: Sequence[Pixel], space: ColourSpace) -> ArgbArray:
    """One opaque packed RGBA per palette entry, in palette order."""
    if not palette:
        return np.zeros((0,), dtype=np.uint32)
    rows = np.array([p.values for p in palette], dtype=np.float64)
    return space.to_packed_rgb(rows)


def palette_report(palette_rgba: ArgbArray, palette: Sequence[Pixel]) -> List[Tuple[str, int]]:
    """(hex, weight) per palette entry, heaviest first."""
    rows = [
        (rgb_to_hex(packed_to_rgb(int(c))), int(p.count))
        for c, p in zip(as_argb_array(palette_rgba).tolist(), palette)
    ]
    return sorted(rows, key=lambda row: -row[1])


def palette_image(rgba: ArgbArray, cell_size: int = 1) -> Image.Image:
    """
    Square swatch image of a palette.

    With n colours the grid is ceil(sqrt(n)) cells per side, filled row by
    row; each cell is cell_size x cell_size pixels. Unused cells stay fully
    transparent.
    """
    colours = as_argb_array(rgba)
    if colours.size == 0:
        raise ValueError("palette cannot be empty")
    if cell_size < 1:
        raise ValueError("cell_size must be >= 1")

    side = int(math.ceil(math.sqrt(colours.size)))
    cells = np.zeros(side * side, dtype=np.uint32)
    cells[: colours.size] = colours
    grid = cells.reshape(side, side)
    grid = np.repeat(np.repeat(grid, cell_size, axis=0), cell_size, axis=1)
    return argb_to_image(grid)


__all__ = ["palette_to_rgba", "palette_report", "palette_image"]
