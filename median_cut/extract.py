# median_cut/extract.py
from __future__ import annotations

"""
Unique colour extraction.

Converts every pixel of a packed ARGB grid into the selected colour space and
folds identical channel rows into one Pixel with a count. Rows are processed
as contiguous stripes on a thread pool; each stripe dedups locally with
np.unique and merges into one shared table under a lock.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .core_types import ArgbArray, ArgbGrid, ChannelValues, Pixel, assert_argb_grid
from .errors import StageError
from .spaces import ColourSpace
from .utils import resolve_workers, split_rows_into_parts


class PixelTable:
    """Channel-values -> Pixel map with an atomic merge."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pixels: Dict[ChannelValues, Pixel] = {}

    def merge_rows(self, values: np.ndarray, counts: np.ndarray) -> None:
        """Fold (U,3) channel rows with (U,) counts into the table."""
        keys = [tuple(row) for row in values.tolist()]
        with self._lock:
            for key, count in zip(keys, counts.tolist()):
                existing = self._pixels.get(key)
                if existing is None:
                    self._pixels[key] = Pixel(key, int(count))
                else:
                    existing.merge(int(count))

    def pixels(self) -> List[Pixel]:
        with self._lock:
            return list(self._pixels.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._pixels)


def _unique_rows(rows: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Unique (N,3) channel rows and how often each occurs."""
    if rows.shape[0] == 0:
        return rows, np.zeros((0,), dtype=np.int64)
    uniques, counts = np.unique(rows, axis=0, return_counts=True)
    return uniques, counts.astype(np.int64, copy=False)


def _extract_stripe(
    grid: ArgbGrid, start: int, end: int, space: ColourSpace, table: PixelTable
) -> None:
    rows = space.to_normalized(grid[start:end].reshape(-1))
    uniques, counts = _unique_rows(rows)
    table.merge_rows(uniques, counts)


def extract_unique_pixels(
    argb: ArgbGrid, space: ColourSpace, *, workers: Optional[int] = None
) -> List[Pixel]:
    """
    Deduplicate an image into unique Pixels in the given colour space.

    Args:
      argb   : packed ARGB grid [H,W]
      space  : colour space converter
      workers: thread count; defaults to one per CPU
    Returns:
      list of Pixel, one per distinct channel row, counts summing to H*W.
      Order is not significant.
    Raises:
      StageError if any stripe worker fails (no partial list is returned).
    """
    grid = assert_argb_grid(argb)
    height = int(grid.shape[0])
    table = PixelTable()
    if grid.size == 0:
        return []

    n_workers = resolve_workers(workers)
    stripes = split_rows_into_parts(height, n_workers)
    if len(stripes) == 1:
        start, end = stripes[0]
        try:
            _extract_stripe(grid, start, end, space, table)
        except Exception as exc:
            raise StageError(
                "extract", f"{space.name} rows {start}..{end}: {exc}"
            ) from exc
        return table.pixels()

    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        futures = [
            (s, e, pool.submit(_extract_stripe, grid, s, e, space, table))
            for s, e in stripes
        ]
    # the pool has joined every stripe here
    for s, e, fut in futures:
        exc = fut.exception()
        if exc is not None:
            raise StageError(
                "extract", f"{space.name} rows {s}..{e}: {exc}"
            ) from exc
    return table.pixels()


def expand_to_rgba(pixels: Sequence[Pixel], space: ColourSpace) -> ArgbArray:
    """
    Convert Pixels back to packed RGBA, repeating each entry `count` times.

    Output order follows the input list.
    """
    if not pixels:
        return np.zeros((0,), dtype=np.uint32)
    rows = np.array([p.values for p in pixels], dtype=np.float64)
    counts = np.array([max(0, p.count) for p in pixels], dtype=np.int64)
    packed = space.to_packed_rgb(rows)
    return np.repeat(packed, counts).astype(np.uint32, copy=False)


__all__ = ["PixelTable", "extract_unique_pixels", "expand_to_rgba"]
