# median_cut/reconstruct.py
from __future__ import annotations

"""
Palette remap of the source grid.

Rows are cut into one contiguous stripe per worker. Each stripe looks up the
nearest palette colour once per distinct RGB value it contains and writes
into its own slice of the output, keeping the source alpha. The tree and the
source grid are only read.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from .core_types import ArgbGrid, RGB_MASK, assert_argb_grid
from .errors import StageError
from .kdtree import KdTreeRGB
from .utils import resolve_workers, split_rows_into_parts

ALPHA_MASK = np.uint32(0xFF000000)


def remap_block(block: np.ndarray, tree: KdTreeRGB) -> np.ndarray:
    """Remap one block of packed ARGB to nearest palette RGB, alpha untouched."""
    flat = block.reshape(-1)
    if flat.size == 0:
        return block.copy()
    rgb = flat & RGB_MASK
    uniques, inverse = np.unique(rgb, return_inverse=True)
    nearest_rgb = np.array(
        [tree.colour_at(tree.nearest_packed(int(c))) for c in uniques.tolist()],
        dtype=np.uint32,
    ) & RGB_MASK
    out = (flat & ALPHA_MASK) | nearest_rgb[inverse.reshape(-1)]
    return out.astype(np.uint32, copy=False).reshape(block.shape)


def _remap_stripe(
    src: ArgbGrid, out: ArgbGrid, start: int, end: int, tree: KdTreeRGB
) -> None:
    out[start:end] = remap_block(src[start:end], tree)


def reconstruct_image(
    argb: ArgbGrid, tree: KdTreeRGB, *, workers: Optional[int] = None
) -> ArgbGrid:
    """
    Replace every pixel's RGB with its nearest palette colour.

    Args:
      argb   : packed ARGB grid [H,W]
      tree   : KD-tree over the palette
      workers: stripe count / thread count; defaults to one per CPU
    Returns:
      new uint32 grid [H,W]; alpha copied from the source per pixel.
    Raises:
      StageError if any stripe fails; no image is returned in that case.
    """
    src = assert_argb_grid(argb)
    height = int(src.shape[0])
    out = np.zeros(src.shape, dtype=np.uint32)
    if src.size == 0:
        return out

    n_workers = resolve_workers(workers)
    stripes = split_rows_into_parts(height, n_workers)
    with ThreadPoolExecutor(max_workers=len(stripes)) as pool:
        futures = [
            (s, e, pool.submit(_remap_stripe, src, out, s, e, tree))
            for s, e in stripes
        ]
    for s, e, fut in futures:
        exc = fut.exception()
        if exc is not None:
            raise StageError("reconstruct", f"rows {s}..{e}: {exc}") from exc
    return out


__all__ = ["remap_block", "reconstruct_image"]
