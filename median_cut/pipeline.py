# median_cut/pipeline.py
from __future__ import annotations

"""
End-to-end median cut run for one image.

Steps:
  1) validate the grid and the config, resolve the colour space
  2) extract unique colours (threaded by row stripes)
  3) sort once by the configured channel priority
  4) median cut down to the requested bucket count
  5) convert the palette back to packed RGB
  6) build the KD-tree
  7) remap every pixel (threaded by row stripes), alpha preserved
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from .config import QuantizeConfig
from .core_types import ArgbArray, ArgbGrid, Pixel, assert_argb_grid
from .errors import EmptyImageError
from .extract import extract_unique_pixels
from .kdtree import KdTreeRGB
from .palette_export import palette_report, palette_to_rgba
from .quantize import quantize
from .reconstruct import reconstruct_image
from .sorter import sort_pixels
from .spaces import ColourSpaceRegistry, build_registry
from .utils import (
    debug_log,
    measure,
    print_config_line,
    resolve_workers,
    warn,
)


@dataclass
class QuantizeResult:
    """Reconstructed grid plus the palette that produced it."""

    image: ArgbGrid
    palette: List[Pixel]
    palette_rgba: ArgbArray
    unique_colours: int = 0
    config: Optional[QuantizeConfig] = field(default=None, repr=False)

    @property
    def palette_size(self) -> int:
        return len(self.palette)


def quantize_image(
    argb: ArgbGrid,
    config: QuantizeConfig,
    *,
    registry: Optional[ColourSpaceRegistry] = None,
    workers: Optional[int] = None,
    debug: bool = False,
) -> QuantizeResult:
    """
    Quantize a packed ARGB grid to at most config.bucket_count colours.

    Args:
      argb    : uint32 [H,W] packed 0xAARRGGBB
      config  : QuantizeConfig; re-validated here
      registry: colour-space registry; build_registry() when omitted
      workers : threads for extraction / reconstruction; one per CPU by default
      debug   : print stage timings and palette details
    Returns:
      QuantizeResult with a new [H,W] grid and the palette.
    Raises:
      TypeError for a grid that is not 2-D, EmptyImageError for an empty grid,
      InvalidConfigError for a config that fails validate(),
      StageError when a worker in a parallel stage fails.
    """
    grid = assert_argb_grid(argb)
    reg = registry if registry is not None else build_registry()
    space = config.validate(reg)
    if grid.size == 0:
        raise EmptyImageError(f"empty pixel grid {grid.shape[1]}x{grid.shape[0]}")

    n_workers = resolve_workers(workers)
    height, width = int(grid.shape[0]), int(grid.shape[1])
    if debug:
        print_config_line(
            "median-cut",
            [
                ("Size", f"{width}x{height}"),
                ("Space", space.name),
                ("Priority", config.describe(reg)),
                ("Buckets", config.bucket_count),
                ("Workers", n_workers),
                ("CPU cores", os.cpu_count() or 1),
            ],
            debug=True,
        )

    with measure(f"Converting to colour space {space.name}", debug):
        pixels = extract_unique_pixels(grid, space, workers=n_workers)

    if config.bucket_count > len(pixels) and debug:
        warn(
            f"{config.bucket_count} buckets requested but only {len(pixels)} "
            f"unique colours; palette will have {len(pixels)} entries"
        )

    with measure("Sorting colours", debug):
        sort_pixels(pixels, space, config.channel_priority)

    with measure(f"Applying median cut for {config.bucket_count} buckets", debug):
        palette = quantize(pixels, config.bucket_count, space.circular_hue)

    with measure(f"Converting back from colour space {space.name}", debug):
        palette_rgba = palette_to_rgba(palette, space)

    with measure("Building KD-tree", debug):
        tree = KdTreeRGB(palette_rgba)

    with measure("Applying palette to image", debug):
        image = reconstruct_image(grid, tree, workers=n_workers)

    if debug:
        debug_log(
            f"palette: {len(palette)} colours from {len(pixels)} uniques, "
            f"tree depth {tree.depth()}"
        )
        for hex_code, weight in palette_report(palette_rgba, palette):
            debug_log(f"  {hex_code}: pixels={weight:,}")

    return QuantizeResult(
        image=image,
        palette=palette,
        palette_rgba=palette_rgba,
        unique_colours=len(pixels),
        config=config,
    )


__all__ = ["QuantizeResult", "quantize_image"]
