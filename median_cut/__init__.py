# median_cut/__init__.py
"""
median_cut package.

Purpose:
  Reduce an image to a small palette with a median cut over the distinct
  colours in a chosen colour space, then remap every pixel to its nearest
  palette colour.

Public API:
  quantize_image : end-to-end run over a packed ARGB grid.
  QuantizeConfig : validated colour space / channel priority / bucket count.
  spaces         : colour-space converters and the registry builder.
  extract        : threaded unique-colour extraction.
  sorter         : one-shot channel-priority sort.
  bucket         : linear and circular (hue) buckets.
  quantize       : the bucket-splitting engine.
  kdtree         : nearest-colour KD-tree over RGB.
  reconstruct    : threaded palette remap.
  palette_export : packed palette and swatch image for display.
  image_io       : PIL image <-> packed ARGB adapters.

Quick start:
  from median_cut import QuantizeConfig, quantize_image
  from median_cut.image_io import image_to_argb, argb_to_image

  cfg = QuantizeConfig.create("HSL", ["hue", "none", "none"], 16)
  result = quantize_image(image_to_argb(im), cfg)
  out = argb_to_image(result.image)
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import core_types
from . import errors
from . import spaces
from . import extract
from . import sorter
from . import bucket
from . import quantize
from . import kdtree
from . import reconstruct
from . import palette_export
from . import image_io
from . import utils

from .config import QuantizeConfig  # noqa: E402,F401
from .core_types import Pixel  # noqa: E402,F401
from .errors import (  # noqa: E402,F401
    EmptyImageError,
    InvalidConfigError,
    MedianCutError,
    StageError,
    UnknownColourSpaceError,
)
from .kdtree import KdTreeRGB  # noqa: E402,F401
from .pipeline import QuantizeResult, quantize_image  # noqa: E402,F401
from .spaces import ColourSpace, build_registry  # noqa: E402,F401

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "spaces",
    "extract",
    "sorter",
    "bucket",
    "quantize",
    "kdtree",
    "reconstruct",
    "palette_export",
    "image_io",
    "utils",
    "QuantizeConfig",
    "Pixel",
    "EmptyImageError",
    "InvalidConfigError",
    "MedianCutError",
    "StageError",
    "UnknownColourSpaceError",
    "KdTreeRGB",
    "QuantizeResult",
    "quantize_image",
    "ColourSpace",
    "build_registry",
]
