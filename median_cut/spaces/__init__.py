# median_cut/spaces/__init__.py
"""
Colour-space converters.

Each space is a ColourSpace record: two vectorised functions between packed
ARGB and (N,3) channel rows, plus the facts the quantizer needs (channel
names, whether channel 0 is a circular hue, whether sorting uses intensity).

The registry is a plain dict built by build_registry() and handed to the
callers that need it; there is no module-level registration.

  registry = build_registry()
  space = lookup_space(registry, "hsl")
  rows = space.to_normalized(argb)
  argb = space.to_packed_rgb(rows)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from ..core_types import ToNormalized, ToPackedRGB
from ..errors import UnknownColourSpaceError
from .hsb import hsb_to_normalized, hsb_to_packed
from .hsl import hsl_to_normalized, hsl_to_packed
from .oklab import gamut_map_oklab, oklab_to_normalized, oklab_to_packed
from .rgb import rgb_to_normalized, rgb_to_packed

SPACE_NAMES: Tuple[str, ...] = ("RGB", "HSL", "HSB", "OKLAB", "GRAYSCALE")


@dataclass(frozen=True)
class ColourSpace:
    """One colour space: converters plus how the median cut should treat it."""

    name: str
    channels: Tuple[str, str, str]
    to_normalized: ToNormalized
    to_packed_rgb: ToPackedRGB
    circular_hue: bool = False
    sort_by_intensity: bool = False

    def channel_index(self, channel: str) -> Optional[int]:
        """Index of a channel by name (case-insensitive), None if unknown."""
        key = channel.strip().lower()
        for i, name in enumerate(self.channels):
            if name == key:
                return i
        return None


ColourSpaceRegistry = Mapping[str, ColourSpace]


def build_registry() -> Dict[str, ColourSpace]:
    """Build the name -> ColourSpace mapping for all built-in spaces."""
    rgb = ColourSpace(
        name="RGB",
        channels=("red", "green", "blue"),
        to_normalized=rgb_to_normalized,
        to_packed_rgb=rgb_to_packed,
    )
    return {
        "RGB": rgb,
        "HSL": ColourSpace(
            name="HSL",
            channels=("hue", "saturation", "lightness"),
            to_normalized=hsl_to_normalized,
            to_packed_rgb=hsl_to_packed,
            circular_hue=True,
        ),
        "HSB": ColourSpace(
            name="HSB",
            channels=("hue", "saturation", "brightness"),
            to_normalized=hsb_to_normalized,
            to_packed_rgb=hsb_to_packed,
            circular_hue=True,
        ),
        "OKLAB": ColourSpace(
            name="OKLAB",
            channels=("l", "a", "b"),
            to_normalized=oklab_to_normalized,
            to_packed_rgb=oklab_to_packed,
        ),
        # grayscale reuses the RGB converters
        "GRAYSCALE": ColourSpace(
            name="GRAYSCALE",
            channels=rgb.channels,
            to_normalized=rgb.to_normalized,
            to_packed_rgb=rgb.to_packed_rgb,
            sort_by_intensity=True,
        ),
    }


def lookup_space(registry: ColourSpaceRegistry, name: str) -> ColourSpace:
    """Case-insensitive lookup; raises UnknownColourSpaceError when missing."""
    key = str(name).strip().upper()
    space = registry.get(key)
    if space is None:
        raise UnknownColourSpaceError(str(name))
    return space


__all__ = [
    "SPACE_NAMES",
    "ColourSpace",
    "ColourSpaceRegistry",
    "build_registry",
    "lookup_space",
    "gamut_map_oklab",
]
