# median_cut/sorter.py
from __future__ import annotations

"""
One-shot ordering of the unique pixel list.

The order produced here is the only one the median cut ever uses: buckets
are positional ranges of it and are never re-sorted by a locally dominant
axis (circular hue buckets excepted, see bucket.py).
"""

from typing import List, Optional, Sequence

from .core_types import ChannelPriority, Pixel
from .spaces import ColourSpace


def active_channels(priority: Sequence[Optional[int]]) -> List[int]:
    """Drop the 'none' entries from a resolved priority list, keeping order."""
    return [int(ch) for ch in priority if ch is not None]


def sort_pixels(
    pixels: List[Pixel], space: ColourSpace, priority: ChannelPriority
) -> List[Pixel]:
    """
    Stable in-place sort of `pixels`; returns the same list.

    GRAYSCALE sorts by r+g+b and ignores `priority`. Otherwise the pixels are
    ordered lexicographically over the active channels in priority order. No
    active channels leaves the list untouched.
    """
    if not pixels:
        return pixels

    if space.sort_by_intensity:
        pixels.sort(key=lambda p: p.values[0] + p.values[1] + p.values[2])
        return pixels

    channels = active_channels(priority)
    if not channels:
        return pixels

    pixels.sort(key=lambda p: tuple(p.values[ch] for ch in channels))
    return pixels


__all__ = ["active_channels", "sort_pixels"]
