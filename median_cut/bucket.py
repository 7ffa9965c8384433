# median_cut/bucket.py
from __future__ import annotations

"""
Buckets for the median cut.

A Bucket owns a read-only (n,3) block of channel rows and their (n,) weights,
cut from the globally sorted pixel arena. Linear buckets split by positional
bisection of that block. CircularBucket treats channel 0 as a hue on the ring
[0,1): it reorders a fresh copy of its rows so the largest hue gap becomes the
boundary before bisecting, and averages hue with the circular mean.

Variation is computed on first access and cached; buckets never change after
construction.
"""

import math
from functools import cached_property
from typing import Optional, Sequence, Tuple

import numpy as np

from .core_types import ChannelArray, Pixel, WeightArray

TWO_PI = 2.0 * math.pi


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def normalize_hue(hue: np.ndarray) -> np.ndarray:
    """Wrap hue values into [0,1)."""
    h = np.mod(np.asarray(hue, dtype=np.float64), 1.0)
    return np.where(h >= 1.0, h - 1.0, h)


def pixels_to_arena(pixels: Sequence[Pixel]) -> Tuple[ChannelArray, WeightArray]:
    """Copy a pixel list into read-only (n,3) values and (n,) weights, order kept."""
    values = np.array([p.values for p in pixels], dtype=np.float64).reshape(-1, 3)
    weights = np.array([p.count for p in pixels], dtype=np.int64)
    return _frozen(values), _frozen(weights)


class Bucket:
    """Contiguous run of the sorted pixel arena."""

    circular = False

    def __init__(self, values: ChannelArray, weights: WeightArray) -> None:
        if values.shape[0] != weights.shape[0]:
            raise ValueError("values and weights must have the same length")
        self.values = values
        self.weights = weights

    @classmethod
    def from_pixels(cls, pixels: Sequence[Pixel]) -> "Bucket":
        """Root bucket spanning the whole (already sorted) pixel list."""
        values, weights = pixels_to_arena(pixels)
        return cls(values, weights)

    @property
    def size(self) -> int:
        return int(self.values.shape[0])

    @property
    def total_weight(self) -> int:
        return int(self.weights.sum())

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, variation={self.variation:.6g})"

    @cached_property
    def variation(self) -> float:
        return self._calculate_variation()

    def split(self) -> Tuple["Bucket", Optional["Bucket"]]:
        """Bisect at size // 2 into [0, mid) and [mid, size) of the current order."""
        mid = self.size // 2
        cls = type(self)
        return (
            cls(self.values[:mid], self.weights[:mid]),
            cls(self.values[mid:], self.weights[mid:]),
        )

    def _weights_and_total(self) -> Tuple[np.ndarray, float]:
        w = self.weights.astype(np.float64)
        total = float(w.sum())
        return w, (total if total != 0.0 else 1.0)

    def average_pixel(self) -> Pixel:
        """Weighted mean of the three channels."""
        w, total = self._weights_and_total()
        mean = (self.values * w[:, None]).sum(axis=0) / total
        return Pixel.of(mean[0], mean[1], mean[2], count=max(1, self.total_weight))

    def _calculate_variation(self) -> float:
        """Weighted sum of squared distances from the weighted mean, over total weight."""
        w, total = self._weights_and_total()
        mean = (self.values * w[:, None]).sum(axis=0) / total
        dev = self.values - mean
        return float((w * (dev * dev).sum(axis=1)).sum() / total)


class CircularBucket(Bucket):
    """Bucket whose channel 0 is a periodic hue in [0,1)."""

    circular = True

    def split(self) -> Tuple["Bucket", Optional["Bucket"]]:
        """
        Ring-aware bisection.

        1) order rows by hue (stable),
        2) find the largest gap between neighbours, wraparound gap included,
        3) rotate so that gap sits between the last and first row,
        4) bisect at size // 2.
        Both halves are then contiguous arcs on the hue circle.
        """
        n = self.size
        if n <= 1:
            return self, None

        hue = normalize_hue(self.values[:, 0])
        order = np.argsort(hue, kind="stable")
        h = hue[order]

        gaps = np.empty(n, dtype=np.float64)
        gaps[:-1] = np.diff(h)
        gaps[-1] = (h[0] + 1.0) - h[-1]
        gaps = np.where(gaps < 0.0, gaps + 1.0, gaps)

        widest = int(np.argmax(gaps))  # first maximum wins
        if widest != n - 1:
            order = np.roll(order, -(widest + 1))

        values = _frozen(self.values[order])
        weights = _frozen(self.weights[order])
        mid = n // 2
        return (
            CircularBucket(values[:mid], weights[:mid]),
            CircularBucket(values[mid:], weights[mid:]),
        )

    def _hue_resultant(self) -> Tuple[np.ndarray, float, float, float]:
        """
        (weights, total, sum_cos, sum_sin) of the hue unit vectors.

        Falls back to weight 1 per row when every weight is zero.
        """
        w = self.weights.astype(np.float64)
        if not np.any(self.weights > 0):
            w = np.ones(self.size, dtype=np.float64)
        theta = normalize_hue(self.values[:, 0]) * TWO_PI
        sum_cos = float((w * np.cos(theta)).sum())
        sum_sin = float((w * np.sin(theta)).sum())
        return w, float(w.sum()), sum_cos, sum_sin

    @staticmethod
    def _mean_hue(sum_cos: float, sum_sin: float) -> float:
        angle = math.atan2(sum_sin, sum_cos)
        if angle < 0.0:
            angle += TWO_PI
        return float(normalize_hue(angle / TWO_PI))

    def average_pixel(self) -> Pixel:
        """Circular mean hue plus weighted means of channels 1 and 2."""
        if self.size == 0:
            return Pixel.of(0.0, 0.0, 0.0)
        w, total, sum_cos, sum_sin = self._hue_resultant()
        rest = (self.values[:, 1:] * w[:, None]).sum(axis=0) / total
        return Pixel.of(
            self._mean_hue(sum_cos, sum_sin),
            rest[0],
            rest[1],
            count=max(1, self.total_weight),
        )

    def _calculate_variation(self) -> float:
        """Circular variance 1 - R of the hue plus linear variances of channels 1 and 2."""
        if self.size == 0:
            return 0.0
        w, total, sum_cos, sum_sin = self._hue_resultant()
        resultant = math.hypot(sum_cos, sum_sin) / total
        var = 1.0 - resultant

        rest = self.values[:, 1:]
        mean = (rest * w[:, None]).sum(axis=0) / total
        dev = rest - mean
        var += float((w[:, None] * dev * dev).sum() / total)
        return float(var)


def root_bucket(pixels: Sequence[Pixel], circular: bool) -> Bucket:
    """Whole-list bucket, ring-aware when the space's first channel is a hue."""
    cls = CircularBucket if circular else Bucket
    return cls.from_pixels(pixels)


__all__ = [
    "Bucket",
    "CircularBucket",
    "normalize_hue",
    "pixels_to_arena",
    "root_bucket",
]
