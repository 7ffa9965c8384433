# median_cut/quantize.py
from __future__ import annotations

"""
Median cut engine.

Keeps a max-heap of buckets keyed by variation and keeps splitting the
worst one until the requested palette size is reached or nothing can be
split. Each surviving bucket yields one averaged Pixel.
"""

import heapq
import itertools
from typing import List, Sequence, Tuple

from .bucket import Bucket, root_bucket
from .core_types import Pixel
from .errors import EmptyImageError, InvalidConfigError

HeapEntry = Tuple[float, int, Bucket]


class BucketQueue:
    """Max-priority queue of buckets by variation; ties go to the older bucket."""

    def __init__(self) -> None:
        self._heap: List[HeapEntry] = []
        self._seq = itertools.count()

    def push(self, bucket: Bucket) -> None:
        heapq.heappush(self._heap, (-bucket.variation, next(self._seq), bucket))

    def pop(self) -> Bucket:
        return heapq.heappop(self._heap)[2]

    def buckets(self) -> List[Bucket]:
        return [entry[2] for entry in self._heap]

    def __len__(self) -> int:
        return len(self._heap)


def split_buckets(pixels: Sequence[Pixel], bucket_count: int, circular: bool) -> List[Bucket]:
    """
    Run the splitting loop and return the surviving buckets.

    Stops early, with fewer than bucket_count buckets, once the bucket with
    the highest variation holds a single colour.
    """
    if not pixels:
        raise EmptyImageError("cannot quantize an empty pixel list")
    if isinstance(bucket_count, bool) or int(bucket_count) <= 0:
        raise InvalidConfigError(f"bucket count must be > 0, got {bucket_count!r}")

    queue = BucketQueue()
    queue.push(root_bucket(pixels, circular))

    while len(queue) < bucket_count:
        worst = queue.pop()
        if worst.size <= 1:
            queue.push(worst)
            break
        first, second = worst.split()
        for part in (first, second):
            if part is not None and part.size > 0:
                queue.push(part)

    return queue.buckets()


def quantize(pixels: Sequence[Pixel], bucket_count: int, circular: bool = False) -> List[Pixel]:
    """
    Reduce sorted unique pixels to at most bucket_count averaged Pixels.

    Args:
      pixels      : unique pixels, already ordered by sort_pixels()
      bucket_count: requested palette size (> 0)
      circular    : treat channel 0 as a hue on the ring (HSL / HSB)
    Returns:
      palette Pixels in arbitrary order; each count is its bucket's weight.
    """
    return [bucket.average_pixel() for bucket in split_buckets(pixels, bucket_count, circular)]


__all__ = ["BucketQueue", "split_buckets", "quantize"]
