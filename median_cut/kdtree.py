# median_cut/kdtree.py
from __future__ import annotations

"""
KD-tree over packed RGB palette colours for nearest-colour lookup.

Built once per run from the final palette, read-only afterwards, so one tree
can be queried from many reconstruction threads at the same time.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from .core_types import ArgbArray, RGBTuple, as_argb_array, packed_to_rgb
from .errors import EmptyImageError


@dataclass
class KdNode:
    """Palette index stored at this node and the axis it splits on (0=R, 1=G, 2=B)."""

    index: int
    axis: int
    left: Optional["KdNode"] = None
    right: Optional["KdNode"] = None


class KdTreeRGB:
    """
    Balanced KD-tree over a non-empty palette of packed 0x??RRGGBB colours.

    Axis cycles R, G, B with depth; each node is the median of its index set
    along that axis.
    """

    def __init__(self, palette: Union[Sequence[int], np.ndarray]) -> None:
        packed = as_argb_array(palette)
        if packed.size == 0:
            raise EmptyImageError("cannot build a KD-tree from an empty palette")
        self.palette: ArgbArray = packed
        self._rgb: List[RGBTuple] = [packed_to_rgb(int(c)) for c in packed.tolist()]
        self.root = self._build(list(range(packed.size)), 0)

    def __len__(self) -> int:
        return len(self._rgb)

    def _build(self, indices: List[int], depth: int) -> Optional[KdNode]:
        if not indices:
            return None
        axis = depth % 3
        ordered = sorted(indices, key=lambda i: self._rgb[i][axis])
        mid = len(ordered) // 2
        node = KdNode(ordered[mid], axis)
        node.left = self._build(ordered[:mid], depth + 1)
        node.right = self._build(ordered[mid + 1 :], depth + 1)
        return node

    def depth(self) -> int:
        """Height of the tree (1 for a single colour)."""

        def _height(node: Optional[KdNode]) -> int:
            if node is None:
                return 0
            return 1 + max(_height(node.left), _height(node.right))

        return _height(self.root)

    def _dist2(self, r: int, g: int, b: int, idx: int) -> int:
        pr, pg, pb = self._rgb[idx]
        dr, dg, db = r - pr, g - pg, b - pb
        return dr * dr + dg * dg + db * db

    def nearest(self, r: int, g: int, b: int) -> int:
        """Palette index of the colour closest to (r, g, b) in squared RGB distance."""
        query = (int(r), int(g), int(b))
        root = self.root  # set for any non-empty palette
        best = [root.index, self._dist2(*query, root.index)]
        self._search(root, query, best)
        return best[0]

    def _search(self, node: Optional[KdNode], query: RGBTuple, best: List[int]) -> None:
        if node is None:
            return
        d = self._dist2(query[0], query[1], query[2], node.index)
        if d < best[1]:
            best[0], best[1] = node.index, d

        diff = query[node.axis] - self._rgb[node.index][node.axis]
        near, far = (node.left, node.right) if diff < 0 else (node.right, node.left)

        self._search(near, query, best)
        if diff * diff < best[1]:
            self._search(far, query, best)

    def nearest_packed(self, argb: int) -> int:
        """nearest() for a packed 0x??RRGGBB value; alpha is ignored."""
        return self.nearest(*packed_to_rgb(argb))

    def colour_at(self, index: int) -> int:
        """Packed palette colour stored at `index`."""
        return int(self.palette[index])


__all__ = ["KdNode", "KdTreeRGB"]
