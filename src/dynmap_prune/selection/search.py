# selection/search.py
from __future__ import annotations
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from dynmap_prune.model.models import SelectionArea


class SelectionSet:
    """
    Ordered, immutable collection of SelectionArea.

    Bounds are kept in an (N, 4) int64 array [start_x, start_z, end_x, end_z]
    so a lookup is one vectorized comparison; the first hit in input order wins.
    """

    def __init__(self, areas: Iterable[SelectionArea] = ()):
        self._areas: Tuple[SelectionArea, ...] = tuple(areas)
        if self._areas:
            self._bounds = np.array(
                [[a.start_x, a.start_z, a.end_x, a.end_z] for a in self._areas],
                dtype=np.int64,
            )
        else:
            self._bounds = np.empty((0, 4), dtype=np.int64)
        self._bounds.setflags(write=False)

    def __len__(self) -> int:
        return len(self._areas)

    def __iter__(self) -> Iterator[SelectionArea]:
        return iter(self._areas)

    def find_match(self, x: int, z: int) -> Optional[int]:
        """Index of the first area containing (x, z), or None."""
        if not self._areas:
            return None
        b = self._bounds
        hit = (b[:, 0] <= x) & (x < b[:, 2]) & (b[:, 1] <= z) & (z < b[:, 3])
        # argmax stops at the first True
        idx = int(np.argmax(hit))
        return idx if hit[idx] else None

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """Overall extent (min_x, min_z, max_x, max_z), or None when empty."""
        if not self._areas:
            return None
        b = self._bounds
        return (int(b[:, 0].min()), int(b[:, 1].min()),
                int(b[:, 2].max()), int(b[:, 3].max()))

    def count_by_kind(self) -> dict:
        counts: dict = {}
        for a in self._areas:
            counts[a.kind] = counts.get(a.kind, 0) + 1
        return counts

    def __repr__(self) -> str:
        return f"SelectionSet({len(self._areas)} areas)"
