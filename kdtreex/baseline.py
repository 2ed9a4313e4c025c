from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from kdtreex.core.metrics import euclidean_to_many
from kdtreex.core.points import as_point_array, as_query
from kdtreex.core.tree import EmptyIndexError


@dataclass(frozen=True, eq=False)
class BruteForceIndex:
    """Exhaustive reference with the same query surface as :class:`KDTree`."""

    points: np.ndarray

    @classmethod
    def from_points(cls, points: Any, *, dimension: int | None = None) -> "BruteForceIndex":
        return cls(points=as_point_array(points, dtype=np.float64, dimension=dimension))

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def _distances(self, query: Any) -> np.ndarray:
        coords = as_query(query, int(self.points.shape[1]))
        return euclidean_to_many(coords, self.points)

    def nn_search(self, query: Any, *, return_distance: bool = False) -> Tuple[int, float] | int:
        if len(self) == 0:
            raise EmptyIndexError("Cannot query an empty tree.")
        dists = self._distances(query)
        idx = int(np.argmin(dists))
        if return_distance:
            return idx, float(dists[idx])
        return idx

    def knn_search(
        self, query: Any, k: int, *, return_distances: bool = False
    ) -> Tuple[List[int], List[float]] | List[int]:
        if len(self) == 0 or k <= 0:
            return ([], []) if return_distances else []
        dists = self._distances(query)
        order = np.argsort(dists, kind="stable")[:k]
        indices = [int(i) for i in order]
        if return_distances:
            return indices, [float(dists[i]) for i in order]
        return indices

    def range_query(self, query: Any, radius: float) -> List[int]:
        if len(self) == 0:
            return []
        dists = self._distances(query)
        return [int(i) for i in np.flatnonzero(dists < float(radius))]


__all__ = ["BruteForceIndex"]
