from __future__ import annotations

from typing import Any, List, Tuple

import numpy as np

from kdtreex.algo.build import build_tree
from kdtreex.algo.validate import validate_tree
from kdtreex.core.tree import KDTreeData
from kdtreex.queries.knn import knn as knn_query
from kdtreex.queries.nearest import nearest_neighbor
from kdtreex.queries.range import range_query as range_query_impl


class KDTree:
    """Static KD-tree index over a fixed-dimension point set.

    ``build`` replaces the whole index in one reference swap, so readers see
    either the previous snapshot or the new one. Queries never mutate the
    snapshot and may run concurrently with each other; serialise ``build`` and
    ``clear`` against them externally.
    """

    def __init__(self, points: Any | None = None, *, dimension: int | None = None) -> None:
        self._tree: KDTreeData = KDTreeData.empty(dimension=dimension or 0)
        if points is not None:
            self.build(points, dimension=dimension)

    @property
    def data(self) -> KDTreeData:
        return self._tree

    @property
    def dimension(self) -> int:
        return self._tree.dimension

    @property
    def points(self) -> np.ndarray:
        """Read-only view of the indexed points; row ``i`` is identifier ``i``."""

        return self._tree.points

    def __len__(self) -> int:
        return self._tree.num_points

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def build(self, points: Any, *, dimension: int | None = None) -> "KDTree":
        self._tree = build_tree(points, dimension=dimension)
        return self

    def clear(self) -> None:
        self._tree = KDTreeData.empty(dimension=self._tree.dimension, dtype=self._tree.points.dtype)

    def validate(self) -> bool:
        return validate_tree(self._tree)

    def nn_search(self, query: Any, *, return_distance: bool = False) -> Tuple[int, float] | int:
        return nearest_neighbor(self._tree, query, return_distance=return_distance)

    def knn_search(
        self, query: Any, k: int, *, return_distances: bool = False
    ) -> Tuple[List[int], List[float]] | List[int]:
        return knn_query(self._tree, query, k=k, return_distances=return_distances)

    def range_query(self, query: Any, radius: float) -> List[int]:
        return range_query_impl(self._tree, query, radius=radius)

    def __repr__(self) -> str:
        stats = self._tree.stats
        return (
            f"KDTree(points={self._tree.num_points}, dimension={self.dimension}, "
            f"depth={stats.depth})"
        )


__all__ = ["KDTree"]
