from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

import numpy as np

from kdtreex import config as kx_config
from kdtreex.algo.validate import validate_tree
from kdtreex.core.points import as_point_array
from kdtreex.core.tree import NO_CHILD, KDTreeData, TreeStats
from kdtreex.diagnostics import log_operation
from kdtreex.logging import get_logger

LOGGER = get_logger("algo.build")


def _frozen_int_array(values: List[int]) -> np.ndarray:
    arr = np.asarray(values, dtype=np.int64)
    arr.setflags(write=False)
    return arr


@dataclass
class _ArenaBuilder:
    """Accumulates nodes in pre-order while the median recursion runs."""

    points: np.ndarray
    order: np.ndarray
    node_points: List[int] = field(default_factory=list)
    node_axes: List[int] = field(default_factory=list)
    left: List[int] = field(default_factory=list)
    right: List[int] = field(default_factory=list)
    depth: int = 0
    leaves: int = 0

    def build(self, lo: int, hi: int, depth: int) -> int:
        count = hi - lo
        if count <= 0:
            return NO_CHILD

        dimension = self.points.shape[1]
        axis = depth % dimension
        mid = (count - 1) // 2

        # Median selection on the sub-range; argpartition is introselect, not a sort.
        segment = self.order[lo:hi]
        if count > 1:
            coords = self.points[segment, axis]
            segment = segment[np.argpartition(coords, mid)]
            self.order[lo:hi] = segment

        node = len(self.node_points)
        self.node_points.append(int(segment[mid]))
        self.node_axes.append(axis)
        self.left.append(NO_CHILD)
        self.right.append(NO_CHILD)
        self.depth = max(self.depth, depth + 1)

        left = self.build(lo, lo + mid, depth + 1)
        right = self.build(lo + mid + 1, hi, depth + 1)
        self.left[node] = left
        self.right[node] = right
        if left == NO_CHILD and right == NO_CHILD:
            self.leaves += 1
        return node

    def finish(self) -> KDTreeData:
        node_points = _frozen_int_array(self.node_points)
        node_axes = _frozen_int_array(self.node_axes)
        left = _frozen_int_array(self.left)
        right = _frozen_int_array(self.right)
        return KDTreeData(
            points=self.points,
            node_points=node_points,
            node_axes=node_axes,
            left=left,
            right=right,
            stats=TreeStats(
                num_points=int(self.points.shape[0]),
                num_nodes=len(self.node_points),
                depth=self.depth,
                leaves=self.leaves,
            ),
        )


def build_tree(points: Any, *, dimension: int | None = None) -> KDTreeData:
    """Build a balanced KD-tree over ``points``.

    Parameters
    ----------
    points:
        Array-like of shape ``(n, D)``. The data is copied; row ``i`` is the
        identifier returned by every query for that point.
    dimension:
        Required only to give an empty point set a dimensionality.

    Returns
    -------
    KDTreeData
        Immutable snapshot. Splitting picks the ``(n - 1) // 2`` order
        statistic along axis ``depth % D`` at every level, so the tree depth is
        ``ceil(log2(n + 1))`` regardless of the input order or duplicates.
    """

    runtime = kx_config.runtime_config()
    with log_operation(LOGGER, "build") as op_log:
        stored = as_point_array(points, dtype=runtime.dtype, dimension=dimension)
        if stored.shape[0] == 0:
            tree = KDTreeData.empty(dimension=stored.shape[1], dtype=stored.dtype)
        else:
            builder = _ArenaBuilder(
                points=stored,
                order=np.arange(stored.shape[0], dtype=np.int64),
            )
            builder.build(0, stored.shape[0], 0)
            tree = builder.finish()
        op_log.add_metadata(
            points=tree.num_points,
            dimension=tree.dimension,
            nodes=tree.num_nodes,
            depth=tree.stats.depth,
        )

    if runtime.validate_on_build:
        if validate_tree(tree):
            LOGGER.debug("post-build validation passed for %d nodes", tree.num_nodes)
        else:
            LOGGER.warning("post-build validation failed for %d nodes", tree.num_nodes)
    return tree


__all__ = ["build_tree"]
