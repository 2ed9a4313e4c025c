from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, List, Tuple

import numpy as np

NO_CHILD = -1


class EmptyIndexError(ValueError):
    """Raised when a query needs at least one indexed point."""


@dataclass(frozen=True)
class TreeStats:
    num_points: int = 0
    num_nodes: int = 0
    depth: int = 0
    leaves: int = 0


@dataclass(frozen=True)
class TreeView:
    """Python-native copy of the arena used by the traversal loops."""

    points: List[Tuple[float, ...]]
    node_points: List[int]
    node_axes: List[int]
    left: List[int]
    right: List[int]


@dataclass(frozen=True, eq=False)
class KDTreeData:
    """Immutable KD-tree snapshot: point storage plus a node arena.

    Node ``i`` splits ``points[node_points[i]]`` along ``node_axes[i]``; its
    children are ``left[i]`` and ``right[i]`` (``NO_CHILD`` when absent). The
    root, when present, is node ``0``.
    """

    points: np.ndarray
    node_points: np.ndarray
    node_axes: np.ndarray
    left: np.ndarray
    right: np.ndarray
    stats: TreeStats = field(default_factory=TreeStats)

    @classmethod
    def empty(cls, *, dimension: int = 0, dtype: Any = np.float64) -> "KDTreeData":
        points = np.zeros((0, dimension), dtype=dtype)
        points.setflags(write=False)
        empty_int = np.zeros(0, dtype=np.int64)
        return cls(
            points=points,
            node_points=empty_int,
            node_axes=empty_int,
            left=empty_int,
            right=empty_int,
            stats=TreeStats(),
        )

    @property
    def dimension(self) -> int:
        return int(self.points.shape[1])

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])

    @property
    def num_nodes(self) -> int:
        return int(self.node_points.shape[0])

    @property
    def root(self) -> int:
        return 0 if self.num_nodes else NO_CHILD

    def is_empty(self) -> bool:
        return self.num_nodes == 0

    @cached_property
    def view(self) -> TreeView:
        return TreeView(
            points=[tuple(row) for row in self.points.astype(np.float64).tolist()],
            node_points=self.node_points.tolist(),
            node_axes=self.node_axes.tolist(),
            left=self.left.tolist(),
            right=self.right.tolist(),
        )


__all__ = ["EmptyIndexError", "KDTreeData", "NO_CHILD", "TreeStats", "TreeView"]
