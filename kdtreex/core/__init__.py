"""Core data structures for the KD-tree index."""

from .bounded import BoundedPriorityQueue
from .metrics import euclidean, euclidean_to_many
from .points import PointLike, as_point_array, as_query
from .tree import NO_CHILD, EmptyIndexError, KDTreeData, TreeStats, TreeView

__all__ = [
    "BoundedPriorityQueue",
    "EmptyIndexError",
    "KDTreeData",
    "NO_CHILD",
    "PointLike",
    "TreeStats",
    "TreeView",
    "as_point_array",
    "as_query",
    "euclidean",
    "euclidean_to_many",
]
