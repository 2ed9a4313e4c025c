"""kdtreex: static KD-tree for exact nearest-neighbour queries.

Quick Start
-----------
>>> import numpy as np
>>> from kdtreex import KDTree
>>>
>>> points = np.random.randn(10000, 3)
>>> tree = KDTree(points)
>>> idx, dist = tree.nn_search([0.0, 0.0, 0.0], return_distance=True)
>>> neighbours = tree.knn_search([0.0, 0.0, 0.0], k=10)
>>> within = tree.range_query([0.0, 0.0, 0.0], 0.5)

Classes
-------
KDTree : Stateful index with build / clear / validate and NN, k-NN, range queries.
KDTreeData : Immutable snapshot produced by :func:`build_tree`.
BruteForceIndex : Exhaustive reference used for cross-checking and benchmarks.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("kdtreex")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .api import KDTree
from .algo import build_tree, validate_tree
from .baseline import BruteForceIndex
from .core import (
    BoundedPriorityQueue,
    EmptyIndexError,
    KDTreeData,
    TreeStats,
)
from .queries import knn, nearest_neighbor, range_query

__all__ = [
    "__version__",
    "KDTree",
    "KDTreeData",
    "TreeStats",
    "BoundedPriorityQueue",
    "BruteForceIndex",
    "EmptyIndexError",
    "build_tree",
    "validate_tree",
    "knn",
    "nearest_neighbor",
    "range_query",
]
