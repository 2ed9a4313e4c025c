#!/usr/bin/env python
"""Quick-start guide for kdtreex library usage.

Run with: python -m kdtreex

This module intentionally avoids importing kdtreex internals to provide
a fast, clean startup for displaying help text.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                  KDTREEX
          Static KD-tree for exact nearest / k-nearest / radius queries
================================================================================

INSTALLATION
------------
    pip install kdtreex

BASIC USAGE
-----------
    import numpy as np
    from kdtreex import KDTree

    # Build tree from an (n, D) array; row i is identifier i
    points = np.random.randn(10000, 3)
    tree = KDTree(points)

    # Nearest neighbour (index, distance)
    idx, dist = tree.nn_search([0.0, 0.0, 0.0], return_distance=True)

    # k nearest neighbours, ascending by distance
    neighbours = tree.knn_search([0.0, 0.0, 0.0], k=10)

    # Every point strictly inside a radius (traversal order)
    within = tree.range_query([0.0, 0.0, 0.0], 0.5)

    # Self-check of the split invariant
    assert tree.validate()

EMPTY INDEX
-----------
    KDTree().knn_search(q, k)    -> []
    KDTree().range_query(q, r)   -> []
    KDTree().nn_search(q)        -> raises kdtreex.EmptyIndexError

CONFIGURATION (environment)
---------------------------
    KDTREEX_PRECISION=float32|float64      stored point dtype (default float64)
    KDTREEX_TRAVERSAL=recursive|stack      search traversal (default recursive)
    KDTREEX_ENABLE_DIAGNOSTICS=0|1         cpu/rss fields in operation logs
    KDTREEX_LOG_LEVEL=DEBUG|INFO|...       kdtreex logger level
    KDTREEX_VALIDATE_ON_BUILD=0|1          validate after every build

BENCHMARKING CLI
----------------
    python -m cli.queries --dimension 3 --tree-points 8192 --k 10 --baseline brute

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
