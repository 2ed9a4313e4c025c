from __future__ import annotations

import logging
import math
from typing import Any, List, Tuple

from kdtreex import config as kx_config
from kdtreex.core.bounded import BoundedPriorityQueue
from kdtreex.core.points import as_query
from kdtreex.core.tree import KDTreeData
from kdtreex.diagnostics import log_operation
from kdtreex.logging import get_logger
from kdtreex.queries._traverse import walk

LOGGER = get_logger("queries.knn")


def knn(
    tree: KDTreeData,
    query: Any,
    *,
    k: int,
    return_distances: bool = False,
) -> Tuple[List[int], List[float]] | List[int]:
    """Collect the ``k`` stored points nearest to ``query``.

    Results are ordered by ascending ``(distance, index)``. Fewer than ``k``
    points come back when the tree is smaller than ``k``; an empty tree or a
    non-positive ``k`` gives an empty result.
    """

    runtime = kx_config.runtime_config()
    k = int(k)
    if tree.is_empty() or k <= 0:
        return ([], []) if return_distances else []
    coords = as_query(query, tree.dimension)

    queue: BoundedPriorityQueue[Tuple[float, int]] = BoundedPriorityQueue(k)

    def _visit(point_index: int, distance: float) -> None:
        queue.push((distance, point_index))

    def _bound() -> float:
        if not queue.is_full():
            return math.inf
        return queue.back()[0]

    with log_operation(LOGGER, "knn_query", level=logging.DEBUG) as op_log:
        visited = walk(
            tree.view,
            coords,
            tree.root,
            _visit,
            _bound,
            traversal=runtime.traversal,
            inclusive=True,
        )
        op_log.add_metadata(visited=visited, k=k, found=len(queue))

    indices = [index for _, index in queue]
    if return_distances:
        return indices, [distance for distance, _ in queue]
    return indices


__all__ = ["knn"]
