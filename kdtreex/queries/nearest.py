from __future__ import annotations

import logging
import math
from typing import Any, Tuple

from kdtreex import config as kx_config
from kdtreex.core.points import as_query
from kdtreex.core.tree import EmptyIndexError, KDTreeData
from kdtreex.diagnostics import log_operation
from kdtreex.logging import get_logger
from kdtreex.queries._traverse import walk

LOGGER = get_logger("queries.nearest")


def nearest_neighbor(
    tree: KDTreeData,
    query: Any,
    *,
    return_distance: bool = False,
) -> Tuple[int, float] | int:
    """Return the index of the stored point closest to ``query``.

    Equidistant points resolve to the lowest index. Raises
    :class:`EmptyIndexError` when the tree holds no points. With
    ``return_distance=True`` the result is an ``(index, distance)`` pair.
    """

    runtime = kx_config.runtime_config()
    if tree.is_empty():
        raise EmptyIndexError("Cannot query an empty tree.")
    coords = as_query(query, tree.dimension)

    best_index = -1
    best_distance = math.inf

    def _visit(point_index: int, distance: float) -> None:
        nonlocal best_index, best_distance
        if distance < best_distance or (distance == best_distance and point_index < best_index):
            best_distance = distance
            best_index = point_index

    with log_operation(LOGGER, "nn_query", level=logging.DEBUG) as op_log:
        visited = walk(
            tree.view,
            coords,
            tree.root,
            _visit,
            lambda: best_distance,
            traversal=runtime.traversal,
            inclusive=True,
        )
        op_log.add_metadata(visited=visited, distance=best_distance)

    if return_distance:
        return best_index, best_distance
    return best_index


__all__ = ["nearest_neighbor"]
