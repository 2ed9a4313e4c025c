from __future__ import annotations

import logging
from typing import Any, List

from kdtreex import config as kx_config
from kdtreex.core.points import as_query
from kdtreex.core.tree import KDTreeData
from kdtreex.diagnostics import log_operation
from kdtreex.logging import get_logger
from kdtreex.queries._traverse import walk

LOGGER = get_logger("queries.range")


def range_query(tree: KDTreeData, query: Any, *, radius: float) -> List[int]:
    """Return every index whose distance to ``query`` is strictly below ``radius``.

    Indices appear in traversal order, not sorted by distance.
    """

    runtime = kx_config.runtime_config()
    if tree.is_empty():
        return []
    coords = as_query(query, tree.dimension)
    radius = float(radius)
    found: List[int] = []

    def _visit(point_index: int, distance: float) -> None:
        if distance < radius:
            found.append(point_index)

    with log_operation(LOGGER, "range_query", level=logging.DEBUG) as op_log:
        visited = walk(
            tree.view,
            coords,
            tree.root,
            _visit,
            lambda: radius,
            traversal=runtime.traversal,
        )
        op_log.add_metadata(visited=visited, radius=radius, found=len(found))
    return found


__all__ = ["range_query"]
