"""Shared branch-and-bound walk used by the NN, k-NN and range queries.

Each query supplies a ``visit`` callback that consumes ``(point_index,
distance)`` for every node reached, and a ``bound`` callback returning the
current pruning radius. The near child of a node is always explored first;
the far child is explored afterwards only when the query's distance to the
splitting hyperplane is strictly below ``bound()``, or equal to it when the
walk is ``inclusive``. NN and k-NN walk inclusively; range queries
walk strictly.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from kdtreex.core.metrics import euclidean
from kdtreex.core.tree import NO_CHILD, TreeView

Visit = Callable[[int, float], None]
Bound = Callable[[], float]


def _within(plane_distance: float, limit: float, inclusive: bool) -> bool:
    if inclusive:
        return plane_distance <= limit
    return plane_distance < limit


def walk_recursive(
    view: TreeView,
    query: Sequence[float],
    root: int,
    visit: Visit,
    bound: Bound,
    *,
    inclusive: bool = False,
) -> int:
    points = view.points
    node_points = view.node_points
    node_axes = view.node_axes
    left = view.left
    right = view.right
    visited = 0

    def _walk(node: int) -> None:
        nonlocal visited
        if node == NO_CHILD:
            return
        visited += 1
        point_index = node_points[node]
        point = points[point_index]
        visit(point_index, euclidean(query, point))

        axis = node_axes[node]
        diff = query[axis] - point[axis]
        if diff < 0:
            near, far = left[node], right[node]
        else:
            near, far = right[node], left[node]
        _walk(near)
        if _within(abs(diff), bound(), inclusive):
            _walk(far)

    _walk(root)
    return visited


def walk_stack(
    view: TreeView,
    query: Sequence[float],
    root: int,
    visit: Visit,
    bound: Bound,
    *,
    inclusive: bool = False,
) -> int:
    """Explicit-stack twin of :func:`walk_recursive` with identical visit order.

    A far child is pushed beneath its sibling together with its hyperplane
    distance, so the pruning test runs only once the near subtree is drained.
    """

    points = view.points
    node_points = view.node_points
    node_axes = view.node_axes
    left = view.left
    right = view.right
    visited = 0

    # (node, plane_distance); plane_distance is None for unconditional visits.
    stack: List[Tuple[int, float | None]] = [(root, None)]
    while stack:
        node, plane_distance = stack.pop()
        if node == NO_CHILD:
            continue
        if plane_distance is not None and not _within(plane_distance, bound(), inclusive):
            continue
        visited += 1
        point_index = node_points[node]
        point = points[point_index]
        visit(point_index, euclidean(query, point))

        axis = node_axes[node]
        diff = query[axis] - point[axis]
        if diff < 0:
            near, far = left[node], right[node]
        else:
            near, far = right[node], left[node]
        if far != NO_CHILD:
            stack.append((far, abs(diff)))
        stack.append((near, None))
    return visited


def walk(
    view: TreeView,
    query: Sequence[float],
    root: int,
    visit: Visit,
    bound: Bound,
    *,
    traversal: str = "recursive",
    inclusive: bool = False,
) -> int:
    """Run the selected traversal and return the number of nodes visited."""

    if traversal == "stack":
        return walk_stack(view, query, root, visit, bound, inclusive=inclusive)
    return walk_recursive(view, query, root, visit, bound, inclusive=inclusive)


__all__ = ["walk", "walk_recursive", "walk_stack"]
