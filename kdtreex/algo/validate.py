from __future__ import annotations

from kdtreex.core.tree import NO_CHILD, KDTreeData


def validate_tree(tree: KDTreeData) -> bool:
    """Check the split invariant between every node and its immediate children.

    A left child must not exceed its parent along the parent's axis and a
    right child must not fall below it. Returns ``False`` at the first
    violation; an empty tree is valid.
    """

    view = tree.view
    points = view.points
    for node, point_index in enumerate(view.node_points):
        axis = view.node_axes[node]
        value = points[point_index][axis]
        left = view.left[node]
        if left != NO_CHILD and points[view.node_points[left]][axis] > value:
            return False
        right = view.right[node]
        if right != NO_CHILD and points[view.node_points[right]][axis] < value:
            return False
    return True


__all__ = ["validate_tree"]
