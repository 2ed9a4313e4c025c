import numpy as np
import pytest
from numpy.random import default_rng

from kdtreex import KDTreeData, build_tree, validate_tree
from kdtreex.core.tree import NO_CHILD
from tests.utils.datasets import gaussian_points, lattice_points


def _as_int(values):
    return np.asarray(values, dtype=np.int64)


def _manual_tree(points, node_points, node_axes, left, right) -> KDTreeData:
    return KDTreeData(
        points=np.asarray(points, dtype=np.float64),
        node_points=_as_int(node_points),
        node_axes=_as_int(node_axes),
        left=_as_int(left),
        right=_as_int(right),
    )


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("dimension", [1, 2, 3, 6])
def test_built_trees_validate(seed: int, dimension: int):
    rng = default_rng(seed)
    count = int(rng.integers(1, 300))
    assert validate_tree(build_tree(gaussian_points(rng, count, dimension)))
    assert validate_tree(build_tree(lattice_points(rng, count, dimension)))


def test_hand_built_valid_tree():
    tree = _manual_tree(
        [[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]],
        node_points=[1, 0, 2],
        node_axes=[0, 1, 1],
        left=[1, NO_CHILD, NO_CHILD],
        right=[2, NO_CHILD, NO_CHILD],
    )

    assert validate_tree(tree)


def test_left_child_above_parent_fails():
    tree = _manual_tree(
        [[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]],
        node_points=[1, 2, 0],
        node_axes=[0, 1, 1],
        left=[1, NO_CHILD, NO_CHILD],
        right=[2, NO_CHILD, NO_CHILD],
    )

    assert validate_tree(tree) is False


def test_lone_right_child_below_parent_fails():
    tree = _manual_tree(
        [[0.0, 5.0], [1.0, 1.0]],
        node_points=[0, 1],
        node_axes=[1, 0],
        left=[NO_CHILD, NO_CHILD],
        right=[1, NO_CHILD],
    )

    assert validate_tree(tree) is False


def test_violation_deep_in_tree_is_found():
    points = [[float(i), 0.0] for i in range(5)]
    tree = _manual_tree(
        points,
        node_points=[2, 1, 0, 3, 4],
        node_axes=[0, 1, 0, 1, 0],
        left=[1, 2, NO_CHILD, NO_CHILD, NO_CHILD],
        right=[3, NO_CHILD, NO_CHILD, 4, NO_CHILD],
    )
    assert validate_tree(tree)

    broken = _manual_tree(
        [[0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [3.0, 1.0], [4.0, 0.0]],
        node_points=[2, 1, 0, 3, 4],
        node_axes=[0, 1, 0, 1, 0],
        left=[1, 2, NO_CHILD, NO_CHILD, NO_CHILD],
        right=[3, NO_CHILD, NO_CHILD, 4, NO_CHILD],
    )
    assert validate_tree(broken) is False


def test_empty_tree_is_valid():
    assert validate_tree(KDTreeData.empty(dimension=2))
