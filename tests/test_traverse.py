import math

import pytest
from numpy.random import default_rng

from kdtreex import build_tree, knn, nearest_neighbor, range_query
from kdtreex import config as kx_config
from kdtreex.queries._traverse import walk, walk_recursive, walk_stack
from tests.utils.datasets import gaussian_dataset, lattice_points


@pytest.fixture(autouse=True)
def reset_runtime(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("KDTREEX_TRAVERSAL", raising=False)
    kx_config.reset_runtime_config_cache()
    yield
    kx_config.reset_runtime_config_cache()


def _record(walker, tree, query, bound_fn):
    order = []
    visited = walker(
        tree.view,
        tuple(float(x) for x in query),
        tree.root,
        lambda idx, dist: order.append((idx, dist)),
        bound_fn,
    )
    return visited, order


@pytest.mark.parametrize("radius", [0.1, 0.7, math.inf])
def test_stack_and_recursive_visit_identically(radius: float):
    points, queries = gaussian_dataset(default_rng(1), tree_points=300, queries=10, dimension=3)
    tree = build_tree(points)

    for query in queries:
        rec = _record(walk_recursive, tree, query, lambda: radius)
        stk = _record(walk_stack, tree, query, lambda: radius)
        assert rec == stk


def test_shrinking_bound_prunes_identically():
    points, queries = gaussian_dataset(default_rng(2), tree_points=500, queries=10, dimension=2)
    tree = build_tree(points)

    for query in queries:
        results = []
        for walker in (walk_recursive, walk_stack):
            best = [math.inf]
            order = []

            def _visit(idx, dist, best=best, order=order):
                order.append(idx)
                best[0] = min(best[0], dist)

            visited = walker(tree.view, tuple(query.tolist()), tree.root, _visit, lambda best=best: best[0])
            results.append((visited, order))
        assert results[0] == results[1]
        assert results[0][0] < tree.num_nodes


def test_infinite_bound_visits_every_node():
    points = lattice_points(default_rng(3), 77, 2)
    tree = build_tree(points)

    visited = walk(tree.view, (0.5, 0.5), tree.root, lambda idx, dist: None, lambda: math.inf)

    assert visited == tree.num_nodes


def test_stack_traversal_from_env_matches_default(monkeypatch: pytest.MonkeyPatch):
    points, queries = gaussian_dataset(default_rng(4), tree_points=250, queries=12, dimension=4)
    tree = build_tree(points)
    expected = [
        (nearest_neighbor(tree, q), knn(tree, q, k=7), range_query(tree, q, radius=1.2))
        for q in queries
    ]

    monkeypatch.setenv("KDTREEX_TRAVERSAL", "stack")
    kx_config.reset_runtime_config_cache()
    assert kx_config.runtime_config().traversal == "stack"

    actual = [
        (nearest_neighbor(tree, q), knn(tree, q, k=7), range_query(tree, q, radius=1.2))
        for q in queries
    ]
    assert actual == expected


def test_inclusive_walk_crosses_planes_at_the_bound():
    points = lattice_points(default_rng(5), 90, 2)
    tree = build_tree(points)
    query = (1.0, 1.0)

    strict = _record(walk_recursive, tree, query, lambda: 0.0)
    inclusive_order = []
    inclusive = walk_recursive(
        tree.view,
        query,
        tree.root,
        lambda idx, dist: inclusive_order.append(idx),
        lambda: 0.0,
        inclusive=True,
    )

    exact = {idx for idx, point in enumerate(points.tolist()) if point == [1.0, 1.0]}
    assert exact <= set(inclusive_order)
    assert inclusive >= strict[0]


@pytest.mark.parametrize("bound", [0.0, 1.0, math.inf])
def test_inclusive_stack_and_recursive_visit_identically(bound: float):
    points = lattice_points(default_rng(6), 120, 3)
    tree = build_tree(points)

    for query in [(0.0, 0.0, 0.0), (1.0, 1.0, 1.0), (2.0, 0.5, 1.0)]:
        orders = []
        for walker in (walk_recursive, walk_stack):
            order = []
            visited = walker(
                tree.view,
                query,
                tree.root,
                lambda idx, dist, order=order: order.append((idx, dist)),
                lambda: bound,
                inclusive=True,
            )
            orders.append((visited, order))
        assert orders[0] == orders[1]
