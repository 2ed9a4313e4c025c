import numpy as np
import pytest
from numpy.random import default_rng

from kdtreex import BruteForceIndex, KDTreeData, build_tree, knn, nearest_neighbor
from kdtreex import config as kx_config
from tests.utils.datasets import gaussian_dataset, lattice_points


@pytest.fixture(autouse=True)
def reset_runtime():
    kx_config.reset_runtime_config_cache()
    yield
    kx_config.reset_runtime_config_cache()


def _bruteforce_knn(points: np.ndarray, query: np.ndarray, k: int) -> np.ndarray:
    dists = np.linalg.norm(points - query, axis=1)
    return np.argsort(dists, kind="stable")[:k]


@pytest.mark.parametrize("dimension", [1, 2, 3, 5])
@pytest.mark.parametrize("k", [1, 3, 10])
def test_knn_matches_bruteforce(dimension: int, k: int):
    points, queries = gaussian_dataset(
        default_rng(dimension * 31 + k), tree_points=300, queries=20, dimension=dimension
    )
    tree = build_tree(points)
    reference = BruteForceIndex.from_points(points)

    for query in queries:
        indices, distances = knn(tree, query, k=k, return_distances=True)
        ref_indices, ref_distances = reference.knn_search(query, k, return_distances=True)
        assert indices == ref_indices
        assert distances == pytest.approx(ref_distances, rel=1e-12, abs=1e-12)
        assert np.array_equal(indices, _bruteforce_knn(points, query, k))


def test_knn_distances_are_ascending():
    points, queries = gaussian_dataset(default_rng(2), tree_points=128, queries=8, dimension=3)
    tree = build_tree(points)

    for query in queries:
        _, distances = knn(tree, query, k=16, return_distances=True)
        assert distances == sorted(distances)
        assert len(distances) == 16


def test_knn_returns_everything_when_k_exceeds_size():
    points = np.asarray([[0.0, 0.0], [3.0, 4.0], [1.0, 0.0]])
    tree = build_tree(points)

    indices, distances = knn(tree, [0.0, 0.0], k=10, return_distances=True)

    assert indices == [0, 2, 1]
    assert distances == pytest.approx([0.0, 1.0, 5.0])


def test_knn_k_one_matches_nearest_neighbor():
    points, queries = gaussian_dataset(default_rng(4), tree_points=500, queries=25, dimension=4)
    tree = build_tree(points)

    for query in queries:
        assert knn(tree, query, k=1) == [nearest_neighbor(tree, query)]


@pytest.mark.parametrize("k", [0, -3])
def test_knn_non_positive_k_is_empty(k: int):
    tree = build_tree([[0.0, 0.0], [1.0, 1.0]])

    assert knn(tree, [0.0, 0.0], k=k) == []
    assert knn(tree, [0.0, 0.0], k=k, return_distances=True) == ([], [])


def test_knn_on_empty_tree_is_empty():
    tree = KDTreeData.empty(dimension=2)

    assert knn(tree, [0.0, 0.0], k=3) == []
    assert build_tree([]).is_empty()
    assert knn(build_tree([]), [1.0], k=1) == []


def test_knn_with_duplicate_coordinates_matches_bruteforce_order():
    points = lattice_points(default_rng(6), 200, 2)
    tree = build_tree(points)
    reference = BruteForceIndex.from_points(points)

    for query in [[0.0, 0.0], [1.0, 1.0], [0.5, 1.5], [2.0, 0.25]]:
        indices, distances = knn(tree, query, k=12, return_distances=True)
        ref_indices, ref_distances = reference.knn_search(query, 12, return_distances=True)
        assert indices == ref_indices
        assert distances == ref_distances


@pytest.mark.parametrize("traversal", ["recursive", "stack"])
@pytest.mark.parametrize("k", [1, 3, 7])
def test_knn_ties_resolve_to_lowest_indices(traversal: str, k: int):
    kx_config.configure_runtime(kx_config.RuntimeConfig(traversal=traversal))
    queries = [[0.0, 0.0], [0.5, 0.5], [1.0, 2.0], [2.0, 2.0], [1.5, 0.0]]

    for seed in range(30):
        points = lattice_points(default_rng(seed), 60, 2)
        tree = build_tree(points)
        reference = BruteForceIndex.from_points(points)
        for query in queries:
            assert knn(tree, query, k=k) == reference.knn_search(query, k)


def test_knn_k_one_matches_nearest_neighbor_on_lattice():
    for seed in range(30):
        points = lattice_points(default_rng(seed), 60, 2)
        tree = build_tree(points)
        for query in [[0.0, 0.0], [0.5, 0.5], [1.0, 2.0], [2.0, 2.0], [1.5, 0.0]]:
            assert knn(tree, query, k=1) == [nearest_neighbor(tree, query)]


def test_knn_rejects_query_dimension_mismatch():
    tree = build_tree([[0.0, 0.0], [1.0, 1.0]])

    with pytest.raises(ValueError):
        knn(tree, [0.0, 0.0, 0.0], k=1)
