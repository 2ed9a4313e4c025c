from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np
from numpy.random import Generator, default_rng

from kdtreex import KDTree


@dataclass(frozen=True)
class QueryBenchmarkResult:
    label: str
    elapsed_seconds: float
    queries: int
    latency_ms: float
    queries_per_second: float
    build_seconds: float | None = None


def gaussian_points(rng: Generator, count: int, dimension: int) -> np.ndarray:
    if count <= 0 or dimension <= 0:
        return np.zeros((max(count, 0), max(dimension, 0)), dtype=np.float64)
    return rng.normal(loc=0.0, scale=1.0, size=(count, dimension))


def generate_workload(
    *, dimension: int, tree_points: int, query_count: int, seed: int
) -> Tuple[np.ndarray, np.ndarray]:
    points = gaussian_points(default_rng(seed), tree_points, dimension)
    queries = gaussian_points(default_rng(seed + 1), query_count, dimension)
    return points, queries


def build_index(points: np.ndarray) -> Tuple[KDTree, float]:
    start = time.perf_counter()
    tree = KDTree(points, dimension=int(points.shape[1]))
    return tree, time.perf_counter() - start


def time_queries(
    label: str,
    queries: np.ndarray,
    run_one: Callable[[np.ndarray], object],
    *,
    build_seconds: float | None = None,
) -> QueryBenchmarkResult:
    query_count = int(queries.shape[0])
    start = time.perf_counter()
    for query in queries:
        run_one(query)
    elapsed = time.perf_counter() - start
    qps = query_count / elapsed if elapsed > 0 else float("inf")
    latency = (elapsed / query_count) * 1e3 if query_count else 0.0
    return QueryBenchmarkResult(
        label=label,
        elapsed_seconds=elapsed,
        queries=query_count,
        latency_ms=latency,
        queries_per_second=qps,
        build_seconds=build_seconds,
    )


def benchmark_tree_queries(
    tree: KDTree,
    queries: np.ndarray,
    *,
    k: int,
    radius: float,
    build_seconds: float | None = None,
) -> list[QueryBenchmarkResult]:
    results = [
        time_queries(
            f"knn(k={k})",
            queries,
            lambda q: tree.knn_search(q, k),
            build_seconds=build_seconds,
        ),
        time_queries(f"range(r={radius:g})", queries, lambda q: tree.range_query(q, radius)),
    ]
    if not tree.is_empty():
        results.insert(1, time_queries("nn", queries, tree.nn_search))
    return results


__all__ = [
    "QueryBenchmarkResult",
    "benchmark_tree_queries",
    "build_index",
    "gaussian_points",
    "generate_workload",
    "time_queries",
]
