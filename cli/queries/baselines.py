from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List

import numpy as np

from kdtreex import BruteForceIndex, KDTree

from .benchmark import QueryBenchmarkResult, time_queries


@dataclass(frozen=True)
class BaselineComparison:
    name: str
    build_seconds: float
    result: QueryBenchmarkResult
    mismatches: int


def _run_bruteforce_baseline(
    tree: KDTree, points: np.ndarray, queries: np.ndarray, *, k: int
) -> BaselineComparison:
    start_build = time.perf_counter()
    baseline = BruteForceIndex.from_points(points)
    build_seconds = time.perf_counter() - start_build
    result = time_queries("knn", queries, lambda q: baseline.knn_search(q, k))
    mismatches = sum(
        1 for query in queries if baseline.knn_search(query, k) != tree.knn_search(query, k)
    )
    return BaselineComparison(
        name="brute",
        build_seconds=build_seconds,
        result=result,
        mismatches=mismatches,
    )


def run_baseline_comparisons(
    tree: KDTree,
    points: np.ndarray,
    queries: np.ndarray,
    *,
    k: int,
    mode: str,
) -> List[BaselineComparison]:
    queries = np.asarray(queries, dtype=float)
    if queries.ndim == 1:
        queries = queries.reshape(1, -1)
    results: List[BaselineComparison] = []
    if mode == "brute":
        results.append(_run_bruteforce_baseline(tree, points, queries, k=k))
    elif mode != "none":
        raise ValueError(f"Unknown baseline '{mode}'. Expected 'none' or 'brute'.")
    return results


__all__ = ["BaselineComparison", "run_baseline_comparisons"]
