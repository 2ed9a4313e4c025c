from __future__ import annotations

from .app import QueryCLIOptions, main, run_queries
from .baselines import BaselineComparison, run_baseline_comparisons
from .benchmark import QueryBenchmarkResult, benchmark_tree_queries, build_index

__all__ = [
    "BaselineComparison",
    "QueryBenchmarkResult",
    "benchmark_tree_queries",
    "build_index",
    "run_baseline_comparisons",
    "QueryCLIOptions",
    "run_queries",
    "main",
]
