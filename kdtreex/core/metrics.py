from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def euclidean(lhs: Sequence[float], rhs: Sequence[float]) -> float:
    """Euclidean distance between two equal-length coordinate sequences."""

    return math.dist(lhs, rhs)


def euclidean_to_many(query: Sequence[float], points: np.ndarray) -> np.ndarray:
    """Distances from ``query`` to every row of ``points`` using :func:`euclidean`.

    The scalar kernel is reused row by row so that brute-force references agree
    bit-for-bit with the tree searches.
    """

    if points.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    rows = points.tolist()
    return np.fromiter((euclidean(query, row) for row in rows), dtype=np.float64, count=len(rows))


__all__ = ["euclidean", "euclidean_to_many"]
