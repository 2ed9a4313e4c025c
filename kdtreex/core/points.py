from __future__ import annotations

from typing import Any, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np


@runtime_checkable
class PointLike(Protocol):
    """Fixed-dimension coordinate container.

    Anything with a length and integer-indexed float coordinates qualifies:
    tuples, lists and NumPy rows all satisfy the protocol.
    """

    def __len__(self) -> int:
        ...

    def __getitem__(self, index: int) -> Any:
        ...


def as_point_array(
    points: Any,
    *,
    dtype: Any = np.float64,
    dimension: int | None = None,
) -> np.ndarray:
    """Copy ``points`` into a read-only ``(n, D)`` array.

    A flat 1-D input such as ``[1.0, 2.0, 3.0]`` is read as one point whose
    coordinates are its entries; pass ``[[1.0], [2.0], [3.0]]`` for three
    1-D points. Scalars are rejected. An empty input yields a
    ``(0, dimension)`` array, ``dimension`` defaulting to zero.
    """

    arr = np.array(points, dtype=dtype, copy=True)
    if arr.ndim == 0:
        raise ValueError("Point sets must be sequences of coordinates, got a scalar.")
    if arr.ndim == 1:
        length = int(arr.shape[0])
        if length == 0:
            arr = arr.reshape(0, dimension or 0)
        else:
            arr = arr.reshape(1, length)
    elif arr.ndim != 2:
        raise ValueError(f"Point sets must be 2-D array-likes, got shape {arr.shape}.")

    if arr.shape[0] == 0 and dimension is not None and arr.shape[1] != dimension:
        arr = arr.reshape(0, dimension)
    if dimension is not None and arr.shape[1] != dimension:
        raise ValueError(
            f"Point dimension {arr.shape[1]} does not match requested dimension {dimension}."
        )
    if arr.shape[0] > 0 and arr.shape[1] == 0:
        raise ValueError("Points must have at least one coordinate.")
    arr.setflags(write=False)
    return arr


def as_query(query: PointLike | Sequence[float], dimension: int) -> Tuple[float, ...]:
    coords = tuple(float(value) for value in np.asarray(query, dtype=np.float64).reshape(-1))
    if len(coords) != dimension:
        raise ValueError(
            f"Query has dimension {len(coords)} but the tree stores {dimension}-D points."
        )
    return coords


__all__ = ["PointLike", "as_point_array", "as_query"]
