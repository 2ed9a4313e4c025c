from __future__ import annotations

from bisect import insort_right
from typing import Any, Callable, Generic, Iterator, List, TypeVar

T = TypeVar("T")


class BoundedPriorityQueue(Generic[T]):
    """Fixed-capacity list kept sorted in ascending order.

    ``push`` places the value after every element that ranks equal to it, so
    ties keep insertion order. Once the list grows past ``bound`` the tail is
    dropped, leaving the best ``bound`` elements seen so far.
    """

    __slots__ = ("_bound", "_elements", "_key")

    def __init__(self, bound: int, *, key: Callable[[T], Any] | None = None) -> None:
        if bound < 0:
            raise ValueError("bound must be non-negative.")
        self._bound = int(bound)
        self._elements: List[T] = []
        self._key = key

    @property
    def bound(self) -> int:
        return self._bound

    def is_full(self) -> bool:
        return len(self._elements) >= self._bound

    def push(self, value: T) -> None:
        insort_right(self._elements, value, key=self._key)
        if len(self._elements) > self._bound:
            del self._elements[self._bound :]

    def back(self) -> T:
        """Return the worst retained element."""

        if not self._elements:
            raise IndexError("back() on an empty BoundedPriorityQueue")
        return self._elements[-1]

    def __getitem__(self, index: int) -> T:
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        return iter(self._elements)

    def to_list(self) -> List[T]:
        return list(self._elements)

    def __repr__(self) -> str:
        return f"BoundedPriorityQueue(bound={self._bound}, elements={self._elements!r})"


__all__ = ["BoundedPriorityQueue"]
