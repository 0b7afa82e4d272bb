from __future__ import annotations
from typing import Any, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from .dynamic_array import DynamicArray
from .errors import EmptyCollectionError

T = TypeVar("T")


class _HeapSlot(Generic[T]):
    __slots__ = ("item", "priority")

    def __init__(self, item: T, priority: Any) -> None:
        self.item = item
        self.priority = priority


class PriorityQueue(Generic[T]):
    """A binary min-heap of ``(item, priority)`` slots.

    Lower priority values come out first. Only priorities are compared, so
    items need not be orderable. Equal priorities leave no ordering guarantee.
    """

    __slots__ = ("_data",)

    def __init__(self, it: Optional[Iterable[Tuple[T, Any]]] = None) -> None:
        self._data: DynamicArray[_HeapSlot[T]] = DynamicArray()
        if it:
            for item, priority in it:
                self._data.append(_HeapSlot(item, priority))
            self._heapify()  # Bulk build in O(n) instead of repeated pushes

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _sift_up(self, idx: int) -> None:
        data = self._data
        while idx > 0:
            parent = (idx - 1) // 2
            if not data[parent].priority > data[idx].priority:
                break
            data[parent], data[idx] = data[idx], data[parent]
            idx = parent

    def _sift_down(self, idx: int) -> None:
        data = self._data
        n = len(data)
        while True:
            left = 2 * idx + 1
            right = 2 * idx + 2
            smallest = idx
            if left < n and data[left].priority < data[smallest].priority:
                smallest = left
            if right < n and data[right].priority < data[smallest].priority:
                smallest = right
            if smallest == idx:
                break
            data[idx], data[smallest] = data[smallest], data[idx]
            idx = smallest

    def _heapify(self) -> None:
        """Transform the current array into a heap in-place in O(n) time."""
        n = len(self._data)
        for i in reversed(range(n // 2)):
            self._sift_down(i)

    # -----------------------------
    # Public API
    # -----------------------------
    def enqueue(self, item: T, priority: Any) -> None:
        """Add `item` with `priority` (O(log n))."""
        self._data.append(_HeapSlot(item, priority))
        self._sift_up(len(self._data) - 1)

    def dequeue(self) -> T:
        """Remove and return the item with the smallest priority (O(log n)).

        Raises:
            EmptyCollectionError: if the queue is empty.
        """
        if not self._data:
            raise EmptyCollectionError("PriorityQueue", "dequeue")
        data = self._data
        last_idx = len(data) - 1
        data[0], data[last_idx] = data[last_idx], data[0]
        top = data.pop()
        if data:
            self._sift_down(0)
        return top.item

    def peek(self) -> T:
        if not self._data:
            raise EmptyCollectionError("PriorityQueue", "peek")
        return self._data[0].item

    def peek_priority(self) -> Any:
        if not self._data:
            raise EmptyCollectionError("PriorityQueue", "peek_priority")
        return self._data[0].priority

    def try_dequeue(self) -> Tuple[Optional[T], bool]:
        if not self._data:
            return None, False
        return self.dequeue(), True

    def try_peek(self) -> Tuple[Optional[T], bool]:
        if not self._data:
            return None, False
        return self._data[0].item, True

    def is_empty(self) -> bool:
        return len(self._data) == 0

    def clear(self) -> None:
        self._data.clear()

    def to_list(self) -> list[Tuple[T, Any]]:
        """``(item, priority)`` pairs in heap-array order, not sorted order."""
        return [(s.item, s.priority) for s in self._data]

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return bool(self._data)

    def __iter__(self) -> Iterator[Tuple[T, Any]]:  # pragma: no cover - simple
        # Iterate over the internal array (heap order, not sorted order)
        return iter(self.to_list())

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"PriorityQueue({self.to_list()!r})"
