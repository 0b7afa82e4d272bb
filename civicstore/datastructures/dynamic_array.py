from __future__ import annotations
import ctypes
import logging
from typing import Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar, overload

from .errors import IndexOutOfRangeError, InvalidArgumentError

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


class DynamicArray(Generic[T]):
    """A growable, index-addressable sequence backed by a raw dynamic array.

    Implementation notes
    --------------------
    • Items live in a ctypes `py_object` buffer, not a Python list.
    • Capacity starts at 4 and doubles when full (amortized O(1) append).
    • Indices must lie in [0, size); negative indices are rejected.
    • Slicing returns another DynamicArray[T].
    • Iteration is in index order and is not safe under concurrent mutation.
    """

    __slots__ = ("_buf", "_size", "_capacity")

    # Slots allocated by a new, empty array.
    _INITIAL_CAPACITY = 4

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._capacity = self._INITIAL_CAPACITY
        self._buf = self._make_array(self._capacity)
        self._size = 0

        if it is not None:
            for v in it:
                self.append(v)

    # -----------------------------
    # Buffer management
    # -----------------------------

    @staticmethod
    def _make_array(capacity: int):
        """Fresh py_object buffer with `capacity` slots (at least one)."""
        if capacity <= 0:
            capacity = 1
        return (capacity * ctypes.py_object)()

    def _resize(self, new_capacity: int) -> None:
        """Copy live items into a buffer of `new_capacity` (must be ≥ size)."""
        if new_capacity < self._size:
            raise InvalidArgumentError(f"capacity {new_capacity} cannot hold {self._size} items")

        new_buf = self._make_array(new_capacity)
        for i in range(self._size):
            new_buf[i] = self._buf[i]

        self._buf = new_buf
        self._capacity = new_capacity

    def _grow_if_full(self) -> None:
        """Double capacity when the buffer is full."""
        if self._size >= self._capacity:
            new_capacity = self._capacity * 2
            logger.debug("DynamicArray grow %d -> %d", self._capacity, new_capacity)
            self._resize(new_capacity)

    def _check_index(self, idx: int) -> int:
        if not isinstance(idx, int) or idx < 0 or idx >= self._size:
            raise IndexOutOfRangeError(idx, self._size)
        return idx

    # -----------------------------
    # Sequence operations
    # -----------------------------

    @property
    def capacity(self) -> int:
        """Allocated slots; always ≥ len(self)."""
        return self._capacity

    def append(self, value: T) -> None:
        """Add `value` after the last item; amortized O(1)."""
        self._grow_if_full()
        self._buf[self._size] = value
        self._size += 1

    def extend(self, it: Iterable[T]) -> None:
        for v in it:
            self.append(v)

    def get(self, idx: int) -> T:
        """Return the item at `idx`.

        Raises:
            IndexOutOfRangeError: if idx is outside [0, size).
        """
        return self._buf[self._check_index(idx)]  # type: ignore[return-value]

    def try_get(self, idx: int) -> Tuple[Optional[T], bool]:
        """Non-throwing accessor: ``(item, True)`` or ``(None, False)``."""
        if not isinstance(idx, int) or idx < 0 or idx >= self._size:
            return None, False
        return self._buf[idx], True

    def set(self, idx: int, value: T) -> None:
        """Overwrite the element at `idx`."""
        self._buf[self._check_index(idx)] = value

    def remove_at(self, idx: int) -> T:
        """Remove and return the item at `idx`, shifting the tail left.

        Complexity: O(n - idx).
        """
        i = self._check_index(idx)
        val = self._buf[i]

        for j in range(i, self._size - 1):
            self._buf[j] = self._buf[j + 1]

        # Drop the reference held by the vacated slot.
        self._buf[self._size - 1] = None
        self._size -= 1
        return val  # type: ignore[return-value]

    def pop(self) -> T:
        """Remove and return the last item. O(1)."""
        if self._size == 0:
            raise IndexOutOfRangeError(-1, 0)
        return self.remove_at(self._size - 1)

    def remove(self, value: T) -> bool:
        """Remove the first occurrence of `value`; return False if absent."""
        i = self.index_of(value)
        if i < 0:
            return False
        self.remove_at(i)
        return True

    def index_of(self, value: T) -> int:
        """Return the first index of `value`, or -1 when absent. O(n)."""
        for i in range(self._size):
            if self._buf[i] == value:
                return i
        return -1

    def contains(self, value: T) -> bool:
        return self.index_of(value) >= 0

    def clear(self) -> None:
        """Drop every item; the allocated capacity is kept."""
        for i in range(self._size):
            self._buf[i] = None
        self._size = 0

    def reverse(self) -> None:
        """Reverse the items in place."""
        lo, hi = 0, self._size - 1
        while lo < hi:
            self._buf[lo], self._buf[hi] = self._buf[hi], self._buf[lo]
            lo += 1
            hi -= 1

    @overload
    def first_or_default(self, predicate: Callable[[T], bool]) -> Optional[T]: ...
    @overload
    def first_or_default(self, predicate: Callable[[T], bool], default: U) -> T | U: ...

    def first_or_default(self, predicate: Callable[[T], bool], default: U | None = None) -> T | U | None:
        """Return the first item matching `predicate`, else `default`."""
        for v in self:
            if predicate(v):
                return v
        return default

    def where(self, predicate: Callable[[T], bool]) -> "DynamicArray[T]":
        """Return a new DynamicArray holding the items matching `predicate`."""
        out: DynamicArray[T] = DynamicArray()
        for v in self:
            if predicate(v):
                out.append(v)
        return out

    def to_list(self) -> list[T]:
        """Copy the contents into a plain Python list (index order)."""
        return [self._buf[i] for i in range(self._size)]

    # -----------------------------
    # Standard magic methods
    # -----------------------------

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        """Index order, 0 to size - 1."""
        for i in range(self._size):
            yield self._buf[i]  # type: ignore[misc]

    def __getitem__(self, idx: int | slice) -> T | "DynamicArray[T]":
        """Get an item or a slice.

        • `arr[i]` returns the element at i (0 <= i < size).
        • `arr[a:b:c]` returns a new DynamicArray with the slice.
        """
        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            out: DynamicArray[T] = DynamicArray()
            for i in range(start, stop, step):
                out.append(self._buf[i])  # type: ignore[misc]
            return out
        return self.get(idx)

    def __setitem__(self, idx: int, value: T) -> None:
        self.set(idx, value)

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicArray):
            return NotImplemented
        if len(self) != len(other):
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None  # mutable container

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"DynamicArray({self.to_list()!r})"
