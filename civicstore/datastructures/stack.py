from __future__ import annotations
from typing import Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from .dynamic_array import DynamicArray
from .errors import EmptyCollectionError

T = TypeVar("T")


class Stack(Generic[T]):
    """LIFO stack over a :class:`DynamicArray` (doubles on overflow).

    Iteration runs top to bottom, i.e. in the order successive pops would
    return the items.
    """

    __slots__ = ("_items",)

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._items: DynamicArray[T] = DynamicArray()
        if it is not None:
            for v in it:
                self.push(v)

    def push(self, item: T) -> None:
        self._items.append(item)

    def pop(self) -> T:
        """Remove and return the top item.

        Raises:
            EmptyCollectionError: if the stack is empty.
        """
        if not self._items:
            raise EmptyCollectionError("Stack", "pop")
        return self._items.pop()

    def peek(self) -> T:
        if not self._items:
            raise EmptyCollectionError("Stack", "peek")
        return self._items[len(self._items) - 1]  # type: ignore[return-value]

    def try_pop(self) -> Tuple[Optional[T], bool]:
        if not self._items:
            return None, False
        return self._items.pop(), True

    def try_peek(self) -> Tuple[Optional[T], bool]:
        if not self._items:
            return None, False
        return self.peek(), True

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def contains(self, item: T) -> bool:
        return self._items.contains(item)

    def clear(self) -> None:
        self._items.clear()

    @property
    def capacity(self) -> int:
        return self._items.capacity

    def to_list(self) -> list[T]:
        """Items top to bottom."""
        return list(self)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        items = self._items
        for i in range(len(items) - 1, -1, -1):
            yield items[i]  # type: ignore[misc]

    def __contains__(self, item: T) -> bool:
        return self.contains(item)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return len(self._items) != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Stack({self.to_list()!r})"
