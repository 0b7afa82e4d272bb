from __future__ import annotations
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from .errors import EmptyCollectionError, IndexOutOfRangeError

T = TypeVar("T")


class _DLNode(Generic[T]):
    """A lightweight node for a doubly-linked list."""

    __slots__ = ("data", "prev", "next")

    def __init__(
        self,
        data: T,
        prev: Optional["_DLNode[T]"] = None,
        next: Optional["_DLNode[T]"] = None,
    ) -> None:
        self.data = data
        self.prev = prev
        self.next = next


class DoublyLinkedList(Generic[T]):
    """Doubly-linked sequence with O(1) insert/remove at either end.

    Used as hash-bucket storage by :class:`HashMap`. Indexed access walks
    from whichever end is closer, so ``lst[i]`` costs O(min(i, n - i)).
    """

    __slots__ = ("_head", "_tail", "_size")

    def __init__(self, it: Optional[Iterable[T]] = None) -> None:
        self._head: Optional[_DLNode[T]] = None
        self._tail: Optional[_DLNode[T]] = None
        self._size = 0
        if it is not None:
            for v in it:
                self.append(v)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _node_at(self, idx: int) -> _DLNode[T]:
        if not isinstance(idx, int) or idx < 0 or idx >= self._size:
            raise IndexOutOfRangeError(idx, self._size)
        if idx < self._size // 2:
            n = self._head
            for _ in range(idx):
                n = n.next  # type: ignore[union-attr]
        else:
            n = self._tail
            for _ in range(self._size - 1 - idx):
                n = n.prev  # type: ignore[union-attr]
        return n  # type: ignore[return-value]

    def _unlink(self, node: _DLNode[T]) -> T:
        if node.prev is None:
            self._head = node.next
        else:
            node.prev.next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            node.next.prev = node.prev
        node.prev = node.next = None
        self._size -= 1
        return node.data

    # -----------------------------
    # Core operations
    # -----------------------------
    def append(self, value: T) -> None:
        """Add `value` at the tail. O(1)."""
        node = _DLNode(value, prev=self._tail)
        if self._tail is None:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1

    def prepend(self, value: T) -> None:
        """Add `value` at the head. O(1)."""
        node = _DLNode(value, next=self._head)
        if self._head is None:
            self._tail = node
        else:
            self._head.prev = node
        self._head = node
        self._size += 1

    def pop_front(self) -> T:
        if self._head is None:
            raise EmptyCollectionError("DoublyLinkedList", "pop_front")
        return self._unlink(self._head)

    def pop_back(self) -> T:
        if self._tail is None:
            raise EmptyCollectionError("DoublyLinkedList", "pop_back")
        return self._unlink(self._tail)

    def remove(self, value: T) -> bool:
        """Remove the first node equal to `value`. O(n) linear scan."""
        n = self._head
        while n:
            if n.data == value:
                self._unlink(n)
                return True
            n = n.next
        return False

    def remove_first(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Unlink and return the first item matching `predicate`, or None."""
        n = self._head
        while n:
            if predicate(n.data):
                return self._unlink(n)
            n = n.next
        return None

    def remove_at(self, idx: int) -> T:
        return self._unlink(self._node_at(idx))

    def get(self, idx: int) -> T:
        return self._node_at(idx).data

    def set(self, idx: int, value: T) -> None:
        self._node_at(idx).data = value

    def first_or_default(self, predicate: Callable[[T], bool], default: Optional[T] = None) -> Optional[T]:
        """Return the first item matching `predicate`, else `default`."""
        n = self._head
        while n:
            if predicate(n.data):
                return n.data
            n = n.next
        return default

    def index_of(self, value: T) -> int:
        i = 0
        n = self._head
        while n:
            if n.data == value:
                return i
            n = n.next
            i += 1
        return -1

    def contains(self, value: T) -> bool:
        return self.index_of(value) >= 0

    def clear(self) -> None:
        self._head = None
        self._tail = None
        self._size = 0

    def to_list(self) -> list[T]:
        return list(self)

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        """Yield items head to tail."""
        n = self._head
        while n:
            yield n.data
            n = n.next

    def __reversed__(self) -> Iterator[T]:
        n = self._tail
        while n:
            yield n.data
            n = n.prev

    def __getitem__(self, idx: int) -> T:
        return self.get(idx)

    def __setitem__(self, idx: int, value: T) -> None:
        self.set(idx, value)

    def __contains__(self, value: T) -> bool:
        return self.contains(value)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"DoublyLinkedList({self.to_list()!r})"
