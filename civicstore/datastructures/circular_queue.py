from __future__ import annotations
import logging
from typing import Any, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from .errors import EmptyCollectionError, InvalidArgumentError

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Queue(Generic[T]):
    """FIFO queue over a circular buffer.

    ``_head`` indexes the oldest item and ``_tail`` the next free slot, both
    modulo capacity. When the buffer is full the capacity doubles and the
    contents are linearised so the head lands at slot 0.
    """

    __slots__ = ("_buf", "_head", "_tail", "_size")

    _DEFAULT_CAPACITY = 4

    def __init__(self, it: Optional[Iterable[T]] = None, capacity: int = _DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise InvalidArgumentError("capacity cannot be negative")
        self._buf: list[Any] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._size = 0
        if it is not None:
            for v in it:
                self.enqueue(v)

    # -----------------------------
    # Internal helpers
    # -----------------------------
    def _resize(self) -> None:
        old_cap = len(self._buf)
        new_cap = old_cap * 2 if old_cap else self._DEFAULT_CAPACITY
        new_buf: list[Any] = [None] * new_cap
        for i in range(self._size):
            new_buf[i] = self._buf[(self._head + i) % old_cap]
        logger.debug("Queue grow %d -> %d", old_cap, new_cap)
        self._buf = new_buf
        self._head = 0
        self._tail = self._size

    # -----------------------------
    # Core operations
    # -----------------------------
    def enqueue(self, item: T) -> None:
        """Append `item` at the tail. Amortized O(1)."""
        if self._size >= len(self._buf):
            self._resize()
        self._buf[self._tail] = item
        self._tail = (self._tail + 1) % len(self._buf)
        self._size += 1

    def dequeue(self) -> T:
        """Remove and return the oldest item.

        Raises:
            EmptyCollectionError: if the queue is empty.
        """
        if self._size == 0:
            raise EmptyCollectionError("Queue", "dequeue")
        item = self._buf[self._head]
        self._buf[self._head] = None
        self._head = (self._head + 1) % len(self._buf)
        self._size -= 1
        return item

    def peek(self) -> T:
        if self._size == 0:
            raise EmptyCollectionError("Queue", "peek")
        return self._buf[self._head]

    def try_dequeue(self) -> Tuple[Optional[T], bool]:
        if self._size == 0:
            return None, False
        return self.dequeue(), True

    def try_peek(self) -> Tuple[Optional[T], bool]:
        if self._size == 0:
            return None, False
        return self._buf[self._head], True

    def is_empty(self) -> bool:
        return self._size == 0

    def contains(self, item: T) -> bool:
        for v in self:
            if v == item:
                return True
        return False

    def clear(self) -> None:
        for i in range(len(self._buf)):
            self._buf[i] = None
        self._head = 0
        self._tail = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def to_list(self) -> list[T]:
        """Items head (oldest) to tail (newest)."""
        return list(self)

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        cap = len(self._buf)
        for i in range(self._size):
            yield self._buf[(self._head + i) % cap]

    def __contains__(self, item: T) -> bool:
        return self.contains(item)

    def __bool__(self) -> bool:  # pragma: no cover - trivial
        return self._size != 0

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Queue({self.to_list()!r})"
