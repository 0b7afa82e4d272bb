from __future__ import annotations
import logging
from typing import Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from .dynamic_array import DynamicArray
from .errors import InvalidArgumentError, KeyNotFoundError
from .linked_list import DoublyLinkedList

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class _Entry(Generic[K, V]):
    """One key/value pair stored in a bucket chain."""

    __slots__ = ("key", "value")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value


class HashMap(Generic[K, V]):
    """A separate-chaining hash table.

    - Buckets live in a :class:`DynamicArray`; each non-empty bucket is a
      :class:`DoublyLinkedList` of entries, created lazily on first use.
    - Bucket index is ``hash(key) mod capacity``.
    - Before a *new* key is inserted, if ``size / capacity >= load_factor``
      the capacity doubles and every entry is rehashed.
    - Updating an existing key never changes size and never triggers growth.
    - Iteration order is bucket order, then chain order: unspecified.
    """

    __slots__ = ("_cap", "_load", "_buckets", "_size")

    DEFAULT_CAPACITY = 16
    DEFAULT_LOAD_FACTOR = 0.75

    def __init__(self, capacity: int = DEFAULT_CAPACITY, load_factor: float = DEFAULT_LOAD_FACTOR) -> None:
        if capacity < 0:
            raise InvalidArgumentError("capacity cannot be negative")
        if capacity < 4:
            capacity = 4
        if not (0.1 <= load_factor < 1.0):
            raise InvalidArgumentError("load_factor must be in [0.1, 1.0)")
        self._cap: int = capacity
        self._load: float = load_factor
        self._buckets: DynamicArray[Optional[DoublyLinkedList[_Entry[K, V]]]] = self._empty_buckets(capacity)
        self._size: int = 0

    # -----------------------------
    # Internal helpers
    # -----------------------------
    @staticmethod
    def _empty_buckets(capacity: int) -> DynamicArray[Optional[DoublyLinkedList[_Entry[K, V]]]]:
        buckets: DynamicArray[Optional[DoublyLinkedList[_Entry[K, V]]]] = DynamicArray()
        for _ in range(capacity):
            buckets.append(None)
        return buckets

    def _bucket_index(self, key: K) -> int:
        """Compute bucket index for a key (power-of-two optimization)."""
        h = hash(key)
        return h & (self._cap - 1) if (self._cap & (self._cap - 1)) == 0 else h % self._cap

    def _find_entry(self, key: K) -> Optional[_Entry[K, V]]:
        if key is None:
            return None
        bucket = self._buckets[self._bucket_index(key)]
        if bucket is None:
            return None
        return bucket.first_or_default(lambda e: e.key == key)

    def _resize(self, new_capacity: int) -> None:
        """Grow to `new_capacity` and rehash all entries directly."""
        logger.debug("HashMap resize %d -> %d (size=%d)", self._cap, new_capacity, self._size)
        old_buckets = self._buckets
        self._cap = new_capacity
        self._buckets = self._empty_buckets(new_capacity)

        for bucket in old_buckets:
            if bucket is None:
                continue
            for entry in bucket:
                idx = self._bucket_index(entry.key)
                chain = self._buckets[idx]
                if chain is None:
                    chain = DoublyLinkedList()
                    self._buckets[idx] = chain
                chain.append(entry)

    # -----------------------------
    # Core operations
    # -----------------------------
    def add(self, key: K, value: V) -> bool:
        """Insert or update a key-value pair.

        Returns True when a new key was inserted, False when an existing
        key had its value replaced.

        Raises:
            InvalidArgumentError: if `key` is None.
        """
        if key is None:
            raise InvalidArgumentError("key cannot be None")

        entry = self._find_entry(key)
        if entry is not None:
            entry.value = value
            return False

        if self._size / self._cap >= self._load:
            self._resize(self._cap * 2)

        idx = self._bucket_index(key)
        chain = self._buckets[idx]
        if chain is None:
            chain = DoublyLinkedList()
            self._buckets[idx] = chain
        chain.append(_Entry(key, value))
        self._size += 1
        return True

    def try_get(self, key: K) -> Tuple[Optional[V], bool]:
        """Return ``(value, True)`` if present, else ``(None, False)``."""
        entry = self._find_entry(key)
        if entry is None:
            return None, False
        return entry.value, True

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Retrieve value for key or return default."""
        entry = self._find_entry(key)
        return default if entry is None else entry.value

    def contains_key(self, key: K) -> bool:
        return self._find_entry(key) is not None

    def remove(self, key: K) -> bool:
        """Remove key if present; return True if something was removed."""
        if key is None:
            return False
        bucket = self._buckets[self._bucket_index(key)]
        if bucket is not None and bucket.remove_first(lambda e: e.key == key) is not None:
            self._size -= 1
            return True
        return False

    def clear(self) -> None:
        """Drop every entry; capacity is kept."""
        self._buckets = self._empty_buckets(self._cap)
        self._size = 0

    def update(self, items: Iterable[Tuple[K, V]]) -> None:
        """Insert many pairs, growing once up front when the count is known."""
        if not isinstance(items, (list, tuple, DynamicArray)):
            items = list(items)
        needed = self._size + len(items)
        new_cap = self._cap
        while needed / new_cap >= self._load:
            new_cap *= 2
        if new_cap != self._cap:
            self._resize(new_cap)
        for k, v in items:
            self.add(k, v)

    # -----------------------------
    # Iteration helpers
    # -----------------------------
    def items(self) -> Iterator[Tuple[K, V]]:
        for bucket in self._buckets:
            if bucket:
                for entry in bucket:
                    yield entry.key, entry.value

    def keys(self) -> DynamicArray[K]:
        return DynamicArray(k for k, _ in self.items())

    def values(self) -> DynamicArray[V]:
        return DynamicArray(v for _, v in self.items())

    @property
    def capacity(self) -> int:
        return self._cap

    @property
    def load_factor(self) -> float:
        return self._load

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __getitem__(self, key: K) -> V:
        entry = self._find_entry(key)
        if entry is None:
            raise KeyNotFoundError(key)
        return entry.value

    def __setitem__(self, key: K, value: V) -> None:
        self.add(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def __contains__(self, key: K) -> bool:
        return self.contains_key(key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[K]:
        for k, _ in self.items():
            yield k

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashMap({{{pairs}}})"
