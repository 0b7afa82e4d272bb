from __future__ import annotations
from typing import Generic, Iterable, Iterator, Optional, TypeVar

from .errors import InvalidArgumentError
from .hash_map import HashMap

K = TypeVar("K")

# Value stored against every member key.
_PRESENT = True


class HashSet(Generic[K]):
    """A set of unique keys stored in an internal :class:`HashMap`.

    Set algebra (union/intersection/difference) returns a new set and never
    modifies either operand. Iteration order is unspecified.
    """

    __slots__ = ("_map",)

    def __init__(self, it: Optional[Iterable[K]] = None) -> None:
        self._map: HashMap[K, bool] = HashMap()
        if it is not None:
            for k in it:
                self.add(k)

    @staticmethod
    def _require_set(other: object) -> "HashSet":
        if other is None:
            raise InvalidArgumentError("other set cannot be None")
        if not isinstance(other, HashSet):
            raise InvalidArgumentError(f"expected HashSet, got {type(other).__name__}")
        return other

    def add(self, key: K) -> bool:
        """Add `key`; return True if it was not already a member."""
        if key is None:
            raise InvalidArgumentError("set members cannot be None")
        if self._map.contains_key(key):
            return False
        self._map.add(key, _PRESENT)
        return True

    def remove(self, key: K) -> bool:
        return self._map.remove(key)

    def contains(self, key: K) -> bool:
        return self._map.contains_key(key)

    def clear(self) -> None:
        self._map.clear()

    # -----------------------------
    # Set algebra, O(len(a) + len(b))
    # -----------------------------
    def union(self, other: "HashSet[K]") -> "HashSet[K]":
        other = self._require_set(other)
        result: HashSet[K] = HashSet(self)
        for k in other:
            result.add(k)
        return result

    def intersection(self, other: "HashSet[K]") -> "HashSet[K]":
        other = self._require_set(other)
        return HashSet(k for k in self if other.contains(k))

    def difference(self, other: "HashSet[K]") -> "HashSet[K]":
        other = self._require_set(other)
        return HashSet(k for k in self if not other.contains(k))

    def is_subset_of(self, other: "HashSet[K]") -> bool:
        other = self._require_set(other)
        for k in self:
            if not other.contains(k):
                return False
        return True

    def is_superset_of(self, other: "HashSet[K]") -> bool:
        return self._require_set(other).is_subset_of(self)

    def to_list(self) -> list[K]:
        return list(self)

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    # Operators defer to the other operand for foreign types; the named
    # methods raise InvalidArgumentError instead.
    def __or__(self, other: object) -> "HashSet[K]":
        if not isinstance(other, HashSet):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: object) -> "HashSet[K]":
        if not isinstance(other, HashSet):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other: object) -> "HashSet[K]":
        if not isinstance(other, HashSet):
            return NotImplemented
        return self.difference(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, HashSet):
            return NotImplemented
        return self.is_subset_of(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, HashSet):
            return NotImplemented
        return self.is_superset_of(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashSet):
            return NotImplemented
        return len(self) == len(other) and self.is_subset_of(other)

    __hash__ = None  # mutable container

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"HashSet({self.to_list()!r})"
