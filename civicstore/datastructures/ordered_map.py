"""
Ordered key-value maps backed by binary search trees.

``OrderedMap`` is a plain (unbalanced) BST: O(log n) on random input, O(n)
depth on sorted input. Its descent is iterative so a degenerate tree cannot
exhaust the interpreter stack.

``AVLTreeMap`` keeps ``|height(left) - height(right)| <= 1`` at every node
and therefore O(log n) depth, which makes its recursive descent safe.

Keys must share a single strict total order (``<`` / ``>``).
"""

from __future__ import annotations
import logging
from typing import Generic, Iterator, Optional, Tuple, TypeVar

from .circular_queue import Queue
from .dynamic_array import DynamicArray
from .errors import InvalidArgumentError, KeyNotFoundError
from .stack import Stack

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)


class _TreeNode(Generic[K, V]):
    """Tree node; ``height`` is maintained by the AVL variant only."""

    __slots__ = ("key", "value", "left", "right", "height")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.left: Optional[_TreeNode[K, V]] = None
        self.right: Optional[_TreeNode[K, V]] = None
        self.height = 1


class _BinaryTreeMap(Generic[K, V]):
    """Read-side operations shared by both tree variants."""

    def __init__(self) -> None:
        self._root: Optional[_TreeNode[K, V]] = None
        self._size: int = 0

    def _find_node(self, key: K) -> Optional[_TreeNode[K, V]]:
        if key is None:
            return None
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current
        return None

    def _walk(self, lo: Optional[K] = None, hi: Optional[K] = None) -> Iterator[_TreeNode[K, V]]:
        """In-order generator with an explicit stack, optionally bounded."""
        stack: Stack[_TreeNode[K, V]] = Stack()
        current = self._root
        while current is not None or not stack.is_empty():
            while current is not None:
                if lo is not None and current.key < lo:
                    # Everything on the left is smaller still.
                    current = current.right
                    continue
                stack.push(current)
                current = current.left
            if stack.is_empty():
                # Every remaining key was below `lo`.
                return
            node = stack.pop()
            if hi is not None and node.key > hi:
                return
            yield node
            current = node.right

    # -----------------------------
    # Lookup
    # -----------------------------
    def find(self, key: K) -> Tuple[Optional[V], bool]:
        """Non-mutating lookup: ``(value, True)`` or ``(None, False)``."""
        node = self._find_node(key)
        if node is None:
            return None, False
        return node.value, True

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        node = self._find_node(key)
        return default if node is None else node.value

    def contains_key(self, key: K) -> bool:
        return self._find_node(key) is not None

    def min_key(self) -> K:
        if self._root is None:
            raise KeyNotFoundError("min of empty map")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.key

    def max_key(self) -> K:
        if self._root is None:
            raise KeyNotFoundError("max of empty map")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.key

    # -----------------------------
    # Ordered listing
    # -----------------------------
    def in_order(self) -> DynamicArray[Tuple[K, V]]:
        """All ``(key, value)`` pairs in ascending key order."""
        return DynamicArray((n.key, n.value) for n in self._walk())

    def range(self, lo: K, hi: K) -> DynamicArray[Tuple[K, V]]:
        """Pairs with ``lo <= key <= hi``, ascending."""
        return DynamicArray((n.key, n.value) for n in self._walk(lo, hi))

    def keys(self) -> DynamicArray[K]:
        return DynamicArray(n.key for n in self._walk())

    def values(self) -> DynamicArray[V]:
        return DynamicArray(n.value for n in self._walk())

    def height(self) -> int:
        """Number of levels; 0 for an empty tree. Computed level by level."""
        if self._root is None:
            return 0
        levels = 0
        frontier: Queue[_TreeNode[K, V]] = Queue([self._root])
        while not frontier.is_empty():
            levels += 1
            for _ in range(len(frontier)):
                node = frontier.dequeue()
                if node.left is not None:
                    frontier.enqueue(node.left)
                if node.right is not None:
                    frontier.enqueue(node.right)
        return levels

    def clear(self) -> None:
        self._root = None
        self._size = 0

    # -----------------------------
    # Standard magic methods
    # -----------------------------
    def __getitem__(self, key: K) -> V:
        node = self._find_node(key)
        if node is None:
            raise KeyNotFoundError(key)
        return node.value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)  # type: ignore[attr-defined]

    def __contains__(self, key: K) -> bool:
        return self.contains_key(key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[K]:
        """Keys in ascending order."""
        for n in self._walk():
            yield n.key

    def __repr__(self) -> str:  # pragma: no cover - trivial
        pairs = ", ".join(f"{k!r}: {v!r}" for k, v in self.in_order())
        return f"{type(self).__name__}({{{pairs}}})"


class OrderedMap(_BinaryTreeMap[K, V]):
    """Unbalanced binary search tree map.

    No rebalancing is performed: inserting keys in sorted order produces a
    linked-list shaped tree of depth n. All descents are loops.
    """

    def insert(self, key: K, value: V) -> bool:
        """Insert or update; return True when a new node was created."""
        if key is None:
            raise InvalidArgumentError("key cannot be None")

        if self._root is None:
            self._root = _TreeNode(key, value)
            self._size = 1
            return True

        parent = self._root
        while True:
            if key < parent.key:
                if parent.left is None:
                    parent.left = _TreeNode(key, value)
                    break
                parent = parent.left
            elif key > parent.key:
                if parent.right is None:
                    parent.right = _TreeNode(key, value)
                    break
                parent = parent.right
            else:
                parent.value = value
                return False

        self._size += 1
        return True

    def remove(self, key: K) -> bool:
        """Delete `key`; return False when it is absent."""
        if key is None:
            return False

        parent: Optional[_TreeNode[K, V]] = None
        node = self._root
        while node is not None and node.key != key:
            parent = node
            node = node.left if key < node.key else node.right
        if node is None:
            return False

        if node.left is not None and node.right is not None:
            # Copy the in-order successor up, then delete the successor.
            succ_parent = node
            succ = node.right
            while succ.left is not None:
                succ_parent = succ
                succ = succ.left
            node.key, node.value = succ.key, succ.value
            parent, node = succ_parent, succ

        child = node.left if node.left is not None else node.right
        if parent is None:
            self._root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child

        self._size -= 1
        return True


def _h(node: Optional[_TreeNode]) -> int:
    return 0 if node is None else node.height


def _balance(node: Optional[_TreeNode]) -> int:
    return 0 if node is None else _h(node.left) - _h(node.right)


def _update_height(node: _TreeNode) -> None:
    node.height = 1 + max(_h(node.left), _h(node.right))


class AVLTreeMap(_BinaryTreeMap[K, V]):
    """Self-balancing (AVL) ordered map.

    After each insert the unwind recomputes heights; a node whose balance
    factor leaves [-1, 1] gets exactly one correction:

    * left-left   -> rotate right
    * right-right -> rotate left
    * left-right  -> rotate left child left, then node right
    * right-left  -> rotate right child right, then node left

    The case is picked by comparing the inserted key with the heavy child's key.
    """

    # -----------------------------
    # Rotations
    # -----------------------------
    @staticmethod
    def _rotate_right(y: _TreeNode[K, V]) -> _TreeNode[K, V]:
        x = y.left
        t2 = x.right  # type: ignore[union-attr]
        x.right = y  # type: ignore[union-attr]
        y.left = t2
        _update_height(y)
        _update_height(x)  # type: ignore[arg-type]
        logger.debug("AVL rotate right at %r", y.key)
        return x  # type: ignore[return-value]

    @staticmethod
    def _rotate_left(x: _TreeNode[K, V]) -> _TreeNode[K, V]:
        y = x.right
        t2 = y.left  # type: ignore[union-attr]
        y.left = x  # type: ignore[union-attr]
        x.right = t2
        _update_height(x)
        _update_height(y)  # type: ignore[arg-type]
        logger.debug("AVL rotate left at %r", x.key)
        return y  # type: ignore[return-value]

    # -----------------------------
    # Insert
    # -----------------------------
    def insert(self, key: K, value: V) -> bool:
        """Insert or update; return True when a new node was created."""
        if key is None:
            raise InvalidArgumentError("key cannot be None")
        before = self._size
        self._root = self._insert(self._root, key, value)
        return self._size != before

    def _insert(self, node: Optional[_TreeNode[K, V]], key: K, value: V) -> _TreeNode[K, V]:
        if node is None:
            self._size += 1
            return _TreeNode(key, value)

        if key < node.key:
            node.left = self._insert(node.left, key, value)
        elif key > node.key:
            node.right = self._insert(node.right, key, value)
        else:
            node.value = value
            return node

        _update_height(node)
        balance = _balance(node)

        if balance > 1 and key < node.left.key:  # type: ignore[union-attr]
            return self._rotate_right(node)
        if balance < -1 and key > node.right.key:  # type: ignore[union-attr]
            return self._rotate_left(node)
        if balance > 1 and key > node.left.key:  # type: ignore[union-attr]
            node.left = self._rotate_left(node.left)  # type: ignore[arg-type]
            return self._rotate_right(node)
        if balance < -1 and key < node.right.key:  # type: ignore[union-attr]
            node.right = self._rotate_right(node.right)  # type: ignore[arg-type]
            return self._rotate_left(node)
        return node

    # -----------------------------
    # Remove
    # -----------------------------
    def remove(self, key: K) -> bool:
        """Delete `key` and rebalance; return False when it is absent."""
        if key is None or self._find_node(key) is None:
            return False
        self._root = self._remove(self._root, key)
        self._size -= 1
        return True

    def _remove(self, node: Optional[_TreeNode[K, V]], key: K) -> Optional[_TreeNode[K, V]]:
        if node is None:
            return None

        if key < node.key:
            node.left = self._remove(node.left, key)
        elif key > node.key:
            node.right = self._remove(node.right, key)
        else:
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left
            succ = node.right
            while succ.left is not None:
                succ = succ.left
            node.key, node.value = succ.key, succ.value
            node.right = self._remove(node.right, succ.key)

        _update_height(node)
        balance = _balance(node)

        # No inserted key to steer by; the heavy child's own balance decides.
        if balance > 1:
            if _balance(node.left) < 0:
                node.left = self._rotate_left(node.left)  # type: ignore[arg-type]
            return self._rotate_right(node)
        if balance < -1:
            if _balance(node.right) > 0:
                node.right = self._rotate_right(node.right)  # type: ignore[arg-type]
            return self._rotate_left(node)
        return node

    def height(self) -> int:
        return _h(self._root)
