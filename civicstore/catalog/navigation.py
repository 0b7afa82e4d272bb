from __future__ import annotations

from typing import Optional, Tuple

from ..datastructures import InvalidArgumentError, Stack

DEFAULT_DEPTH = 50


class NavigationHistory:
    """Bounded back-stack of visited page labels.

    Once more than `depth` entries are pushed the oldest ones are discarded;
    the newest `depth` entries keep their LIFO order.
    """

    def __init__(self, depth: int = DEFAULT_DEPTH) -> None:
        if depth <= 0:
            raise InvalidArgumentError("depth must be positive")
        self._depth = depth
        self._pages: Stack[str] = Stack()

    def visit(self, page: str) -> None:
        self._pages.push(page)
        if len(self._pages) > self._depth:
            self._trim()

    def _trim(self) -> None:
        # Pop the newest `depth` entries aside, drop the rest, push them back.
        keep: Stack[str] = Stack()
        for _ in range(self._depth):
            keep.push(self._pages.pop())
        self._pages.clear()
        while not keep.is_empty():
            self._pages.push(keep.pop())

    def back(self) -> Tuple[Optional[str], bool]:
        """Leave the current page; returns ``(page, found)``."""
        return self._pages.try_pop()

    def current(self) -> Tuple[Optional[str], bool]:
        return self._pages.try_peek()

    def to_list(self) -> list[str]:
        """Newest first."""
        return self._pages.to_list()

    def __len__(self) -> int:
        return len(self._pages)
