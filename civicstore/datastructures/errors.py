"""
Exceptions raised by the civicstore containers.

Each error kind also derives from the builtin exception a caller would
naturally catch (``IndexError``, ``KeyError``, ``ValueError``), so code written
against plain Python containers keeps working.
"""


class DataStructureError(Exception):
    """Base class for every container error."""


class EmptyCollectionError(DataStructureError, IndexError):
    """
    Raised by pop/dequeue/peek on an empty Stack, Queue or PriorityQueue.

    The non-throwing ``try_*`` variants return ``(None, False)`` instead.
    """

    def __init__(self, container: str, operation: str):
        self.container = container
        self.operation = operation
        super().__init__(f"{operation} from empty {container}")


class IndexOutOfRangeError(DataStructureError, IndexError):
    """Raised when a sequence index falls outside ``[0, size)``."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"index {index} out of range for size {size}")


class KeyNotFoundError(DataStructureError, KeyError):
    """Raised by direct keyed access (``m[key]``) on an absent key."""

    def __init__(self, key):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"key {self.key!r} not found"


class InvalidArgumentError(DataStructureError, ValueError):
    """Raised when a required key/item is ``None`` or an argument is invalid."""
