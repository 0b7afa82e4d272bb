from .errors import (
    DataStructureError,
    EmptyCollectionError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    KeyNotFoundError,
)
from .dynamic_array import DynamicArray
from .linked_list import DoublyLinkedList
from .stack import Stack
from .circular_queue import Queue
from .hash_map import HashMap
from .hash_set import HashSet
from .ordered_map import AVLTreeMap, OrderedMap
from .priority_queue import PriorityQueue
from .graph import Edge, WeightedGraph, total_weight

__all__ = [
    "DataStructureError",
    "EmptyCollectionError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "KeyNotFoundError",
    "DynamicArray",
    "DoublyLinkedList",
    "Stack",
    "Queue",
    "HashMap",
    "HashSet",
    "OrderedMap",
    "AVLTreeMap",
    "PriorityQueue",
    "Edge",
    "WeightedGraph",
    "total_weight",
]
