"""
Weighted, undirected graph over an adjacency list.

Each node maps to a :class:`DynamicArray` of ``(neighbor, weight)`` pairs kept
in insertion order. An edge is stored once per endpoint with the same weight;
re-adding an existing pair is a no-op, so the first weight wins.
"""

from __future__ import annotations
import logging
from types import MappingProxyType
from typing import Any, Generic, Iterable, Mapping, NamedTuple, Tuple, TypeVar

from .circular_queue import Queue
from .dynamic_array import DynamicArray
from .errors import InvalidArgumentError
from .hash_map import HashMap
from .hash_set import HashSet
from .priority_queue import PriorityQueue

N = TypeVar("N")

logger = logging.getLogger(__name__)


class Edge(NamedTuple):
    """An undirected edge; in MST output ``u`` is the endpoint reached first."""

    u: Any
    v: Any
    weight: float


def total_weight(edges: Iterable[Edge]) -> float:
    """Sum of edge weights, e.g. the cost of an MST."""
    return sum(e.weight for e in edges)


class WeightedGraph(Generic[N]):
    """Undirected weighted graph supporting BFS and Prim's MST."""

    __slots__ = ("_adj", "_edge_count")

    def __init__(self) -> None:
        self._adj: HashMap[N, DynamicArray[Tuple[N, float]]] = HashMap()
        self._edge_count = 0

    # -----------------------------
    # Construction
    # -----------------------------
    def add_node(self, node: N) -> bool:
        """Create an empty adjacency entry for `node`; idempotent.

        Returns True if the node was new.
        """
        if node is None:
            raise InvalidArgumentError("node label cannot be None")
        if self._adj.contains_key(node):
            return False
        self._adj.add(node, DynamicArray())
        return True

    def add_edge(self, u: N, v: N, weight: float) -> bool:
        """Connect `u` and `v`; returns False if they were already adjacent."""
        self.add_node(u)
        self.add_node(v)
        if self.has_edge(u, v):
            return False
        self._adj[u].append((v, weight))
        if u != v:
            self._adj[v].append((u, weight))
        self._edge_count += 1
        return True

    # -----------------------------
    # Inspection
    # -----------------------------
    def has_node(self, node: N) -> bool:
        return self._adj.contains_key(node)

    def has_edge(self, u: N, v: N) -> bool:
        neighbors, found = self._adj.try_get(u)
        if not found:
            return False
        return neighbors.first_or_default(lambda pair: pair[0] == v) is not None  # type: ignore[union-attr]

    def neighbors(self, node: N) -> DynamicArray[Tuple[N, float]]:
        """Copy of `node`'s ``(neighbor, weight)`` list; empty if unknown."""
        pairs, found = self._adj.try_get(node)
        return DynamicArray(pairs) if found else DynamicArray()

    def nodes(self) -> DynamicArray[N]:
        return self._adj.keys()

    def edges(self) -> DynamicArray[Edge]:
        """Every undirected edge exactly once."""
        out: DynamicArray[Edge] = DynamicArray()
        done: HashSet[N] = HashSet()
        for u, pairs in self._adj.items():
            for v, w in pairs:
                if not done.contains(v):
                    out.append(Edge(u, v, w))
            done.add(u)
        return out

    @property
    def node_count(self) -> int:
        return len(self._adj)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def adjacency(self) -> Mapping[N, Tuple[Tuple[N, float], ...]]:
        """Read-only snapshot: node -> tuple of ``(neighbor, weight)``."""
        return MappingProxyType({n: tuple(pairs) for n, pairs in self._adj.items()})

    # -----------------------------
    # Algorithms
    # -----------------------------
    def bfs(self, start: N) -> DynamicArray[N]:
        """Breadth-first order from `start`.

        Neighbors are visited in adjacency insertion order, so the result is
        deterministic for a fixed insertion history. Unreachable nodes are
        left out; an unknown start yields an empty result.
        """
        order: DynamicArray[N] = DynamicArray()
        if not self.has_node(start):
            return order

        visited: HashSet[N] = HashSet([start])
        queue: Queue[N] = Queue([start])
        while not queue.is_empty():
            current = queue.dequeue()
            order.append(current)
            for neighbor, _ in self._adj[current]:
                if visited.add(neighbor):
                    queue.enqueue(neighbor)
        return order

    def mst(self, start: N) -> DynamicArray[Edge]:
        """Prim's minimum spanning tree grown from `start`.

        Stops once ``node_count - 1`` edges are accepted or the frontier is
        exhausted. When part of the graph is unreachable from `start` the
        result spans only `start`'s component.
        """
        result: DynamicArray[Edge] = DynamicArray()
        if not self.has_node(start):
            return result

        target = self.node_count - 1
        visited: HashSet[N] = HashSet([start])
        frontier: PriorityQueue[Edge] = PriorityQueue()
        for neighbor, weight in self._adj[start]:
            frontier.enqueue(Edge(start, neighbor, weight), weight)

        while len(result) < target:
            edge, found = frontier.try_dequeue()
            if not found:
                break
            if visited.contains(edge.u) and visited.contains(edge.v):
                continue  # would close a cycle
            new_node = edge.v if visited.contains(edge.u) else edge.u
            result.append(edge)
            visited.add(new_node)
            for neighbor, weight in self._adj[new_node]:
                if not visited.contains(neighbor):
                    frontier.enqueue(Edge(new_node, neighbor, weight), weight)

        if len(result) < target:
            logger.warning(
                "MST from %r spans %d of %d nodes; graph is disconnected",
                start, len(result) + 1, self.node_count,
            )
        else:
            logger.debug("MST from %r: %d edges, weight %s", start, len(result), total_weight(result))
        return result

    def __len__(self) -> int:
        return self.node_count

    def __contains__(self, node: N) -> bool:
        return self.has_node(node)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"WeightedGraph(nodes={self.node_count}, edges={self._edge_count})"
