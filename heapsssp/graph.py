"""Directed weighted graph consumed by the shortest-path solver."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Protocol, Tuple, Union

from .exceptions import GraphError, GraphFormatError, InputError

Vertex = int
Weight = Union[int, float]
Edge = Tuple[Vertex, Vertex, Weight]

INF = math.inf


class GraphProvider(Protocol):
    """Anything the solver can search: a vertex count and outgoing edges."""

    n: int

    def neighbors(self, u: Vertex) -> Iterable[Tuple[Vertex, Weight]]:
        """Return the ``(v, w)`` pairs leaving ``u``."""
        ...


def check_weight(u: Vertex, v: Vertex, w: object) -> Weight:
    """Validate a single edge weight and return it unchanged.

    Integer weights stay integers so that distances over integer graphs are
    exact.

    Raises:
        GraphFormatError: If ``w`` is not a number, is NaN or is negative.
    """
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise GraphFormatError(f"non-numeric weight {w!r} on edge ({u}, {v})")
    if w != w:
        raise GraphFormatError(f"NaN weight on edge ({u}, {v})")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on edge ({u}, {v})")
    return w


@dataclass
class Graph:
    """Directed graph with non-negative edge weights.

    Vertices are the integers ``0`` .. ``n-1``. Negative weights are not
    supported: attempting to insert an edge with ``w < 0`` raises
    :class:`~heapsssp.exceptions.GraphFormatError` that cites the offending
    edge. Once :meth:`freeze` has been called the graph is read-only, which is
    how loaders hand graphs to the solver.

    Attributes:
        n: Number of vertices.
        adj: Outgoing adjacency lists of ``(v, w)`` pairs.
    """

    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n <= 0:
            raise InputError("Graph.n must be a positive integer.")
        self.adj: List[List[Tuple[Vertex, Weight]]] = [[] for _ in range(self.n)]
        self._frozen = False

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> None:
        """Add a directed edge from ``u`` to ``v``.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Non-negative edge weight.

        Raises:
            GraphError: If the graph has been frozen.
            InputError: If ``u`` or ``v`` are out of range.
            GraphFormatError: If ``w`` is negative or not a number.

        Examples:
            ```python
            >>> g = Graph(2)
            >>> g.add_edge(0, 1, 5)
            >>> g.adj
            [[(1, 5)], []]
            ```
        """
        if self._frozen:
            raise GraphError("graph is frozen; edges cannot be added")
        if not (0 <= u < self.n and 0 <= v < self.n):
            raise InputError(f"edge ({u}, {v}): vertex ids must be in [0, {self.n}).")
        self.adj[u].append((int(v), check_weight(u, v, w)))

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "Graph":
        """Create a graph from an iterable of ``(u, v, w)`` tuples."""
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(int(u), int(v), w)
        return g

    def freeze(self) -> "Graph":
        """Make the graph read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def neighbors(self, u: Vertex) -> List[Tuple[Vertex, Weight]]:
        """Return the outgoing ``(v, w)`` pairs of ``u``."""
        return self.adj[u]

    def out_degree(self, u: Vertex) -> int:
        """Return the out-degree of vertex ``u``."""
        return len(self.adj[u])

    def edge_count(self) -> int:
        return sum(len(lst) for lst in self.adj)

    def edges(self) -> Iterator[Edge]:
        """Yield every edge as ``(u, v, w)`` in adjacency order."""
        for u in range(self.n):
            for v, w in self.adj[u]:
                yield u, v, w


__all__ = ["Graph", "GraphProvider", "Vertex", "Weight", "Edge", "INF", "check_weight"]
