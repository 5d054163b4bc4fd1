"""NumPy-backed compressed sparse row (CSR) graph representation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError
from .graph import Edge, Graph, Vertex, Weight


def _check_weights(src: np.ndarray, dst: np.ndarray, w: np.ndarray) -> None:
    """Raise :class:`GraphFormatError` for the first NaN or negative weight."""
    if w.dtype.kind == "f":
        nan = np.flatnonzero(np.isnan(w))
        if nan.size:
            i = int(nan[0])
            raise GraphFormatError(f"NaN weight on edge ({src[i]}, {dst[i]})")
    neg = np.flatnonzero(w < 0)
    if neg.size:
        i = int(neg[0])
        raise GraphFormatError(f"negative weight {w[i]} on edge ({src[i]}, {dst[i]})")


def _as_weights(values: object) -> np.ndarray:
    w = np.asarray(values)
    if w.size and w.dtype.kind not in "iuf":
        raise GraphFormatError(f"non-numeric weights of dtype {w.dtype}")
    return w.astype(np.int64 if w.dtype.kind in "iu" else np.float64)


@dataclass(frozen=True, eq=False)
class CSRGraph:
    """Read-only directed graph stored as three NumPy arrays.

    The outgoing edges of ``u`` are ``targets[offsets[u]:offsets[u + 1]]``
    with the matching ``weights``. Within a vertex, edges keep the order in
    which they were supplied. Integer weights are stored as ``int64`` and
    anything else as ``float64``.

    The arrays may be passed directly (any array-like); the constructor
    checks that ``offsets`` runs from 0 to the edge count without
    decreasing and that every target is a vertex id, raising
    :class:`~heapsssp.exceptions.InputError` otherwise. Negative or NaN
    weights trigger :class:`~heapsssp.exceptions.GraphFormatError` citing
    the first offending edge.
    """

    n: int
    offsets: npt.NDArray[np.int64]
    targets: npt.NDArray[np.int64]
    weights: npt.NDArray[np.generic]

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int) or self.n <= 0:
            raise InputError("Graph.n must be a positive integer.")
        offsets = np.asarray(self.offsets, dtype=np.int64)
        targets = np.asarray(self.targets, dtype=np.int64)
        weights = _as_weights(self.weights)
        if offsets.shape != (self.n + 1,):
            raise InputError("offsets must have length n + 1.")
        if targets.ndim != 1 or targets.shape != weights.shape:
            raise InputError("targets and weights must be 1-D arrays of the same length.")
        if offsets[0] != 0 or offsets[-1] != targets.shape[0] or np.any(np.diff(offsets) < 0):
            raise InputError("offsets must be non-decreasing from 0 to the edge count.")
        bad = np.flatnonzero((targets < 0) | (targets >= self.n))
        if bad.size:
            i = int(bad[0])
            raise InputError(f"target {targets[i]} at position {i}: vertex ids must be in [0, {self.n}).")
        src = np.repeat(np.arange(self.n, dtype=np.int64), np.diff(offsets))
        _check_weights(src, targets, weights)
        for name, arr in (("offsets", offsets), ("targets", targets), ("weights", weights)):
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "CSRGraph":
        """Construct a graph from an iterable of ``(u, v, w)`` edges."""
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InputError("Graph.n must be a positive integer.")
        triples = list(edges)
        if not triples:
            return cls(
                n,
                np.zeros(n + 1, dtype=np.int64),
                np.zeros(0, dtype=np.int64),
                np.zeros(0, dtype=np.int64),
            )
        src = np.fromiter((int(u) for u, _, _ in triples), dtype=np.int64, count=len(triples))
        dst = np.fromiter((int(v) for _, v, _ in triples), dtype=np.int64, count=len(triples))
        w = _as_weights([t[2] for t in triples])

        bad = np.flatnonzero((src < 0) | (src >= n) | (dst < 0) | (dst >= n))
        if bad.size:
            i = int(bad[0])
            raise InputError(f"edge ({src[i]}, {dst[i]}): vertex ids must be in [0, {n}).")
        _check_weights(src, dst, w)

        order = np.argsort(src, kind="stable")
        counts = np.bincount(src, minlength=n)
        offsets = np.zeros(n + 1, dtype=np.int64)
        np.cumsum(counts, out=offsets[1:])
        return cls(n, offsets, dst[order], w[order])

    @classmethod
    def from_graph(cls, G: Graph) -> "CSRGraph":
        """Return a CSR copy of a list-based :class:`~heapsssp.graph.Graph`."""
        return cls.from_edges(G.n, G.edges())

    def neighbors(self, u: Vertex) -> List[Tuple[Vertex, Weight]]:
        """Return the outgoing ``(v, w)`` pairs of ``u`` as Python scalars."""
        a = int(self.offsets[u])
        b = int(self.offsets[u + 1])
        return list(zip(self.targets[a:b].tolist(), self.weights[a:b].tolist()))

    def out_degree(self, u: Vertex) -> int:
        return int(self.offsets[u + 1] - self.offsets[u])

    def edge_count(self) -> int:
        return int(self.targets.shape[0])

    def to_graph(self) -> Graph:
        """Return a frozen :class:`~heapsssp.graph.Graph` copy of this graph."""
        g = Graph(self.n)
        for u in range(self.n):
            for v, w in self.neighbors(u):
                g.add_edge(u, v, w)
        return g.freeze()


__all__ = ["CSRGraph"]
