"""Reference Dijkstra implementation used in tests and benchmarks."""

from __future__ import annotations

import heapq
from typing import List, Optional, Tuple

from .exceptions import InputError
from .graph import INF, GraphProvider, Vertex, Weight
from .solver import SSSPResult


def dijkstra_reference(G: GraphProvider, source: Vertex) -> SSSPResult:
    """Run textbook Dijkstra with :mod:`heapq` and lazy deletion.

    Stale heap entries are skipped on pop instead of being decreased in
    place, so this shares no code with the queue backends and serves as an
    oracle for them.

    Args:
        G: Input graph with non-negative edge weights.
        source: Source vertex identifier.

    Returns:
        Distances and predecessors from running Dijkstra.
    """
    n = G.n
    if not (0 <= source < n):
        raise InputError(f"source must be a vertex id in [0, {n}), got {source!r}")
    dist: List[Weight] = [INF] * n
    pred: List[Optional[Vertex]] = [None] * n
    done = [False] * n
    dist[source] = 0
    pq: List[Tuple[Weight, Vertex]] = [(0, source)]
    while pq:
        d, u = heapq.heappop(pq)
        if done[u] or d != dist[u]:
            continue
        done[u] = True
        for v, w in G.neighbors(u):
            nd = d + w
            if nd < dist[v]:
                dist[v] = nd
                pred[v] = u
                heapq.heappush(pq, (nd, v))
    return SSSPResult(distances=dist, predecessors=pred)


__all__ = ["dijkstra_reference"]
