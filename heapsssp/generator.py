"""Seeded random graph families for tests and benchmarks.

``erdos_renyi``
    Uniformly sampled directed edges; the average case.
``dag``
    Edges only from lower to higher ids; every source reaches a suffix.
``grid``
    Near-square 2D grid with edges both ways between neighbours; many
    equal-length paths, a large frontier and lots of decrease-keys.

Weights are non-negative integers drawn from ``uniform`` (``[w_min,
w_max]``), ``small_int`` (at most 11 distinct values, many ties) or
``exp`` (mostly small, occasionally large).
"""

from __future__ import annotations

import math
import random
from typing import List, Literal, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import Graph

WeightDist = Literal["uniform", "small_int", "exp"]
GraphType = Literal["erdos_renyi", "dag", "grid"]

GRAPH_TYPES = ("erdos_renyi", "dag", "grid")


def _sample_weight(rng: random.Random, dist: str, w_min: int, w_max: int) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)
    if dist == "small_int":
        return rng.randint(w_min, min(w_max, w_min + 10))
    if dist == "exp":
        if w_max == w_min:
            return w_min
        lam = 1.0 / max(1.0, (w_max - w_min) / 4.0)
        return int(w_min + min(w_max - w_min, round(rng.expovariate(lam))))
    raise ConfigError(f"unknown weight distribution: {dist}")


def generate_graph(
    n: int,
    m: Optional[int] = None,
    *,
    graph_type: GraphType = "erdos_renyi",
    weight_dist: WeightDist = "uniform",
    w_min: int = 1,
    w_max: int = 100,
    seed: Optional[int] = 0,
    allow_self_loops: bool = False,
    ensure_weakly_connected: bool = False,
) -> Graph:
    """Generate a frozen directed graph with non-negative integer weights.

    Args:
        n: Number of vertices.
        m: Target number of distinct edges; defaults to ``4 * n``. Capped at
            the number of possible edges. For grids, extra random edges are
            added on top of the lattice until ``m`` is reached.
        graph_type: Graph family, one of :data:`GRAPH_TYPES`.
        weight_dist: Weight distribution.
        w_min: Smallest weight (``>= 0``).
        w_max: Largest weight (``>= w_min``).
        seed: Seed for :class:`random.Random`.
        allow_self_loops: Permit ``u -> u`` edges.
        ensure_weakly_connected: Add a backbone chain ``i -> i+1`` first so
            vertex 0 reaches every vertex.

    Raises:
        ConfigError: On invalid parameters.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0 for Dijkstra-safe graphs.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")
    if m is not None and m < 0:
        raise ConfigError("m must be >= 0.")
    if graph_type not in GRAPH_TYPES:
        raise ConfigError(f"unknown graph_type: {graph_type}")

    rng = random.Random(seed)
    seen: Set[Tuple[int, int]] = set()
    edges: List[Tuple[int, int, int]] = []

    def add_edge(u: int, v: int) -> None:
        if (u == v and not allow_self_loops) or (u, v) in seen:
            return
        seen.add((u, v))
        edges.append((u, v, _sample_weight(rng, weight_dist, w_min, w_max)))

    if ensure_weakly_connected:
        for i in range(n - 1):
            add_edge(i, i + 1)

    if graph_type == "grid":
        rows = max(1, math.isqrt(n))
        cols = (n + rows - 1) // rows
        for u in range(n):
            r, c = divmod(u, cols)
            if c + 1 < cols and u + 1 < n:
                add_edge(u, u + 1)
                add_edge(u + 1, u)
            if r + 1 < rows and u + cols < n:
                add_edge(u, u + cols)
                add_edge(u + cols, u)

    max_edges = n * n if allow_self_loops else n * (n - 1)
    if graph_type == "dag":
        max_edges = n * (n - 1) // 2 + (n if allow_self_loops else 0)
    target = min(4 * n if m is None else m, max_edges)
    if graph_type == "grid" and m is None:
        target = len(edges)

    while len(edges) < target:
        u = rng.randrange(n)
        v = rng.randrange(n)
        if graph_type == "dag" and u > v:
            u, v = v, u
        add_edge(u, v)

    return Graph.from_edges(n, edges).freeze()


__all__ = ["GRAPH_TYPES", "generate_graph"]
