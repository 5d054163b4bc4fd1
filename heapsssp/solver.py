"""Dijkstra's algorithm over interchangeable priority-queue backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

# Importing the backends registers them with the frontier registry.
from . import binary_heap as _binary_heap  # noqa: F401
from . import fibonacci_heap as _fibonacci_heap  # noqa: F401
from .exceptions import AlgorithmError, ConfigError, InputError
from .frontier import PriorityQueue, make_queue, queue_names
from .graph import INF, Graph, GraphProvider, Vertex, Weight
from .graph_numpy import CSRGraph
from .logger import Logger, NoopLogger
from .path import reconstruct_path


@dataclass(frozen=True)
class SSSPResult:
    """Distances and predecessors produced by the solver.

    ``distances[v]`` is :data:`~heapsssp.graph.INF` for vertices that are not
    reachable from the source; ``predecessors[v]`` is then ``None``.
    """

    distances: List[Weight]
    predecessors: List[Optional[Vertex]]

    def as_dict(self) -> Dict[Vertex, Weight]:
        return dict(enumerate(self.distances))

    def reachable(self) -> List[Vertex]:
        return [v for v, d in enumerate(self.distances) if d != INF]


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    n: int
    m: int
    queue: str
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for the solver.

    Attributes:
        queue: Name of the priority-queue backend, ``"binary"`` (indexed
            binary heap, every vertex inserted up front) or ``"fibonacci"``
            (Fibonacci heap, vertices inserted when first reached).
        validate_weights: Scan providers that do not validate their own
            edges for negative weights before searching.
    """

    queue: str = "binary"
    validate_weights: bool = True

    def __post_init__(self) -> None:
        if self.queue not in queue_names():
            raise ConfigError(f"unknown queue backend {self.queue!r}; expected one of {queue_names()}")


_COUNTERS = ("edges_relaxed", "inserts", "extracts", "decrease_keys", "max_queue_size")


class DijkstraSolver:
    """Single-source shortest paths on a graph with non-negative weights.

    One solver instance owns one query: its queue, its handle map and its
    distance array. The graph is only read, so several solvers may share it.

    Args:
        G: Graph provider (:class:`~heapsssp.graph.Graph`,
            :class:`~heapsssp.graph_numpy.CSRGraph` or anything with ``n`` and
            ``neighbors(u)``).
        source: Source vertex identifier in ``[0, G.n)``.
        config: Optional solver configuration.
        logger: Optional event logger.

    Raises:
        InputError: If ``source`` is not a valid vertex id, or if weight
            validation finds a negative or non-numeric weight.
    """

    def __init__(
        self,
        G: GraphProvider,
        source: Vertex,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        if isinstance(source, bool) or not isinstance(source, int) or not (0 <= source < G.n):
            raise InputError(f"source must be a vertex id in [0, {G.n}), got {source!r}")
        self.G = G
        self.source = source
        self.cfg = config or SolverConfig()
        self.logger = logger or NoopLogger()
        if self.cfg.validate_weights and not isinstance(G, (Graph, CSRGraph)):
            self._validate_provider()

        self.counters: Dict[str, int] = dict.fromkeys(_COUNTERS, 0)
        self._result: Optional[SSSPResult] = None

    def _validate_provider(self) -> None:
        for u in range(self.G.n):
            for v, w in self.G.neighbors(u):
                if isinstance(w, bool) or not isinstance(w, (int, float)) or not w >= 0:
                    raise InputError(f"invalid weight {w!r} on edge ({u}, {v})")

    # ---------- search ----------------------------------------------------

    def _seed(self, pq: PriorityQueue, dist: List[Weight], handles: List[Any]) -> None:
        """Put the initial entries into ``pq``.

        Backends flagged ``preload`` get every vertex now (unreached ones with
        key ``INF``) and are only ever decreased afterwards; the others start
        from the source alone and grow as vertices are discovered.
        """
        if getattr(pq, "preload", False):
            for v in range(self.G.n):
                handles[v] = pq.insert(v, dist[v])
            self.counters["inserts"] += self.G.n
        else:
            handles[self.source] = pq.insert(self.source, dist[self.source])
            self.counters["inserts"] += 1

    def solve(self) -> SSSPResult:
        """Run Dijkstra's algorithm from the configured source.

        Returns:
            Final distances and predecessors.

        Raises:
            AlgorithmError: If a finalized vertex would be improved again,
                which only happens with negative weights.
        """
        n = self.G.n
        dist: List[Weight] = [INF] * n
        pred: List[Optional[Vertex]] = [None] * n
        settled = [False] * n
        handles: List[Any] = [None] * n
        dist[self.source] = 0
        # Counters describe the most recent query only.
        self.counters = counters = dict.fromkeys(_COUNTERS, 0)

        self.logger.debug("solve_start", n=n, source=self.source, queue=self.cfg.queue)
        pq = make_queue(self.cfg.queue, n)
        try:
            self._seed(pq, dist, handles)
            counters["max_queue_size"] = len(pq)

            while not pq.is_empty():
                u, d = pq.extract_min()
                counters["extracts"] += 1
                handles[u] = None
                settled[u] = True
                if d == INF:
                    # Everything still queued is unreachable.
                    break
                for v, w in self.G.neighbors(u):
                    counters["edges_relaxed"] += 1
                    nd = d + w
                    if nd < dist[v]:
                        if settled[v]:
                            raise AlgorithmError(f"vertex {v} improved after it was finalized")
                        dist[v] = nd
                        pred[v] = u
                        h = handles[v]
                        if h is None:
                            handles[v] = pq.insert(v, nd)
                            counters["inserts"] += 1
                            if len(pq) > counters["max_queue_size"]:
                                counters["max_queue_size"] = len(pq)
                        else:
                            pq.decrease_key(h, nd)
                            counters["decrease_keys"] += 1
        finally:
            release = getattr(pq, "destroy", None)
            if release is not None:
                release()

        self._result = SSSPResult(distances=dist, predecessors=pred)
        self.logger.debug(
            "solve_done",
            source=self.source,
            queue=self.cfg.queue,
            reached=n - dist.count(INF),
            **counters,
        )
        return self._result

    def path(self, target: Vertex) -> List[Vertex]:
        """Return a shortest path from the source to ``target``.

        Returns:
            Vertex ids from source to target (inclusive), or an empty list if
            ``target`` is unreachable. ``solve`` must be called beforehand.
        """
        if self._result is None:
            raise AlgorithmError("Call solve() before requesting paths.")
        return reconstruct_path(self._result.predecessors, self.source, target)

    # ---------- counters --------------------------------------------------

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> SolverMetrics:
        """Return performance metrics for the most recent run.

        Args:
            wall_ms: Wall-clock time spent in :meth:`solve` in milliseconds.
            peak_mib: Optional peak memory usage in MiB.
        """
        edge_count = getattr(self.G, "edge_count", None)
        if edge_count is not None:
            m = edge_count()
        else:
            m = sum(len(list(self.G.neighbors(u))) for u in range(self.G.n))
        return SolverMetrics(
            n=self.G.n,
            m=m,
            queue=self.cfg.queue,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def shortest_paths(
    G: GraphProvider,
    source: Vertex,
    queue: str = "binary",
    logger: Logger | None = None,
) -> List[Weight]:
    """Return the distance from ``source`` to every vertex of ``G``.

    Args:
        G: Graph provider with non-negative weights.
        source: Source vertex identifier.
        queue: Priority-queue backend name.
        logger: Optional event logger.

    Returns:
        List indexed by vertex id; unreachable vertices hold ``INF``.

    Examples:
        ```python
        >>> g = Graph.from_edges(3, [(0, 1, 5), (0, 2, 2), (2, 1, 1)])
        >>> shortest_paths(g, 0, queue="fibonacci")
        [0, 3, 2]
        ```
    """
    solver = DijkstraSolver(G, source, SolverConfig(queue=queue), logger=logger)
    return solver.solve().distances


__all__ = [
    "DijkstraSolver",
    "SSSPResult",
    "SolverConfig",
    "SolverMetrics",
    "shortest_paths",
]
