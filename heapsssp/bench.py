"""Benchmark harness comparing the priority-queue backends.

Loads a graph (or generates one), draws random source vertices and times
one Dijkstra query per source for each backend, verifying that all backends
agree on every distance.

Example:
```bash
python -m heapsssp.bench --edges USA-road-d.NY.gr --queries 100
python -m heapsssp.bench --n 10000 --m 40000 --queries 20 --check --out-csv out.csv
```
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .dijkstra import dijkstra_reference
from .exceptions import AlgorithmError, HeapSSSPError
from .frontier import queue_names
from .generator import GRAPH_TYPES, generate_graph
from .graph import GraphProvider, Vertex, Weight
from .io import FORMATS, read_graph
from .logger import Logger, NoopLogger, StdLogger
from .solver import DijkstraSolver, SolverConfig


@dataclass
class QueryTiming:
    """Timing of a single query."""

    queue: str
    source: Vertex
    wall_ms: float
    reached: int
    counters: Dict[str, int]


@dataclass
class BenchReport:
    """All timings of a benchmark run, grouped by backend."""

    n: int
    m: int
    sources: List[Vertex]
    timings: Dict[str, List[QueryTiming]]

    def total_ms(self, queue: str) -> float:
        return sum(t.wall_ms for t in self.timings[queue])

    def mean_ms(self, queue: str) -> float:
        return statistics.mean(t.wall_ms for t in self.timings[queue])

    def median_ms(self, queue: str) -> float:
        return statistics.median(t.wall_ms for t in self.timings[queue])


def pick_sources(n: int, count: int, seed: Optional[int] = None) -> List[Vertex]:
    """Return ``count`` source ids drawn uniformly from ``[0, n)``."""
    rnd = random.Random(seed)
    return [rnd.randrange(n) for _ in range(count)]


def _diff(a: Sequence[Weight], b: Sequence[Weight]) -> Optional[Vertex]:
    for v, (x, y) in enumerate(zip(a, b)):
        if x != y:
            return v
    return None


def run_benchmark(
    G: GraphProvider,
    sources: Sequence[Vertex],
    queues: Sequence[str] = ("binary", "fibonacci"),
    check: bool = False,
    logger: Logger | None = None,
) -> BenchReport:
    """Time one query per source and backend.

    Args:
        G: Graph to search.
        sources: Source vertices, one query each.
        queues: Backend names to compare.
        check: Also compare every query against :func:`dijkstra_reference`.
        logger: Optional event logger.

    Returns:
        Per-query timings for each backend.

    Raises:
        AlgorithmError: If two backends (or a backend and the reference)
            disagree on any distance.
    """
    logger = logger or NoopLogger()
    timings: Dict[str, List[QueryTiming]] = {q: [] for q in queues}
    for i, s in enumerate(sources):
        baseline: Optional[List[Weight]] = None
        if check:
            baseline = dijkstra_reference(G, s).distances
        for q in queues:
            solver = DijkstraSolver(G, s, SolverConfig(queue=q))
            t0 = time.perf_counter()
            res = solver.solve()
            wall_ms = (time.perf_counter() - t0) * 1000.0
            if baseline is None:
                baseline = res.distances
            else:
                bad = _diff(baseline, res.distances)
                if bad is not None:
                    raise AlgorithmError(
                        f"backend {q!r} disagrees at vertex {bad} for source {s}: "
                        f"{res.distances[bad]} != {baseline[bad]}"
                    )
            timings[q].append(
                QueryTiming(
                    queue=q,
                    source=s,
                    wall_ms=wall_ms,
                    reached=len(res.reachable()),
                    counters=solver.summary(),
                )
            )
        if (i + 1) % 100 == 0:
            logger.info("progress", done=i + 1, total=len(sources))

    m = G.edge_count() if hasattr(G, "edge_count") else sum(
        len(list(G.neighbors(u))) for u in range(G.n)
    )
    return BenchReport(n=G.n, m=m, sources=list(sources), timings=timings)


def _write_csv(path: Path, report: BenchReport) -> None:
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(
            ["queue", "source", "wall_ms", "reached", "edges_relaxed", "decrease_keys", "max_queue_size"]
        )
        for q, rows in report.timings.items():
            for t in rows:
                writer.writerow(
                    [
                        q,
                        t.source,
                        f"{t.wall_ms:.6f}",
                        t.reached,
                        t.counters["edges_relaxed"],
                        t.counters["decrease_keys"],
                        t.counters["max_queue_size"],
                    ]
                )


def main(argv: List[str] | None = None) -> int:
    """Run the benchmark from the command line.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(
        prog="python -m heapsssp.bench",
        description="Time Dijkstra queries per priority-queue backend",
    )
    parser.add_argument("--edges", type=str, help="Graph file (otherwise a random graph is used)")
    parser.add_argument("--format", choices=FORMATS, default=None, help="Graph file format")
    parser.add_argument("--n", type=int, default=1000, help="Vertices (random graph)")
    parser.add_argument("--m", type=int, default=4000, help="Edges (random graph)")
    parser.add_argument("--graph-type", choices=GRAPH_TYPES, default="erdos_renyi")
    parser.add_argument("--seed", type=int, default=0, help="Seed for graph and sources")
    parser.add_argument("--queries", type=int, default=10, help="Number of random sources")
    parser.add_argument(
        "--queues",
        nargs="+",
        choices=queue_names(),
        default=queue_names(),
        help="Backends to compare",
    )
    parser.add_argument("--check", action="store_true", help="Verify against a heapq reference")
    parser.add_argument("--csr", action="store_true", help="Load the graph into NumPy CSR arrays")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-query CSV data")
    parser.add_argument("--log-level", choices=["debug", "info", "warning"], default="info")
    args = parser.parse_args(argv)

    if args.queries <= 0:
        parser.error("--queries must be a positive integer")

    logger = StdLogger(level=args.log_level)
    try:
        t0 = time.perf_counter()
        if args.edges:
            G = read_graph(args.edges, args.format, csr=args.csr)
        else:
            G = generate_graph(args.n, args.m, graph_type=args.graph_type, seed=args.seed)
            if args.csr:
                from .graph_numpy import CSRGraph

                G = CSRGraph.from_graph(G)
        logger.info("graph_loaded", n=G.n, m=G.edge_count(), ms=round((time.perf_counter() - t0) * 1000.0, 3))

        sources = pick_sources(G.n, args.queries, seed=args.seed)
        report = run_benchmark(G, sources, queues=args.queues, check=args.check, logger=logger)
    except HeapSSSPError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 64 if isinstance(exc, ValueError) else 70

    if args.out_csv:
        _write_csv(args.out_csv, report)

    print(f"{'queue':>10} {'queries':>8} {'total_s':>10} {'mean_ms':>10} {'median_ms':>10}")
    for q in args.queues:
        print(
            f"{q:>10} {len(report.timings[q]):8d} {report.total_ms(q) / 1000.0:10.4f}"
            f" {report.mean_ms(q):10.4f} {report.median_ms(q):10.4f}"
        )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
