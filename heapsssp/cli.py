"""Command-line interface for running shortest-path queries."""

from __future__ import annotations

import argparse
import json
import sys
import time
import traceback
from typing import Any, Dict, List, Optional

from .exceptions import (
    AlgorithmError,
    ConfigError,
    GraphFormatError,
    HeapSSSPError,
    InputError,
    NotSupportedError,
)
from .frontier import queue_names
from .generator import generate_graph
from .graph import INF, Weight
from .io import FORMATS, read_graph, write_graph
from .logger import StdLogger
from .solver import DijkstraSolver, SolverConfig

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70

EXAMPLE_CSV = """# u,v,w
0,1,5
0,2,2
2,1,1
"""


def _jsonable(distances: List[Weight]) -> List[Optional[Weight]]:
    return [None if d == INF else d for d in distances]


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``heapsssp`` command-line tool."""
    examples = (
        "Examples:\n"
        "  heapsssp --edges graph.csv --source 0\n"
        "  heapsssp --edges USA-road-d.NY.gr --queue fibonacci --target 42\n"
        "  heapsssp --random --n 100 --m 500 --queue both\n"
        "  heapsssp --edges USA-road-d.NY.gr --convert-to graph.txt\n"
    )
    p = argparse.ArgumentParser(
        prog="heapsssp",
        description="Dijkstra single-source shortest paths with a choice of priority queue",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to graph file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Graph file format (auto-detected from extension)",
    )
    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument("--source", type=int, default=0, help="Source vertex id (0-based)")
    p.add_argument("--target", type=int, default=None, help="Target vertex id for path output")
    p.add_argument(
        "--queue",
        choices=queue_names() + ["both"],
        default="binary",
        help="Priority queue backend; 'both' runs every backend and cross-checks",
    )
    p.add_argument(
        "--convert-to",
        type=str,
        default=None,
        help="Write the loaded graph to this path (format from extension) and exit",
    )

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

        if args.random:
            G = generate_graph(args.n, args.m, seed=args.seed)
        else:
            G = read_graph(args.edges, args.format)
        m = G.edge_count()

        if args.convert_to:
            write_graph(G, args.convert_to)
            logger.info("converted", n=G.n, m=m, dst=args.convert_to)
            return EXIT_OK

        if args.target is not None and not (0 <= args.target < G.n):
            raise InputError(f"target must be a vertex id in [0, {G.n})")

        queues = queue_names() if args.queue == "both" else [args.queue]
        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.n} m={m} queues={queues} source={args.source} seed={args.seed}\n"
            )

        out: Dict[str, Any] = {"n": G.n, "m": m, "source": args.source, "queues": queues}
        runs: List[DijkstraSolver] = []
        distances: List[Weight] = []
        for q in queues:
            solver = DijkstraSolver(G, args.source, SolverConfig(queue=q), logger=logger)
            t0 = time.perf_counter()
            res = solver.solve()
            wall_ms = (time.perf_counter() - t0) * 1000.0
            logger.info("run", queue=q, wall_ms=round(wall_ms, 3), **solver.summary())
            if not runs:
                distances = res.distances
            elif distances != res.distances:
                raise AlgorithmError(f"backend {q!r} disagrees with {queues[0]!r}")
            runs.append(solver)

        out["distances"] = _jsonable(distances)
        if args.target is not None:
            out["target"] = args.target
            out["path"] = runs[0].path(args.target)
        if not args.log_json:
            print(json.dumps(out))
        return EXIT_OK

    except (InputError, ConfigError, GraphFormatError, NotSupportedError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except HeapSSSPError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except Exception as exc:  # pragma: no cover - unexpected
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
