"""Public package exports for :mod:`heapsssp`."""

from __future__ import annotations

from .binary_heap import IndexedBinaryHeap
from .dijkstra import dijkstra_reference
from .exceptions import (
    AlgorithmError,
    CapacityError,
    ConfigError,
    DuplicateEntryError,
    EmptyQueueError,
    GraphError,
    GraphFormatError,
    HeapOverflowError,
    HeapSSSPError,
    InputError,
    KeyIncreaseError,
    NotSupportedError,
    QueueError,
    StaleHandleError,
)
from .fibonacci_heap import FibNode, FibonacciHeap
from .frontier import EMPTY, PriorityQueue, QueueEntry, make_queue, queue_names, register_queue
from .graph import INF, Graph, GraphProvider
from .graph_numpy import CSRGraph
from .io import convert_graph, from_networkx, read_graph, to_networkx, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .path import reconstruct_path
from .solver import DijkstraSolver, SolverConfig, SolverMetrics, SSSPResult, shortest_paths

__version__ = "0.1.0"

__all__ = [
    "INF",
    "EMPTY",
    "Graph",
    "GraphProvider",
    "CSRGraph",
    "PriorityQueue",
    "QueueEntry",
    "IndexedBinaryHeap",
    "FibonacciHeap",
    "FibNode",
    "make_queue",
    "queue_names",
    "register_queue",
    "DijkstraSolver",
    "SolverConfig",
    "SolverMetrics",
    "SSSPResult",
    "shortest_paths",
    "dijkstra_reference",
    "reconstruct_path",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "read_graph",
    "write_graph",
    "convert_graph",
    "to_networkx",
    "from_networkx",
    "HeapSSSPError",
    "InputError",
    "GraphFormatError",
    "GraphError",
    "ConfigError",
    "NotSupportedError",
    "QueueError",
    "EmptyQueueError",
    "CapacityError",
    "HeapOverflowError",
    "DuplicateEntryError",
    "KeyIncreaseError",
    "StaleHandleError",
    "AlgorithmError",
]
