"""Priority-queue protocol and backend registry used by the solver."""

from __future__ import annotations

from typing import Any, Callable, Dict, NamedTuple, Protocol

from .exceptions import ConfigError
from .graph import INF, Vertex, Weight


class QueueEntry(NamedTuple):
    """A vertex together with the key it was extracted with."""

    vertex: Vertex
    key: Weight

    def __bool__(self) -> bool:
        return self is not EMPTY


#: Result of extracting from an empty :class:`IndexedBinaryHeap`. Compare
#: with ``is``; it is the only falsy :class:`QueueEntry`.
EMPTY = QueueEntry(-1, INF)


class PriorityQueue(Protocol):
    """Protocol for the queue backends consumed by the solver.

    The handle returned by :meth:`insert` is whatever :meth:`decrease_key`
    expects back: the vertex id for the binary heap, a node for the
    Fibonacci heap.
    """

    def insert(self, vertex: Vertex, key: Weight) -> Any:
        """Add ``vertex`` with priority ``key`` and return its handle."""
        ...

    def extract_min(self) -> QueueEntry:
        """Remove and return the entry with the smallest key."""
        ...

    def decrease_key(self, handle: Any, new_key: Weight) -> Any:
        """Lower the key of the entry behind ``handle``."""
        ...

    def is_empty(self) -> bool:
        ...

    def __len__(self) -> int:
        ...


QueueFactory = Callable[[int], PriorityQueue]

_BACKENDS: Dict[str, QueueFactory] = {}


def register_queue(name: str, factory: QueueFactory) -> None:
    """Make a queue backend selectable by ``name``.

    Args:
        name: Selector used by :class:`~heapsssp.solver.SolverConfig`.
        factory: Callable taking the vertex count and returning an empty
            queue sized for it.
    """
    _BACKENDS[name] = factory


def queue_names() -> list[str]:
    return sorted(_BACKENDS)


def make_queue(name: str, n: int) -> PriorityQueue:
    """Create an empty queue of backend ``name`` for a graph of ``n`` vertices.

    Raises:
        ConfigError: If no backend is registered under ``name``.
    """
    try:
        factory = _BACKENDS[name]
    except KeyError:
        raise ConfigError(
            f"unknown queue backend {name!r}; expected one of {queue_names()}"
        ) from None
    return factory(n)


__all__ = [
    "EMPTY",
    "PriorityQueue",
    "QueueEntry",
    "QueueFactory",
    "make_queue",
    "queue_names",
    "register_queue",
]
