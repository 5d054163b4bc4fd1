"""Custom exception types used across :mod:`heapsssp`."""

from __future__ import annotations


class HeapSSSPError(Exception):
    """Base class for all package-specific errors."""


class InputError(HeapSSSPError, ValueError):
    """Raised for invalid user input such as an out-of-range source."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails or an edge is malformed."""


class GraphError(InputError):
    """Raised when a graph is used incorrectly, e.g. mutated after loading."""


class ConfigError(HeapSSSPError, ValueError):
    """Raised for invalid configuration options."""


class NotSupportedError(HeapSSSPError):
    """Raised when requesting a feature that is not implemented."""


class QueueError(HeapSSSPError):
    """Base class for priority-queue contract violations."""


class EmptyQueueError(QueueError, IndexError):
    """Raised when extracting from an empty queue."""


class CapacityError(QueueError, ValueError):
    """Raised when a queue is created with a negative capacity."""


class HeapOverflowError(QueueError):
    """Raised when inserting into a bounded queue that is already full."""


class DuplicateEntryError(QueueError):
    """Raised when a vertex would hold two live entries at once."""


class KeyIncreaseError(QueueError, ValueError):
    """Raised when ``decrease_key`` is asked to raise a key."""


class StaleHandleError(QueueError):
    """Raised when a handle no longer refers to a live queue entry."""


class AlgorithmError(HeapSSSPError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


__all__ = [
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
