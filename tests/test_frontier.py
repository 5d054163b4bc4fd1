import pytest

import heapsssp  # noqa: F401  registers the built-in backends
from heapsssp import ConfigError
from heapsssp.binary_heap import IndexedBinaryHeap
from heapsssp.fibonacci_heap import FibonacciHeap
from heapsssp.frontier import EMPTY, QueueEntry, make_queue, queue_names


def test_builtin_backends_registered():
    assert queue_names() == ["binary", "fibonacci"]
    assert isinstance(make_queue("binary", 4), IndexedBinaryHeap)
    assert isinstance(make_queue("fibonacci", 4), FibonacciHeap)


def test_unknown_backend():
    with pytest.raises(ConfigError, match="pairing"):
        make_queue("pairing", 4)


def test_only_the_sentinel_is_falsy():
    assert not EMPTY
    assert QueueEntry(0, 0)
    assert QueueEntry(-1, float("inf"))
