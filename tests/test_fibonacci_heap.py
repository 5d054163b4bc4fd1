import random

import pytest

from heapsssp import (
    EmptyQueueError,
    FibonacciHeap,
    KeyIncreaseError,
    StaleHandleError,
)


def _drain(h: FibonacciHeap):
    out = []
    while not h.is_empty():
        out.append(h.extract_min())
        h.check_invariants()
    return out


def test_empty_heap():
    h = FibonacciHeap()
    assert h.is_empty()
    assert len(h) == 0
    h.check_invariants()
    with pytest.raises(EmptyQueueError):
        h.extract_min()
    with pytest.raises(EmptyQueueError):
        h.peek()


def test_insert_tracks_minimum():
    h = FibonacciHeap()
    h.insert("a", 5)
    h.insert("b", 2)
    h.insert("c", 7)
    assert h.peek() == ("b", 2)
    assert len(h) == 3
    h.check_invariants()


def test_extracts_in_key_order():
    rnd = random.Random(3)
    keys = rnd.sample(range(10_000), 500)
    h = FibonacciHeap()
    for i, k in enumerate(keys):
        h.insert(i, k)
    out = _drain(h)
    assert [e.key for e in out] == sorted(keys)
    assert all(keys[e.vertex] == e.key for e in out)


def test_duplicate_keys_all_come_out():
    h = FibonacciHeap()
    for i in range(20):
        h.insert(i, i % 3)
    out = _drain(h)
    assert [e.key for e in out] == sorted(i % 3 for i in range(20))
    assert sorted(e.vertex for e in out) == list(range(20))


def _build_consolidated():
    """Insert keys 0, 10, .., 80 and extract 0.

    Consolidating the eight remaining roots yields one binomial-shaped tree:
    10 -> {20, 30 -> {40}, 50 -> {60, 70 -> {80}}}.
    """
    h = FibonacciHeap()
    nodes = {k: h.insert(k // 10, k) for k in range(0, 90, 10)}
    assert h.extract_min() == (0, 0)
    return h, nodes


def test_consolidate_links_equal_degree_roots():
    h, n = _build_consolidated()
    h.check_invariants()
    assert len(h) == 8
    assert n[10].parent is None
    assert n[10].degree == 3
    assert n[20].parent is n[10]
    assert n[30].parent is n[10]
    assert n[40].parent is n[30]
    assert n[50].parent is n[10]
    assert n[60].parent is n[50]
    assert n[70].parent is n[50]
    assert n[80].parent is n[70]
    assert not n[0].alive


def test_consolidate_grows_degree_table_past_estimate():
    h, n = _build_consolidated()
    # An undercounted size makes the initial table shorter than the root degree.
    h._count = 1
    h._consolidate(h._min)
    h._count = 8
    h.check_invariants()
    assert h.peek() == (1, 10)
    assert n[10].degree == 3
    assert [e.key for e in _drain(h)] == list(range(10, 90, 10))


def test_cut_and_cascading_cut():
    h, n = _build_consolidated()

    h.decrease_key(n[80], 5)
    h.check_invariants()
    assert n[80].parent is None
    assert n[70].mark
    assert h.peek() == (8, 5)

    h.decrease_key(n[60], 6)
    h.check_invariants()
    assert n[60].parent is None
    assert n[50].mark

    # 70 is a child of the marked 50: cutting it cascades and cuts 50 too.
    h.decrease_key(n[70], 7)
    h.check_invariants()
    assert n[70].parent is None and not n[70].mark
    assert n[50].parent is None and not n[50].mark
    assert n[50].degree == 0
    assert n[10].degree == 2

    out = _drain(h)
    assert [e.key for e in out] == [5, 6, 7, 10, 20, 30, 40, 50]
    assert [e.vertex for e in out] == [8, 6, 7, 1, 2, 3, 4, 5]


def test_decrease_key_without_violation_keeps_parent():
    h, n = _build_consolidated()
    h.decrease_key(n[40], 35)
    h.check_invariants()
    assert n[40].parent is n[30]
    assert not n[30].mark


def test_decrease_key_equal_is_noop():
    h, n = _build_consolidated()
    before = [(x.value, x.key, x.parent) for x in h.iter_nodes()]
    h.decrease_key(n[60], 60)
    after = [(x.value, x.key, x.parent) for x in h.iter_nodes()]
    assert before == after
    h.check_invariants()


def test_decrease_key_rejects_larger_key():
    h, n = _build_consolidated()
    with pytest.raises(KeyIncreaseError):
        h.decrease_key(n[40], 41)
    assert n[40].key == 40
    h.check_invariants()


def test_stale_handles_are_rejected():
    h = FibonacciHeap()
    a = h.insert("a", 1)
    h.insert("b", 2)
    h.extract_min()
    assert not a.alive
    with pytest.raises(StaleHandleError):
        h.decrease_key(a, 0)
    assert len(h) == 1
    h.check_invariants()

    other = FibonacciHeap()
    foreign = other.insert("x", 9)
    with pytest.raises(StaleHandleError):
        h.decrease_key(foreign, 0)


def test_destroy_releases_every_node():
    h, n = _build_consolidated()
    h.decrease_key(n[80], 5)
    assert h.destroy() == 8
    assert h.is_empty()
    assert len(h) == 0
    assert not any(x.alive for x in n.values())
    with pytest.raises(StaleHandleError):
        h.decrease_key(n[20], 1)
    h.check_invariants()


def test_context_manager_destroys():
    with FibonacciHeap() as h:
        node = h.insert(1, 1)
        h.insert(2, 2)
    assert h.is_empty()
    assert not node.alive


def test_random_operations_keep_invariants():
    rnd = random.Random(2024)
    h = FibonacciHeap()
    handles = {}
    model = {}
    next_value = 0
    for _ in range(3000):
        op = rnd.random()
        if op < 0.45:
            k = rnd.randrange(10_000)
            handles[next_value] = h.insert(next_value, k)
            model[next_value] = k
            next_value += 1
        elif op < 0.75 and model:
            v = rnd.choice(list(model))
            k = rnd.randrange(model[v] + 1)
            h.decrease_key(handles[v], k)
            model[v] = k
        elif model:
            e = h.extract_min()
            assert e.key == min(model.values())
            assert model.pop(e.vertex) == e.key
            assert not handles.pop(e.vertex).alive
        h.check_invariants()
        assert len(h) == len(model)
        assert sum(1 for _ in h.iter_nodes()) == len(model)
    assert [e.key for e in _drain(h)] == sorted(model.values())
