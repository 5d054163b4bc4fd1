import random

import pytest

from heapsssp import (
    EMPTY,
    CapacityError,
    DuplicateEntryError,
    EmptyQueueError,
    HeapOverflowError,
    IndexedBinaryHeap,
    InputError,
)


def _drain(h: IndexedBinaryHeap):
    out = []
    while not h.is_empty():
        out.append(h.extract_min())
    return out


def test_negative_capacity_rejected():
    with pytest.raises(CapacityError):
        IndexedBinaryHeap(-1)


def test_zero_capacity_is_empty():
    h = IndexedBinaryHeap(0)
    assert h.is_empty()
    assert h.extract_min() is EMPTY
    with pytest.raises(HeapOverflowError):
        h.insert(0, 1)


def test_overflow_is_deterministic():
    h = IndexedBinaryHeap(2)
    h.insert(0, 3)
    h.insert(1, 4)
    with pytest.raises(HeapOverflowError):
        h.insert(1, 1)
    assert len(h) == 2


def test_insert_rejects_bad_and_duplicate_vertices():
    h = IndexedBinaryHeap(3)
    with pytest.raises(InputError):
        h.insert(3, 1)
    with pytest.raises(InputError):
        h.insert(-1, 1)
    h.insert(2, 1)
    with pytest.raises(DuplicateEntryError):
        h.insert(2, 0)


def test_extract_empty_returns_distinguished_entry():
    h = IndexedBinaryHeap(4)
    entry = h.extract_min()
    assert entry is EMPTY
    assert not entry
    with pytest.raises(EmptyQueueError):
        h.pop()


def test_extracts_in_key_order():
    rnd = random.Random(7)
    keys = rnd.sample(range(1000), 200)
    h = IndexedBinaryHeap(len(keys))
    for v, k in enumerate(keys):
        assert h.insert(v, k) == v
    h.check_invariants()
    out = _drain(h)
    assert [e.key for e in out] == sorted(keys)
    assert all(keys[e.vertex] == e.key for e in out)
    assert h.extract_min() is EMPTY


def test_sift_down_prefers_left_child_on_ties():
    h = IndexedBinaryHeap(4)
    h.insert(0, 0)
    h.insert(1, 2)
    h.insert(2, 2)
    h.insert(3, 9)
    assert [e.vertex for e in _drain(h)] == [0, 1, 2, 3]


def test_decrease_key_moves_entry_up():
    h = IndexedBinaryHeap(5)
    for v in range(5):
        h.insert(v, 10 + v)
    assert h.decrease_key(4, 1) is True
    assert h.key_of(4) == 1
    h.check_invariants()
    assert h.extract_min() == (4, 1)


def test_decrease_key_noop_leaves_state_unchanged():
    h = IndexedBinaryHeap(6)
    for v, k in enumerate([5, 3, 8, 1, 9]):
        h.insert(v, k)
    before = list(h.entries())
    assert h.decrease_key(2, 8) is False  # equal
    assert h.decrease_key(2, 20) is False  # larger
    assert h.decrease_key(5, 0) is False  # never inserted
    h.extract_min()
    assert h.decrease_key(3, 0) is False  # already extracted
    after = list(h.entries())
    assert 3 not in h
    assert sorted(after) == sorted(e for e in before if e.vertex != 3)


def test_contains_and_key_of():
    h = IndexedBinaryHeap(3)
    h.insert(1, 4)
    assert 1 in h
    assert 0 not in h
    assert 7 not in h
    with pytest.raises(KeyError):
        h.key_of(0)


def test_random_operations_keep_invariants():
    rnd = random.Random(11)
    n = 64
    h = IndexedBinaryHeap(n)
    model = {}
    for _ in range(2000):
        op = rnd.random()
        absent = [v for v in range(n) if v not in model]
        if op < 0.4 and absent:
            v = rnd.choice(absent)
            k = rnd.randrange(1000)
            h.insert(v, k)
            model[v] = k
        elif op < 0.75 and model:
            v = rnd.choice(list(model))
            k = rnd.randrange(1000)
            changed = h.decrease_key(v, k)
            assert changed == (k < model[v])
            model[v] = min(model[v], k)
        elif model:
            e = h.extract_min()
            assert e.key == min(model.values())
            assert model.pop(e.vertex) == e.key
        h.check_invariants()
        assert len(h) == len(model)
