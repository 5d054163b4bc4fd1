"""Array-backed binary min-heap with a vertex -> position index."""

from __future__ import annotations

from typing import Iterator, List

from .exceptions import (
    AlgorithmError,
    CapacityError,
    DuplicateEntryError,
    EmptyQueueError,
    HeapOverflowError,
    InputError,
)
from .frontier import EMPTY, QueueEntry, register_queue
from .graph import Vertex, Weight

_ABSENT = -1


class IndexedBinaryHeap:
    """Binary min-heap over the vertex ids ``0`` .. ``capacity-1``.

    Entries live in two parallel arrays (``_verts`` and ``_keys``) laid out
    as a complete binary tree; ``_pos[v]`` is the slot currently holding
    vertex ``v`` or ``-1``. Every swap keeps ``_pos[_verts[i]] == i`` for all
    occupied slots, which is what makes :meth:`decrease_key` O(log n).

    The handle of an entry is its vertex id.

    Args:
        capacity: Maximum number of simultaneous entries, also the exclusive
            upper bound of accepted vertex ids.

    Raises:
        CapacityError: If ``capacity`` is negative.
    """

    __slots__ = ("capacity", "_verts", "_keys", "_pos", "_size")

    #: The solver inserts every vertex up front for this backend.
    preload = True

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise CapacityError(f"capacity must be non-negative, got {capacity}")
        self.capacity = int(capacity)
        self._verts: List[Vertex] = [0] * self.capacity
        self._keys: List[Weight] = [0] * self.capacity
        self._pos: List[int] = [_ABSENT] * self.capacity
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, vertex: object) -> bool:
        return (
            isinstance(vertex, int)
            and 0 <= vertex < self.capacity
            and self._pos[vertex] != _ABSENT
        )

    def is_empty(self) -> bool:
        return self._size == 0

    def key_of(self, vertex: Vertex) -> Weight:
        """Return the current key of ``vertex``.

        Raises:
            KeyError: If ``vertex`` holds no live entry.
        """
        if vertex not in self:
            raise KeyError(vertex)
        return self._keys[self._pos[vertex]]

    # ---- internals ----------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        verts = self._verts
        keys = self._keys
        verts[i], verts[j] = verts[j], verts[i]
        keys[i], keys[j] = keys[j], keys[i]
        self._pos[verts[i]] = i
        self._pos[verts[j]] = j

    def _sift_up(self, idx: int) -> None:
        keys = self._keys
        while idx > 0:
            parent = (idx - 1) // 2
            if keys[parent] <= keys[idx]:
                break
            self._swap(parent, idx)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        keys = self._keys
        size = self._size
        while 2 * idx + 1 < size:
            left = 2 * idx + 1
            right = left + 1
            smallest = idx
            if keys[left] < keys[smallest]:
                smallest = left
            # strict: the left child wins ties
            if right < size and keys[right] < keys[smallest]:
                smallest = right
            if smallest == idx:
                break
            self._swap(idx, smallest)
            idx = smallest

    # ---- public API ---------------------------------------------------

    def insert(self, vertex: Vertex, key: Weight) -> Vertex:
        """Insert ``vertex`` with priority ``key`` and return its handle.

        Raises:
            HeapOverflowError: If the heap already holds ``capacity`` entries.
            InputError: If ``vertex`` is outside ``[0, capacity)``.
            DuplicateEntryError: If ``vertex`` already has a live entry.
        """
        if self._size >= self.capacity:
            raise HeapOverflowError(f"heap is full (capacity {self.capacity})")
        if not (0 <= vertex < self.capacity):
            raise InputError(f"vertex {vertex} outside [0, {self.capacity})")
        if self._pos[vertex] != _ABSENT:
            raise DuplicateEntryError(f"vertex {vertex} is already in the heap")
        idx = self._size
        self._verts[idx] = vertex
        self._keys[idx] = key
        self._pos[vertex] = idx
        self._size += 1
        self._sift_up(idx)
        return vertex

    def extract_min(self) -> QueueEntry:
        """Remove and return the entry with the smallest key.

        Returns:
            The extracted entry, or :data:`~heapsssp.frontier.EMPTY` when the
            heap has no entries.
        """
        if self._size == 0:
            return EMPTY
        entry = QueueEntry(self._verts[0], self._keys[0])
        self._pos[entry.vertex] = _ABSENT
        self._size -= 1
        if self._size > 0:
            last = self._size
            self._verts[0] = self._verts[last]
            self._keys[0] = self._keys[last]
            self._pos[self._verts[0]] = 0
            self._sift_down(0)
        return entry

    def pop(self) -> QueueEntry:
        """Like :meth:`extract_min` but raise on an empty heap.

        Raises:
            EmptyQueueError: If the heap is empty.
        """
        entry = self.extract_min()
        if entry is EMPTY:
            raise EmptyQueueError("extract_min on an empty heap")
        return entry

    def peek(self) -> QueueEntry:
        if self._size == 0:
            return EMPTY
        return QueueEntry(self._verts[0], self._keys[0])

    def decrease_key(self, vertex: Vertex, new_key: Weight) -> bool:
        """Lower the key of ``vertex`` to ``new_key``.

        Calls for an absent vertex, or with a key that is not strictly smaller
        than the current one, leave the heap untouched.

        Returns:
            ``True`` if the key was lowered.
        """
        if vertex not in self:
            return False
        idx = self._pos[vertex]
        if not new_key < self._keys[idx]:
            return False
        self._keys[idx] = new_key
        self._sift_up(idx)
        return True

    def entries(self) -> Iterator[QueueEntry]:
        """Yield live entries in array order (not sorted)."""
        for i in range(self._size):
            yield QueueEntry(self._verts[i], self._keys[i])

    def check_invariants(self) -> None:
        """Verify heap order and the position index.

        Raises:
            AlgorithmError: On the first violated invariant.
        """
        for i in range(self._size):
            if self._pos[self._verts[i]] != i:
                raise AlgorithmError(f"pos[{self._verts[i]}] != {i}")
            if i > 0 and self._keys[(i - 1) // 2] > self._keys[i]:
                raise AlgorithmError(f"heap order broken at slot {i}")
        live = sum(1 for p in self._pos if p != _ABSENT)
        if live != self._size:
            raise AlgorithmError(f"{live} indexed vertices but size {self._size}")


register_queue("binary", IndexedBinaryHeap)

__all__ = ["IndexedBinaryHeap"]
