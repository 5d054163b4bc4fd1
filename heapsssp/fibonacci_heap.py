"""Fibonacci heap with O(1) amortized insert and decrease-key.

The heap is a forest of min-ordered trees. The roots, and the children of
every node, form circular doubly-linked lists through ``left``/``right``;
each node points at its parent (``None`` for roots) and at one arbitrary
child. The heap keeps a pointer to the root with the smallest key.

``insert`` splices a singleton tree into the root list. ``extract_min``
promotes the children of the minimum to roots, unlinks the minimum and then
*consolidates*: roots of equal degree are linked pairwise until every root
degree is unique, which bounds the root list by O(log n) and gives the
amortized O(log n) cost. ``decrease_key`` lowers a key in place; if that
breaks heap order with the parent, the node is *cut* to the root list and
its ancestors are cut in turn while they are marked (a *cascading cut*). A
node is marked when it loses its first child after becoming a child
itself, which is what keeps tree sizes exponential in the degree.
"""

from __future__ import annotations

import math
from typing import Any, Iterator, List, Optional

from .exceptions import AlgorithmError, EmptyQueueError, KeyIncreaseError, StaleHandleError
from .frontier import QueueEntry, register_queue
from .graph import Weight

_PHI = (1.0 + math.sqrt(5.0)) / 2.0


class FibNode:
    """Entry of a :class:`FibonacciHeap`, returned by ``insert`` as a handle.

    A handle stays valid until its entry is extracted or the heap is
    destroyed; after that :attr:`alive` is ``False`` and the heap rejects it.
    """

    __slots__ = ("key", "value", "parent", "child", "left", "right", "degree", "mark", "owner")

    def __init__(self, key: Weight, value: Any, owner: "FibonacciHeap") -> None:
        self.key = key
        self.value = value
        self.parent: Optional[FibNode] = None
        self.child: Optional[FibNode] = None
        self.left: FibNode = self
        self.right: FibNode = self
        self.degree = 0
        self.mark = False
        self.owner: Optional[FibonacciHeap] = owner

    @property
    def alive(self) -> bool:
        return self.owner is not None

    def _release(self) -> None:
        self.owner = None
        self.parent = None
        self.child = None
        self.left = self
        self.right = self
        self.degree = 0
        self.mark = False

    def __repr__(self) -> str:
        state = "" if self.alive else ", dead"
        return f"FibNode(key={self.key!r}, value={self.value!r}{state})"


def _ring(anchor: FibNode) -> List[FibNode]:
    """Snapshot the circular sibling list containing ``anchor``."""
    out = [anchor]
    node = anchor.right
    while node is not anchor:
        out.append(node)
        node = node.right
    return out


class FibonacciHeap:
    """Min-priority queue backed by a Fibonacci heap.

    Keys must be mutually comparable; values are opaque payloads (vertex ids
    when used by the solver). Use as a context manager to release every node
    on exit.

    Examples:
        ```python
        >>> h = FibonacciHeap()
        >>> node = h.insert("b", 5)
        >>> _ = h.insert("a", 3)
        >>> h.decrease_key(node, 1)
        >>> h.extract_min()
        QueueEntry(vertex='b', key=1)
        ```
    """

    #: The solver inserts vertices on first discovery for this backend.
    preload = False

    def __init__(self) -> None:
        self._min: Optional[FibNode] = None
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __enter__(self) -> "FibonacciHeap":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    def is_empty(self) -> bool:
        return self._min is None

    # ---- internals ----------------------------------------------------

    def _add_root(self, x: FibNode) -> None:
        """Splice ``x`` into the root list just left of the minimum."""
        m = self._min
        if m is None:
            self._min = x
            x.left = x
            x.right = x
        else:
            m.left.right = x
            x.left = m.left
            m.left = x
            x.right = m
        x.parent = None

    def _link(self, y: FibNode, x: FibNode) -> None:
        """Make root ``y`` a child of root ``x`` (requires ``x.key <= y.key``)."""
        y.left.right = y.right
        y.right.left = y.left
        y.left = y
        y.right = y

        y.parent = x
        c = x.child
        if c is None:
            x.child = y
        else:
            c.left.right = y
            y.left = c.left
            c.left = y
            y.right = c
        x.degree += 1
        y.mark = False

    def _consolidate(self, start: FibNode) -> None:
        """Merge roots of equal degree, starting from the ring around ``start``."""
        # D(n) <= log_phi(n); +2 absorbs rounding.
        size = int(math.log(max(self._count, 1)) / math.log(_PHI)) + 2
        table: List[Optional[FibNode]] = [None] * size

        # The root list is relinked while merging, so walk a snapshot.
        for w in _ring(start):
            x = w
            d = x.degree
            while d < len(table):
                y = table[d]
                if y is None:
                    break
                if x.key > y.key:
                    x, y = y, x
                self._link(y, x)
                table[d] = None
                d += 1
            if d >= len(table):
                table.extend([None] * (d + 1 - len(table)))
            table[d] = x

        self._min = None
        for node in table:
            if node is None:
                continue
            m = self._min
            self._add_root(node)
            if m is not None and node.key < m.key:
                self._min = node

    def _cut(self, x: FibNode, y: FibNode) -> None:
        """Detach ``x`` from its parent ``y`` and make it an unmarked root."""
        if x.right is x:
            y.child = None
        else:
            x.left.right = x.right
            x.right.left = x.left
            if y.child is x:
                y.child = x.right
        y.degree -= 1
        self._add_root(x)
        x.mark = False

    def _cascading_cut(self, y: FibNode) -> None:
        z = y.parent
        while z is not None:
            if not y.mark:
                y.mark = True
                return
            self._cut(y, z)
            y = z
            z = y.parent

    def _check_handle(self, node: FibNode) -> None:
        if node.owner is not self:
            raise StaleHandleError(f"{node!r} is not a live entry of this heap")

    # ---- public API ---------------------------------------------------

    def insert(self, value: Any, key: Weight) -> FibNode:
        """Add ``value`` with priority ``key`` and return its node handle."""
        node = FibNode(key, value, self)
        self._add_root(node)
        if key < self._min.key:  # type: ignore[union-attr]
            self._min = node
        self._count += 1
        return node

    def peek(self) -> QueueEntry:
        """Return the minimum entry without removing it.

        Raises:
            EmptyQueueError: If the heap is empty.
        """
        if self._min is None:
            raise EmptyQueueError("peek on an empty Fibonacci heap")
        return QueueEntry(self._min.value, self._min.key)

    def extract_min(self) -> QueueEntry:
        """Remove the minimum and return it as ``(value, key)``.

        The extracted node's handle becomes stale.

        Raises:
            EmptyQueueError: If the heap is empty.
        """
        z = self._min
        if z is None:
            raise EmptyQueueError("extract_min on an empty Fibonacci heap")

        if z.child is not None:
            for c in _ring(z.child):
                self._add_root(c)
                c.mark = False
            z.child = None

        z.left.right = z.right
        z.right.left = z.left
        if z.right is z:
            self._min = None
        else:
            self._consolidate(z.right)

        self._count -= 1
        entry = QueueEntry(z.value, z.key)
        z._release()
        return entry

    def decrease_key(self, node: FibNode, new_key: Weight) -> None:
        """Lower ``node``'s key to ``new_key``.

        Raises:
            StaleHandleError: If ``node`` was extracted, destroyed or belongs
                to another heap.
            KeyIncreaseError: If ``new_key`` is greater than the current key.
        """
        self._check_handle(node)
        if new_key > node.key:
            raise KeyIncreaseError(f"new key {new_key!r} is greater than current key {node.key!r}")
        node.key = new_key
        y = node.parent
        if y is not None and node.key < y.key:
            self._cut(node, y)
            self._cascading_cut(y)
        if node.key < self._min.key:  # type: ignore[union-attr]
            self._min = node

    def iter_nodes(self) -> Iterator[FibNode]:
        """Yield every live node, each exactly once, roots first per tree."""
        if self._min is None:
            return
        stack = [self._min]
        while stack:
            for node in _ring(stack.pop()):
                yield node
                if node.child is not None:
                    stack.append(node.child)

    def destroy(self) -> int:
        """Release every node and empty the heap.

        Each circular list is snapshotted from a fixed anchor before its
        nodes are unlinked, so no node is visited twice. All outstanding
        handles become stale.

        Returns:
            Number of nodes released.
        """
        nodes = list(self.iter_nodes())
        for node in nodes:
            node._release()
        self._min = None
        self._count = 0
        return len(nodes)

    def check_invariants(self) -> None:
        """Verify the forest structure against the tracked state.

        Checks sibling links, parent links, heap order, degree counts, that
        roots are unmarked, that the minimum pointer is the smallest root and
        that the reachable node count equals ``len(self)``.

        Raises:
            AlgorithmError: On the first violated invariant.
        """
        if self._min is None:
            if self._count:
                raise AlgorithmError(f"empty root list but count {self._count}")
            return
        seen = 0
        stack: List[tuple[Optional[FibNode], FibNode]] = [(None, self._min)]
        while stack:
            parent, anchor = stack.pop()
            ring = _ring(anchor)
            if parent is not None and len(ring) != parent.degree:
                raise AlgorithmError(f"{parent!r} has degree {parent.degree} but {len(ring)} children")
            for node in ring:
                seen += 1
                if node.owner is not self:
                    raise AlgorithmError(f"{node!r} is reachable but not owned by this heap")
                if node.right.left is not node or node.left.right is not node:
                    raise AlgorithmError(f"broken sibling links at {node!r}")
                if node.parent is not parent:
                    raise AlgorithmError(f"wrong parent pointer at {node!r}")
                if parent is None:
                    if node.mark:
                        raise AlgorithmError(f"root {node!r} is marked")
                    if node.key < self._min.key:
                        raise AlgorithmError(f"root {node!r} is smaller than the minimum")
                elif node.key < parent.key:
                    raise AlgorithmError(f"heap order broken: {node!r} under {parent!r}")
                if node.child is not None:
                    stack.append((node, node.child))
                elif node.degree:
                    raise AlgorithmError(f"{node!r} has degree {node.degree} but no child")
        if seen != self._count:
            raise AlgorithmError(f"{seen} reachable nodes but count {self._count}")


register_queue("fibonacci", lambda n: FibonacciHeap())

__all__ = ["FibNode", "FibonacciHeap"]
