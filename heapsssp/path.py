"""Utilities for reconstructing paths from predecessor arrays."""

from __future__ import annotations

from typing import List, Optional

from .exceptions import InputError

Vertex = int


def reconstruct_path(
    predecessors: List[Optional[Vertex]],
    source: Vertex,
    target: Vertex,
) -> List[Vertex]:
    """Return the path from ``source`` to ``target`` using a predecessor array.

    Args:
        predecessors: Predecessor of each vertex on its shortest path, or
            ``None`` for the source and for unreached vertices.
        source: Source vertex identifier.
        target: Target vertex identifier.

    Returns:
        Vertices from source to target (inclusive). Returns an empty list if no
        path exists.

    Raises:
        InputError: If ``source`` or ``target`` is out of range.
    """
    n = len(predecessors)
    if not (0 <= source < n and 0 <= target < n):
        raise InputError("source/target out of range.")
    if source == target:
        return [source]

    chain: List[Vertex] = []
    cur: Optional[Vertex] = target
    # A shortest-path tree has at most n - 1 edges; anything longer is a cycle.
    while cur is not None and len(chain) <= n:
        chain.append(cur)
        if cur == source:
            chain.reverse()
            return chain
        cur = predecessors[cur]

    return []


__all__ = ["reconstruct_path"]
