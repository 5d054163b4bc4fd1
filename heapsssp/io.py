"""Graph input/output helpers.

Supported formats, all directed and weighted:

``csv``
    ``u,v,w`` per line (tabs also accepted), ``#`` comments, 0-based ids.
``jsonl``
    One ``{"u": .., "v": .., "w": ..}`` object per line, 0-based ids.
``mtx``
    Matrix Market coordinate format, 1-based ids.
``gr``
    DIMACS shortest-path format (``c`` comments, one ``p sp n m`` line,
    ``a u v w`` arcs), 1-based ids.
``txt``
    Bare ``id1 id2 distance`` triplets, 1-based ids; the vertex count is the
    largest id seen.

Readers always return 0-based graphs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from .exceptions import GraphFormatError, InputError
from .graph import Graph, Weight
from .graph_numpy import CSRGraph

EdgeList = List[Tuple[int, int, Weight]]
AnyGraph = Union[Graph, CSRGraph]


def _parse_weight(token: str) -> Weight:
    """Parse an integer weight if possible, a float otherwise."""
    try:
        return int(token)
    except ValueError:
        return float(token)


def _iter_edges(G: AnyGraph) -> Iterable[Tuple[int, int, Weight]]:
    for u in range(G.n):
        for v, w in G.neighbors(u):
            yield u, v, w


def _read_csv(path: Path) -> Tuple[int, EdgeList]:
    """Read ``u,v,w`` rows and return ``(max id + 1, edges)``.

    Raises:
        GraphFormatError: If a row cannot be parsed or no edges are found.
    """
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = row.replace("\t", ",").split(",")
            if len(parts) < 3:
                raise GraphFormatError(f"{path}:{lineno}: expected u,v,w")
            try:
                u = int(parts[0].strip())
                v = int(parts[1].strip())
                w = _parse_weight(parts[2].strip())
            except ValueError as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id + 1, edges


def _write_csv(path: Path, G: AnyGraph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# u,v,w\n")
        for u, v, w in _iter_edges(G):
            fh.write(f"{u},{v},{w}\n")


def _read_jsonl(path: Path) -> Tuple[int, EdgeList]:
    """Read JSON Lines edge objects with keys ``u``, ``v`` and ``w``.

    Raises:
        GraphFormatError: If a line is not a valid edge object or no edges
            are found.
    """
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                u = int(obj["u"])
                v = int(obj["v"])
                w = obj["w"]
            except (ValueError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"{path}:{lineno}: invalid edge object ({exc})") from exc
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id + 1, edges


def _write_jsonl(path: Path, G: AnyGraph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for u, v, w in _iter_edges(G):
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


def _read_mtx(path: Path) -> Tuple[int, EdgeList]:
    """Read a Matrix Market coordinate file.

    Lines starting with ``%`` are comments. The first other line holds
    ``rows cols entries``; the vertex count is ``max(rows, cols)``. Ids in
    the file are 1-based and converted to 0-based.
    """
    edges: EdgeList = []
    n: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            line = raw.strip()
            if not line or line.startswith("%"):
                continue
            parts = line.split()
            try:
                if n is None:
                    nrows, ncols, _ = map(int, parts[:3])
                    n = max(nrows, ncols)
                    continue
                u = int(parts[0]) - 1
                v = int(parts[1]) - 1
                w = _parse_weight(parts[2]) if len(parts) > 2 else 1
            except (ValueError, IndexError) as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
            edges.append((u, v, w))
    if n is None:
        raise GraphFormatError("missing Matrix Market size line")
    return n, edges


def _write_mtx(path: Path, G: AnyGraph) -> None:
    edges = list(_iter_edges(G))
    with path.open("w", encoding="utf-8") as fh:
        fh.write("%%MatrixMarket matrix coordinate real general\n")
        fh.write(f"{G.n} {G.n} {len(edges)}\n")
        for u, v, w in edges:
            fh.write(f"{u+1} {v+1} {w}\n")


def _read_dimacs(path: Path) -> Tuple[int, EdgeList]:
    """Read a DIMACS ``.gr`` shortest-path file.

    The vertex count comes from the ``p sp n m`` problem line, which must
    precede every ``a`` arc line. A mismatch between the declared and actual
    arc counts is tolerated.

    Raises:
        GraphFormatError: On a missing or repeated problem line, an arc before
            it, or a malformed line.
    """
    edges: EdgeList = []
    n: Optional[int] = None
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            parts = raw.split()
            if not parts or parts[0] == "c":
                continue
            tag = parts[0]
            try:
                if tag == "p":
                    if n is not None:
                        raise GraphFormatError(f"{path}:{lineno}: duplicate problem line")
                    if len(parts) != 4 or parts[1] != "sp":
                        raise GraphFormatError(f"{path}:{lineno}: expected 'p sp <n> <m>'")
                    n = int(parts[2])
                elif tag == "a":
                    if n is None:
                        raise GraphFormatError(f"{path}:{lineno}: arc before problem line")
                    if len(parts) != 4:
                        raise GraphFormatError(f"{path}:{lineno}: expected 'a <u> <v> <w>'")
                    edges.append((int(parts[1]) - 1, int(parts[2]) - 1, _parse_weight(parts[3])))
                else:
                    raise GraphFormatError(f"{path}:{lineno}: unknown line type {tag!r}")
            except GraphFormatError:
                raise
            except ValueError as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
    if n is None:
        raise GraphFormatError("missing DIMACS problem line")
    return n, edges


def _write_dimacs(path: Path, G: AnyGraph) -> None:
    edges = list(_iter_edges(G))
    with path.open("w", encoding="utf-8") as fh:
        fh.write("c written by heapsssp\n")
        fh.write(f"p sp {G.n} {len(edges)}\n")
        for u, v, w in edges:
            fh.write(f"a {u+1} {v+1} {w}\n")


def _read_triplets(path: Path) -> Tuple[int, EdgeList]:
    """Read 1-based ``id1 id2 distance`` lines; vertex count is the max id."""
    edges: EdgeList = []
    max_id = 0
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            parts = raw.split()
            if not parts:
                continue
            if len(parts) != 3:
                raise GraphFormatError(f"{path}:{lineno}: expected 'id1 id2 distance'")
            try:
                u = int(parts[0])
                v = int(parts[1])
                w = _parse_weight(parts[2])
            except ValueError as exc:
                raise GraphFormatError(f"{path}:{lineno}: {exc}") from exc
            if u < 1 or v < 1:
                raise GraphFormatError(f"{path}:{lineno}: vertex ids start at 1")
            edges.append((u - 1, v - 1, w))
            max_id = max(max_id, u, v)
    if max_id == 0:
        raise GraphFormatError("no edges parsed from file")
    return max_id, edges


def _write_triplets(path: Path, G: AnyGraph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for u, v, w in _iter_edges(G):
            fh.write(f"{u+1} {v+1} {w}\n")


_FMT_READERS: Dict[str, Callable[[Path], Tuple[int, EdgeList]]] = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
    "mtx": _read_mtx,
    "gr": _read_dimacs,
    "txt": _read_triplets,
}

_FMT_WRITERS: Dict[str, Callable[[Path, AnyGraph], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "mtx": _write_mtx,
    "gr": _write_dimacs,
    "txt": _write_triplets,
}

FORMATS = sorted(_FMT_READERS)


def _detect_format(path: Path) -> Optional[str]:
    """Return the format implied by the file extension, or ``None``."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    if ext == ".mtx":
        return "mtx"
    if ext in {".gr", ".dimacs"}:
        return "gr"
    if ext == ".txt":
        return "txt"
    return None


def _resolve(path: Path, fmt: Optional[str], table: Dict[str, Any]) -> str:
    fmt = fmt or _detect_format(path)
    if fmt is None or fmt not in table:
        raise GraphFormatError(f"unknown graph format for {path} (expected one of {FORMATS})")
    return fmt


def read_graph(path: str, fmt: Optional[str] = None, csr: bool = False) -> AnyGraph:
    """Read a graph from a file.

    Args:
        path: The path to the graph file.
        fmt: One of :data:`FORMATS`; auto-detected from the extension if
            ``None``.
        csr: Return a :class:`~heapsssp.graph_numpy.CSRGraph` instead of a
            frozen :class:`~heapsssp.graph.Graph`.

    Raises:
        InputError: If the file does not exist.
        GraphFormatError: If the format is unknown or the contents are
            malformed (including negative weights).
    """
    p = Path(path)
    if not p.exists():
        raise InputError(f"graph file not found: {path}")
    fmt = _resolve(p, fmt, _FMT_READERS)
    n, edges = _FMT_READERS[fmt](p)
    if n <= 0:
        raise GraphFormatError(f"{path}: graph has no vertices")
    if csr:
        return CSRGraph.from_edges(n, edges)
    return Graph.from_edges(n, edges).freeze()


def write_graph(G: AnyGraph, path: str, fmt: Optional[str] = None) -> None:
    """Write a graph to a file.

    Args:
        G: The graph to write.
        path: Destination path.
        fmt: One of :data:`FORMATS`; auto-detected from the extension if
            ``None``.

    Raises:
        GraphFormatError: If the format is unknown.
    """
    p = Path(path)
    fmt = _resolve(p, fmt, _FMT_WRITERS)
    _FMT_WRITERS[fmt](p, G)


def convert_graph(
    src: str,
    dst: str,
    src_fmt: Optional[str] = None,
    dst_fmt: Optional[str] = None,
) -> Tuple[int, int]:
    """Convert a graph file between formats, e.g. DIMACS ``.gr`` to ``.txt``.

    Returns:
        ``(n, m)`` of the converted graph.
    """
    G = read_graph(src, src_fmt)
    write_graph(G, dst, dst_fmt)
    return G.n, G.edge_count()


def to_networkx(G: AnyGraph, weight: str = "weight") -> Any:
    """Return a :class:`networkx.DiGraph` with the same vertices and edges.

    Parallel edges collapse to the lightest one, which preserves distances.
    """
    import networkx as nx

    nxg = nx.DiGraph()
    nxg.add_nodes_from(range(G.n))
    for u, v, w in _iter_edges(G):
        data = nxg.get_edge_data(u, v)
        if data is None or w < data[weight]:
            nxg.add_edge(u, v, **{weight: w})
    return nxg


def from_networkx(nxg: Any, weight: str = "weight", default: Weight = 1) -> Graph:
    """Build a frozen :class:`Graph` from a networkx graph.

    Nodes are relabelled ``0 .. n-1`` in ``nxg.nodes`` order; undirected
    graphs contribute one edge per direction.

    Raises:
        InputError: If ``nxg`` has no nodes.
    """
    nodes = list(nxg.nodes)
    if not nodes:
        raise InputError("networkx graph has no nodes")
    index = {node: i for i, node in enumerate(nodes)}
    g = Graph(len(nodes))
    directed = nxg.is_directed()
    for a, b, data in nxg.edges(data=True):
        w = data.get(weight, default)
        g.add_edge(index[a], index[b], w)
        if not directed and a != b:
            g.add_edge(index[b], index[a], w)
    return g.freeze()


__all__ = [
    "FORMATS",
    "convert_graph",
    "from_networkx",
    "read_graph",
    "to_networkx",
    "write_graph",
]
