import math

import numpy as np
import pytest

from heapsssp import CSRGraph, Graph, GraphError, GraphFormatError, InputError


@pytest.mark.parametrize("n", [0, -3, 2.0, True])
def test_graph_requires_positive_vertex_count(n):
    with pytest.raises(InputError):
        Graph(n)


def test_add_edge_validates_ids():
    g = Graph(2)
    with pytest.raises(InputError):
        g.add_edge(0, 2, 1)
    with pytest.raises(InputError):
        g.add_edge(-1, 0, 1)


def test_negative_weight_cites_edge():
    g = Graph(3)
    with pytest.raises(GraphFormatError, match=r"negative weight -4 on edge \(1, 2\)"):
        g.add_edge(1, 2, -4)


@pytest.mark.parametrize("w", ["3", None, True, math.nan])
def test_non_numeric_weights_rejected(w):
    with pytest.raises(GraphFormatError):
        Graph(2).add_edge(0, 1, w)


def test_integer_weights_are_kept_as_int():
    g = Graph.from_edges(2, [(0, 1, 7), (1, 0, 0.5)])
    assert g.adj == [[(1, 7)], [(0, 0.5)]]
    assert isinstance(g.adj[0][0][1], int)
    assert g.edge_count() == 2
    assert g.out_degree(0) == 1
    assert list(g.edges()) == [(0, 1, 7), (1, 0, 0.5)]


def test_frozen_graph_rejects_edges():
    g = Graph.from_edges(2, [(0, 1, 1)]).freeze()
    assert g.frozen
    with pytest.raises(GraphError):
        g.add_edge(1, 0, 1)
    assert g.edge_count() == 1


def test_csr_preserves_per_vertex_order():
    edges = [(2, 0, 4), (0, 1, 1), (2, 1, 3), (0, 2, 9)]
    c = CSRGraph.from_edges(3, edges)
    assert c.offsets.tolist() == [0, 2, 2, 4]
    assert c.neighbors(0) == [(1, 1), (2, 9)]
    assert c.neighbors(1) == []
    assert c.neighbors(2) == [(0, 4), (1, 3)]
    assert c.weights.dtype == np.int64
    assert c.out_degree(2) == 2
    assert c.edge_count() == 4


def test_csr_float_weights_and_round_trip():
    g = Graph.from_edges(3, [(0, 1, 1.5), (1, 2, 2)])
    c = CSRGraph.from_graph(g)
    assert c.weights.dtype == np.float64
    back = c.to_graph()
    assert back.frozen
    assert list(back.edges()) == [(0, 1, 1.5), (1, 2, 2.0)]


def test_csr_without_edges():
    c = CSRGraph.from_edges(4, [])
    assert c.edge_count() == 0
    assert c.neighbors(3) == []


def test_csr_arrays_are_read_only():
    c = CSRGraph.from_edges(2, [(0, 1, 1)])
    with pytest.raises(ValueError):
        c.weights[0] = 5


def test_csr_validation():
    with pytest.raises(GraphFormatError, match=r"\(0, 1\)"):
        CSRGraph.from_edges(2, [(1, 0, 1), (0, 1, -1)])
    with pytest.raises(GraphFormatError):
        CSRGraph.from_edges(2, [(0, 1, math.nan)])
    with pytest.raises(InputError):
        CSRGraph.from_edges(2, [(0, 2, 1)])
    with pytest.raises(InputError):
        CSRGraph.from_edges(0, [])


def test_csr_constructor_validates_arrays():
    with pytest.raises(GraphFormatError, match=r"negative weight -10 on edge \(2, 1\)"):
        CSRGraph(3, [0, 2, 2, 3], [1, 2, 1], [5, 2, -10])
    with pytest.raises(GraphFormatError):
        CSRGraph(2, [0, 1, 1], [1], [math.nan])
    with pytest.raises(InputError):
        CSRGraph(2, [0, 1, 1], [2], [1])
    with pytest.raises(InputError):
        CSRGraph(3, [0, 2, 1, 3], [1, 2, 1], [1, 1, 1])
    with pytest.raises(InputError):
        CSRGraph(2, [0, 1, 3], [1, 0], [1, 1])
    with pytest.raises(InputError):
        CSRGraph(2, [0, 1, 1], [1, 0], [1])


def test_csr_constructor_accepts_array_likes():
    c = CSRGraph(3, [0, 2, 2, 3], [1, 2, 1], [5, 2, 10])
    assert c.offsets.dtype == np.int64
    assert c.weights.dtype == np.int64
    assert c.neighbors(0) == [(1, 5), (2, 2)]
    assert c.neighbors(2) == [(1, 10)]
    assert not c.targets.flags.writeable
