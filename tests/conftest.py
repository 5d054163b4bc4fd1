from __future__ import annotations

from pathlib import Path

import pytest

from heapsssp import Graph


@pytest.fixture
def triangle() -> Graph:
    """0 -> 1 (5), 0 -> 2 (2), 2 -> 1 (1); the shortest route to 1 goes via 2."""
    return Graph.from_edges(3, [(0, 1, 5), (0, 2, 2), (2, 1, 1)]).freeze()


@pytest.fixture
def triangle_gr(tmp_path: Path) -> Path:
    """The triangle as a 1-based DIMACS file, vertices {1, 2, 3}."""
    p = tmp_path / "triangle.gr"
    p.write_text(
        "c three vertices\n"
        "p sp 3 3\n"
        "a 1 2 5\n"
        "a 1 3 2\n"
        "a 3 2 1\n",
        encoding="utf-8",
    )
    return p


@pytest.fixture(params=["binary", "fibonacci"])
def queue(request: pytest.FixtureRequest) -> str:
    return request.param
