"""Shared graph fixtures."""

from __future__ import annotations

import pytest

from amgraph.graph.matrix_graph import MatrixGraph, graph_of


def _bidirectional(graph: MatrixGraph, pairs, weight: int = 1) -> MatrixGraph:
    for u, v in pairs:
        graph.set(u, v, weight)
        graph.set(v, u, weight)
    return graph


@pytest.fixture
def line_abc():
    #     [5]      [2]
    #  A ─────► B ─────► C
    return graph_of(["A", "B", "C"], [("A", "B", 5), ("B", "C", 2)])


@pytest.fixture
def square():
    #       [1]        [1]
    #   ┌────────►B─────────┐
    #   │                   ▼
    #   A ───────[5]──────► C
    #   │                   ▲
    #   │   [2]        [2]  │
    #   └────────►D─────────┘
    return graph_of(
        ["A", "B", "C", "D"],
        [("A", "B", 1), ("B", "C", 1), ("A", "D", 2), ("D", "C", 2), ("A", "C", 5)],
    )


@pytest.fixture
def diamond():
    #       ┌──►B──┐
    #   A───┤      ├──►D───►E
    #       └──►C──┘
    return graph_of(
        ["A", "B", "C", "D", "E"],
        [("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "D", 1), ("D", "E", 1)],
    )


@pytest.fixture
def two_triangles():
    # Two bidirectional triangles with no edges between them; vertex order
    # interleaves the groups.
    graph = MatrixGraph(["a1", "b1", "a2", "b2", "a3", "b3"])
    return _bidirectional(
        graph,
        [("a1", "a2"), ("a2", "a3"), ("a3", "a1"), ("b1", "b2"), ("b2", "b3"), ("b3", "b1")],
    )


@pytest.fixture
def barbell():
    # Two bidirectional K4s joined by the single directed edge l3 -> r0.
    left = [f"l{i}" for i in range(4)]
    right = [f"r{i}" for i in range(4)]
    graph = MatrixGraph(left + right)
    for side in (left, right):
        _bidirectional(graph, [(u, v) for i, u in enumerate(side) for v in side[i + 1 :]])
    graph.set("l3", "r0", 1)
    return graph


@pytest.fixture
def bridged_triangles():
    # Two bidirectional triangles joined by one bidirectional edge x2 <-> y0.
    graph = MatrixGraph(["x0", "x1", "x2", "y0", "y1", "y2"])
    return _bidirectional(
        graph,
        [
            ("x0", "x1"),
            ("x1", "x2"),
            ("x2", "x0"),
            ("y0", "y1"),
            ("y1", "y2"),
            ("y2", "y0"),
            ("x2", "y0"),
        ],
    )
