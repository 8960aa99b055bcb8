import math
import random

import networkx as nx
import pytest

from amgraph.algorithms.base import NO_PREDECESSOR
from amgraph.algorithms.spf import (
    SpfTable,
    dijkstra_array,
    dijkstra_heap,
    spf,
    trace_path,
)
from amgraph.graph.convert import to_digraph
from amgraph.graph.generate import randomize
from amgraph.graph.matrix_graph import MatrixGraph, graph_of


def _random_graph(seed: int, size: int = 12, probability: float = 0.2) -> MatrixGraph:
    g = MatrixGraph(range(size))
    randomize(g, probability, 0, 10, rng=random.Random(seed))
    return g


def _path_weight(graph: MatrixGraph, path) -> int:
    return sum(graph.get(u, v) for u, v in zip(path, path[1:]))


class TestScenario:
    def test_path_and_distance(self, line_abc):
        assert line_abc.path("A", "C") == ["A", "B", "C"]
        assert line_abc.distance("A", "C") == 7

    def test_removing_edge_disconnects(self, line_abc):
        assert line_abc.distance("A", "C") == 7
        line_abc.remove_edge("A", "B")
        assert line_abc.distance("A", "C") == math.inf
        assert line_abc.path("A", "C") == []

    def test_reverse_direction_unreachable(self, line_abc):
        assert line_abc.path("C", "A") == []
        assert line_abc.distance("C", "A") == math.inf

    def test_missing_vertex(self, line_abc):
        with pytest.raises(KeyError):
            line_abc.path("A", "Z")
        with pytest.raises(KeyError):
            line_abc.distance("Z", "A")


class TestShortestPaths:
    def test_prefers_lighter_multi_hop_route(self, square):
        assert square.path("A", "C") == ["A", "B", "C"]
        assert square.distance("A", "C") == 2

    @pytest.mark.parametrize("method", ["heap", "array"])
    def test_path_to_self(self, square, method):
        for vertex in square:
            assert square.path(vertex, vertex, method=method) == [vertex]
            assert square.distance(vertex, vertex) == 0

    def test_unknown_method(self, square):
        with pytest.raises(ValueError, match="Unknown shortest-path method"):
            square.path("A", "C", method="fibonacci")

    @pytest.mark.parametrize("seed", range(8))
    def test_distances_match_networkx(self, seed):
        g = _random_graph(seed)
        nx_graph = to_digraph(g)
        for source in g:
            expected = nx.single_source_dijkstra_path_length(nx_graph, source)
            for destination in g:
                if destination in expected:
                    assert g.distance(source, destination) == expected[destination]
                else:
                    assert g.distance(source, destination) == math.inf

    @pytest.mark.parametrize("seed", range(8))
    def test_path_weight_equals_distance(self, seed):
        g = _random_graph(seed)
        for source in g:
            for destination in g:
                path = g.path(source, destination)
                if g.distance(source, destination) == math.inf:
                    assert path == []
                else:
                    assert path[0] == source and path[-1] == destination
                    assert _path_weight(g, path) == g.distance(source, destination)

    @pytest.mark.parametrize("seed", range(8))
    def test_heap_and_array_agree_on_disjoint_graphs(self, seed):
        g = _random_graph(seed, size=10, probability=0.1)
        for source in range(len(g)):
            heap_table = dijkstra_heap(g.matrix, source)
            array_table = dijkstra_array(g.matrix, source)
            assert heap_table.dist == array_table.dist
            for destination in range(len(g)):
                heap_path = trace_path(source, destination, heap_table)
                array_path = trace_path(source, destination, array_table)
                assert bool(heap_path) == bool(array_path)
                assert _path_weight(g, heap_path) == _path_weight(g, array_path)

    def test_array_method_via_graph(self, square):
        assert square.path("A", "C", method="array") == ["A", "B", "C"]

    @pytest.mark.parametrize("method", ["heap", "array"])
    def test_large_weights_stay_exact(self, method):
        big = 2**53 + 1
        g = graph_of(["A", "B", "C"], [("A", "B", big), ("B", "C", big)])
        table = spf(g.matrix, 0, method)
        assert table.dist == [0, big, 2 * big]
        assert all(isinstance(d, int) for d in table.dist)

    def test_shortest_path_table(self, line_abc):
        assert line_abc.shortest_path_table("A") == {
            "A": (None, 0),
            "B": ("A", 5),
            "C": ("B", 7),
        }
        assert line_abc.shortest_path_table("C") == {"C": (None, 0)}


class TestCache:
    def test_table_cached_per_source(self, square):
        square.path("A", "C")
        square.distance("B", "C")
        assert set(square._spf_cache) == {0, 1}
        table = square._spf_cache[0]
        square.path("A", "D")
        assert square._spf_cache[0] is table

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda g: g.set("A", "C", 1),
            lambda g: g.remove_edge("B", "C"),
            lambda g: g.add("E"),
            lambda g: g.remove("D"),
            lambda g: g.clear_edges(),
        ],
    )
    def test_mutation_drops_cache(self, square, mutate):
        square.distance("A", "C")
        assert square._spf_cache
        mutate(square)
        assert square._spf_cache == {}

    def test_reweight_changes_distance(self, square):
        assert square.distance("A", "C") == 2
        square.set("A", "C", 1)
        assert square.distance("A", "C") == 1
        assert square.path("A", "C") == ["A", "C"]

    def test_stale_table_means_no_path(self):
        g = graph_of(["A", "B"], [("A", "B", 1)])
        # A table computed before "B" was added
        g._spf_cache[0] = SpfTable(0, [NO_PREDECESSOR], [0])
        assert g.path("A", "B") == []
        assert g.distance("A", "B") == math.inf


class TestTracePath:
    def test_trace(self):
        table = SpfTable(0, [NO_PREDECESSOR, 0, 1], [0, 1, 2])
        assert trace_path(0, 2, table) == [0, 1, 2]
        assert trace_path(0, 0, table) == [0]

    def test_trace_unreachable(self):
        table = SpfTable(0, [NO_PREDECESSOR, 0, NO_PREDECESSOR], [0, 1, math.inf])
        assert trace_path(0, 2, table) == []

    def test_trace_out_of_range(self):
        table = SpfTable(0, [NO_PREDECESSOR], [0])
        with pytest.raises(IndexError):
            trace_path(0, 3, table)

    def test_table_access(self):
        table = spf(MatrixGraph(["A", "B"]).matrix, 0)
        assert len(table) == 2
        assert table[0] == (NO_PREDECESSOR, 0)
        assert table[1] == (NO_PREDECESSOR, math.inf)
        assert list(table) == [(NO_PREDECESSOR, 0), (NO_PREDECESSOR, math.inf)]
