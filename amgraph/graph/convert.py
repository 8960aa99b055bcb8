"""Graph conversion utilities between MatrixGraph and NetworkX graphs.

Edge weights are carried in a single edge attribute (``weight`` by default).
Converting to an undirected graph keeps the smaller weight when both
directions of a pair exist.
"""

from typing import Any, Hashable

import networkx as nx

from amgraph.graph.matrix_graph import MatrixGraph


def to_digraph(graph: MatrixGraph[Any], weight: str = "weight") -> nx.DiGraph:
    """Convert a MatrixGraph to a NetworkX DiGraph.

    Args:
        graph: The MatrixGraph to convert.
        weight: Name of the edge attribute receiving the weight.

    Returns:
        A DiGraph with the same vertices, in id order, and weighted edges.
    """
    nx_graph = nx.DiGraph()
    nx_graph.add_nodes_from(graph)
    for source, destination, value in graph.weighted_edges():
        nx_graph.add_edge(source, destination, **{weight: value})
    return nx_graph


def to_graph(graph: MatrixGraph[Any], weight: str = "weight") -> nx.Graph:
    """Convert a MatrixGraph to an undirected NetworkX Graph.

    Args:
        graph: The MatrixGraph to convert.
        weight: Name of the edge attribute receiving the weight.

    Returns:
        A Graph with one edge per connected pair, weighted by the lighter direction.
    """
    nx_graph = nx.Graph()
    nx_graph.add_nodes_from(graph)
    for source, destination, value in graph.weighted_edges():
        if nx_graph.has_edge(source, destination):
            edge_attr = nx_graph.edges[source, destination]
            edge_attr[weight] = min(edge_attr[weight], value)
        else:
            nx_graph.add_edge(source, destination, **{weight: value})
    return nx_graph


def from_digraph(
    nx_graph: nx.Graph, weight: str = "weight", default_weight: int = 1
) -> MatrixGraph[Hashable]:
    """Convert a NetworkX graph to a MatrixGraph.

    Undirected edges become edges in both directions. Parallel edges of
    multigraphs collapse into one edge with the smallest weight.

    Args:
        nx_graph: Any NetworkX graph.
        weight: Edge attribute holding the weight.
        default_weight: Weight of edges without the attribute.

    Returns:
        A MatrixGraph with vertices in NetworkX node order.
    """
    graph: MatrixGraph[Hashable] = MatrixGraph(nx_graph.nodes)
    directed = nx_graph.is_directed()

    for source, destination, data in nx_graph.edges(data=True):
        value = int(data.get(weight, default_weight))
        pairs = [(source, destination)]
        if not directed:
            pairs.append((destination, source))
        for u, v in pairs:
            existing = graph.get(u, v)
            if existing is None or value < existing:
                graph.set(u, v, value)
    return graph
