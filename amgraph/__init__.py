"""amgraph: adjacency-matrix graph engine.

amgraph provides a mutable weighted directed graph stored as an adjacency
matrix, with traversal, cached shortest paths, randomized minimum cuts and
highly-connected-subgraph clustering.

Primary API:
    MatrixGraph - Weighted directed graph over hashable vertices
    graph_of() - Build a graph from vertices and weighted edge triples
    Cut - Minimum cut result
    ClusteringCancelled - Raised when clustering is cancelled
    to_digraph() / from_digraph() - NetworkX interop

Example:
    from amgraph import MatrixGraph

    graph = MatrixGraph(["A", "B", "C"])
    graph["A", "B"] = 5
    graph["B", "C"] = 2

    graph.path("A", "C")      # ['A', 'B', 'C']
    graph.distance("A", "C")  # 7
    clusters = graph.highly_connected_subgraphs(connectedness=0.5, seed=7)
"""

from __future__ import annotations

from amgraph import logging
from amgraph.algorithms.base import NO_EDGE
from amgraph.algorithms.clustering import ClusteringCancelled
from amgraph.algorithms.mincut import Cut
from amgraph.config import CLUSTERING_CONFIG, ClusteringConfig
from amgraph.graph.convert import from_digraph, to_digraph, to_graph
from amgraph.graph.key import graph_to_key, key_to_graph
from amgraph.graph.matrix_graph import MatrixGraph, graph_of
from amgraph.seed_manager import SeedManager

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Graph
    "MatrixGraph",
    "graph_of",
    "NO_EDGE",
    # Results
    "Cut",
    "ClusteringCancelled",
    # Serialization and interop
    "graph_to_key",
    "key_to_graph",
    "to_digraph",
    "to_graph",
    "from_digraph",
    # Configuration and utilities
    "ClusteringConfig",
    "CLUSTERING_CONFIG",
    "SeedManager",
    "logging",
]
