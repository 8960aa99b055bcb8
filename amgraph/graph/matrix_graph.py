"""Weighted directed graph backed by an adjacency matrix.

`MatrixGraph` keeps its vertices in an ordered list; a vertex's position is
its id and indexes a V x V integer weight matrix in which `NO_EDGE` (-1)
marks a missing edge. Edge lookup and mutation are O(1); adding or removing
vertices rebuilds the matrix in O(V^2).

Shortest-path tables are computed per source on demand and cached until the
next mutation of any kind.

The class is not synchronized. Concurrent use of one instance where any
caller mutates it must be serialized externally.
"""

from __future__ import annotations

import math
import random
import threading
from typing import (
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
    TypeVar,
)

import numpy as np

from amgraph.algorithms.base import (
    NO_EDGE,
    Distance,
    WeightMatrix,
    empty_matrix,
    successor_ids,
)
from amgraph.algorithms.mincut import Cut, karger, min_cut
from amgraph.algorithms.spf import SpfTable, spf, trace_path
from amgraph.algorithms.traversal import depth_first_search, reaching_ids, search
from amgraph.config import CLUSTERING_CONFIG
from amgraph.logging import get_logger

E = TypeVar("E", bound=Hashable)
R = TypeVar("R", bound=Hashable)

logger = get_logger(__name__)


class MatrixGraph(Generic[E]):
    """Mutable weighted directed graph over hashable, non-None vertices.

    Complexity:
        - get / set / remove_edge: O(1)
        - add_all / remove_all: O(V^2)
        - neighbors: O(V)
        - path / distance: O(V^2 * log(V)) on a cache miss, O(V) afterwards
    """

    def __init__(self, vertices: Optional[Iterable[E]] = None) -> None:
        """Create a graph with the given vertices and no edges.

        Args:
            vertices: Distinct vertices in id order.

        Raises:
            ValueError: If a vertex is None or appears more than once.
        """
        self._vertices: List[E] = []
        self._index: Dict[E, int] = {}
        for vertex in vertices or ():
            _check_vertex(vertex)
            if vertex in self._index:
                raise ValueError(f"Vertex '{vertex}' appears more than once.")
            self._index[vertex] = len(self._vertices)
            self._vertices.append(vertex)
        self._matrix: WeightMatrix = empty_matrix(len(self._vertices))
        self._spf_cache: Dict[int, SpfTable] = {}

    @classmethod
    def _from_parts(
        cls, vertices: List[E], index: Dict[E, int], matrix: WeightMatrix
    ) -> "MatrixGraph[E]":
        graph = cls.__new__(cls)
        graph._vertices = vertices
        graph._index = index
        graph._matrix = matrix
        graph._spf_cache = {}
        return graph

    @classmethod
    def from_weighted_connections(
        cls, connections: Iterable[Tuple[E, Iterable[Tuple[E, int]]]]
    ) -> "MatrixGraph[E]":
        """Build a graph from `(source, [(destination, weight), ...])` pairs.

        Vertices are numbered in the order first seen, as a source or as a
        destination. Non-positive weights are stored as 1.
        """
        materialized = [(source, list(outbound)) for source, outbound in connections]
        vertices: Dict[E, None] = {}
        for source, outbound in materialized:
            vertices.setdefault(source)
            for destination, _ in outbound:
                vertices.setdefault(destination)

        graph = cls(vertices)
        for source, outbound in materialized:
            src = graph._index[source]
            for destination, weight in outbound:
                graph._matrix[src, graph._index[destination]] = max(int(weight), 1)
        return graph

    @classmethod
    def from_connections(
        cls, connections: Iterable[Tuple[E, Optional[Iterable[E]]]]
    ) -> "MatrixGraph[E]":
        """Build a graph from `(source, [destination, ...])` pairs with weight-1 edges."""
        return cls.from_weighted_connections(
            (source, [(destination, 1) for destination in outbound or ()])
            for source, outbound in connections
        )

    @classmethod
    def from_key(cls, key: str) -> "MatrixGraph[str]":
        """Build a graph of string vertices from a compact graph key."""
        # Import here to avoid circular import
        from amgraph.graph.key import key_to_graph

        return key_to_graph(key)

    #
    # Vertex and edge access
    #
    def size(self) -> int:
        """Return the number of vertices."""
        return len(self._vertices)

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[E]:
        return iter(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._index

    def contains(self, vertex: E) -> bool:
        return vertex in self._index

    def _id(self, vertex: E) -> int:
        try:
            return self._index[vertex]
        except KeyError:
            raise KeyError(f"Vertex '{vertex}' does not exist.") from None

    @property
    def matrix(self) -> WeightMatrix:
        """Read-only view of the weight matrix, indexed by vertex id."""
        view = self._matrix.view()
        view.flags.writeable = False
        return view

    def get(self, source: E, destination: E) -> Optional[int]:
        """Return the weight of the edge `source -> destination`, or None if absent.

        Raises:
            KeyError: If either vertex does not exist.
        """
        weight = int(self._matrix[self._id(source), self._id(destination)])
        return None if weight == NO_EDGE else weight

    def set(self, source: E, destination: E, weight: int) -> Optional[int]:
        """Set the weight of the edge `source -> destination`.

        Setting `NO_EDGE` removes the edge.

        Returns:
            The previous weight, or None if there was no edge.

        Raises:
            KeyError: If either vertex does not exist.
        """
        return self._set_by_id(self._id(source), self._id(destination), int(weight))

    def _set_by_id(self, source: int, destination: int, weight: int) -> Optional[int]:
        previous = int(self._matrix[source, destination])
        self._matrix[source, destination] = weight
        self._invalidate()
        return None if previous == NO_EDGE else previous

    def __getitem__(self, edge: Tuple[E, E]) -> Optional[int]:
        source, destination = edge
        return self.get(source, destination)

    def __setitem__(self, edge: Tuple[E, E], weight: int) -> None:
        source, destination = edge
        self.set(source, destination, weight)

    def remove_edge(self, source: E, destination: E) -> Optional[int]:
        """Remove the edge `source -> destination` and return its weight, if any.

        Raises:
            KeyError: If either vertex does not exist.
        """
        return self.set(source, destination, NO_EDGE)

    def clear_edges(self) -> None:
        """Remove every edge, keeping the vertices."""
        self._replace_matrix(empty_matrix(len(self._vertices)))

    def _replace_matrix(self, matrix: WeightMatrix) -> None:
        self._matrix = matrix
        self._invalidate()

    def _invalidate(self) -> None:
        if self._spf_cache:
            logger.debug("Dropping %d cached shortest-path tables", len(self._spf_cache))
        self._spf_cache = {}

    #
    # Structural mutation
    #
    def add(self, vertex: E) -> bool:
        """Add one vertex. Returns False if it was already present."""
        return not self.add_all([vertex])

    def add_all(self, vertices: Iterable[E]) -> List[E]:
        """Add vertices without edges.

        Returns:
            The vertices that were already present and therefore not added.

        Raises:
            ValueError: If a vertex is None.
        """
        rejected: List[E] = []
        added: Dict[E, None] = {}
        for vertex in vertices:
            _check_vertex(vertex)
            if vertex in self._index or vertex in added:
                rejected.append(vertex)
            else:
                added[vertex] = None

        # Nothing is committed until the whole input has been checked
        if added:
            old_size = len(self._vertices)
            for vertex in added:
                self._index[vertex] = len(self._vertices)
                self._vertices.append(vertex)
            grown = empty_matrix(len(self._vertices))
            grown[:old_size, :old_size] = self._matrix
            self._replace_matrix(grown)
        return rejected

    def remove(self, vertex: E) -> bool:
        """Remove one vertex and its edges. Returns False if it was absent."""
        return not self.remove_all([vertex])

    def remove_all(self, vertices: Iterable[E]) -> List[E]:
        """Remove vertices together with every edge touching them.

        Returns:
            The vertices that were not found.
        """
        missing: List[E] = []
        removed_ids: Set[int] = set()
        for vertex in vertices:
            vertex_id = self._index.get(vertex)
            if vertex_id is None or vertex_id in removed_ids:
                missing.append(vertex)
            else:
                removed_ids.add(vertex_id)

        if removed_ids:
            removed = np.zeros(len(self._vertices), dtype=bool)
            removed[sorted(removed_ids)] = True
            kept = np.flatnonzero(~removed)
            self._vertices = [self._vertices[i] for i in kept.tolist()]
            self._index = {vertex: i for i, vertex in enumerate(self._vertices)}
            self._replace_matrix(self._matrix[np.ix_(kept, kept)])
        return missing

    #
    # Structural queries
    #
    def get_vertices(self) -> Set[E]:
        return set(self._vertices)

    def get_edges(self) -> Set[Tuple[E, E]]:
        """Return every `(source, destination)` pair joined by an edge."""
        sources, destinations = np.nonzero(self._matrix != NO_EDGE)
        return {
            (self._vertices[s], self._vertices[d])
            for s, d in zip(sources.tolist(), destinations.tolist())
        }

    def weighted_edges(self) -> List[Tuple[E, E, int]]:
        """Return every edge as `(source, destination, weight)` in id order."""
        sources, destinations = np.nonzero(self._matrix != NO_EDGE)
        return [
            (self._vertices[s], self._vertices[d], int(self._matrix[s, d]))
            for s, d in zip(sources.tolist(), destinations.tolist())
        ]

    def neighbors(self, source: E) -> List[E]:
        """Return the destinations of edges leaving `source`, in id order.

        Raises:
            KeyError: If `source` does not exist.
        """
        return [self._vertices[i] for i in successor_ids(self._matrix, self._id(source))]

    def count_edges_between(self, a: E, b: E) -> int:
        """Return how many of the edges `a -> b` and `b -> a` exist (0-2)."""
        return int(self.get(a, b) is not None) + int(self.get(b, a) is not None)

    #
    # Transformations
    #
    def copy(self) -> "MatrixGraph[E]":
        """Return an independent copy sharing no mutable state."""
        return self._from_parts(list(self._vertices), dict(self._index), self._matrix.copy())

    def subgraph(self, vertices: Iterable[E]) -> "MatrixGraph[E]":
        """Return a new graph induced by `vertices`, in this graph's vertex order.

        Raises:
            KeyError: If any vertex does not exist.
        """
        return self._subgraph_from_ids({self._id(v) for v in vertices})

    def _subgraph_from_ids(self, vertex_ids: Iterable[int]) -> "MatrixGraph[E]":
        ids = np.asarray(sorted(vertex_ids), dtype=np.intp)
        vertices = [self._vertices[i] for i in ids.tolist()]
        return self._from_parts(
            vertices,
            {vertex: i for i, vertex in enumerate(vertices)},
            self._matrix[np.ix_(ids, ids)],
        )

    def map_vertices(self, transform: Callable[[E], R]) -> "MatrixGraph[R]":
        """Return a copy whose vertices are relabeled by `transform`.

        Raises:
            ValueError: If `transform` returns None or maps two vertices to
                the same value.
        """
        vertices: List[R] = []
        index: Dict[R, int] = {}
        for i, vertex in enumerate(self._vertices):
            mapped = transform(vertex)
            _check_vertex(mapped)
            if mapped in index:
                raise ValueError(
                    f"Vertices '{self._vertices[index[mapped]]}' and '{vertex}' "
                    f"both map to '{mapped}'."
                )
            index[mapped] = i
            vertices.append(mapped)
        return MatrixGraph._from_parts(vertices, index, self._matrix.copy())

    def get_bidirectional_unweighted(self) -> "MatrixGraph[E]":
        """Return a copy with weight-1 edges both ways wherever either direction exists."""
        has_edge = self._matrix != NO_EDGE
        return self._from_parts(
            list(self._vertices),
            dict(self._index),
            np.where(has_edge | has_edge.T, 1, NO_EDGE).astype(np.int64),
        )

    def get_key(self) -> str:
        """Return the compact graph key of this graph."""
        # Import here to avoid circular import
        from amgraph.graph.key import graph_to_key

        return graph_to_key(self)

    #
    # Pathing
    #
    def search(self, use_depth_first: bool, source: E, destination: E) -> List[E]:
        """Find an unweighted path with a stack-ordered or FIFO-ordered search.

        Returns:
            Vertices from `source` to `destination` inclusive, or an empty
            list if there is no path.
        """
        ids = search(self._matrix, use_depth_first, self._id(source), self._id(destination))
        return [self._vertices[i] for i in ids]

    def breadth_first_search(self, source: E, destination: E) -> List[E]:
        return self.search(False, source, destination)

    def depth_first_search(self, source: E, destination: E) -> List[E]:
        ids = depth_first_search(self._matrix, self._id(source), self._id(destination))
        return [self._vertices[i] for i in ids]

    def _spf_table(self, source_id: int, method: str = "heap") -> SpfTable:
        table = self._spf_cache.get(source_id)
        if table is None:
            table = spf(self._matrix, source_id, method)
            self._spf_cache[source_id] = table
        return table

    def path(self, source: E, destination: E, method: str = "heap") -> List[E]:
        """Return the minimum-weight path from `source` to `destination`.

        Args:
            source: Start vertex.
            destination: End vertex.
            method: "heap" or "array" Dijkstra, used when the source's table
                is not cached yet.

        Returns:
            Vertices from `source` to `destination` inclusive, `[source]` when
            they are equal, or an empty list if there is no path.

        Raises:
            KeyError: If either vertex does not exist.
        """
        source_id = self._id(source)
        destination_id = self._id(destination)
        try:
            ids = trace_path(source_id, destination_id, self._spf_table(source_id, method))
        except IndexError:
            # Destination newer than the cached table, so it cannot be reached
            return []
        return [self._vertices[i] for i in ids]

    def distance(self, source: E, destination: E) -> Distance:
        """Return the minimum path weight, or `math.inf` if unreachable.

        Raises:
            KeyError: If either vertex does not exist.
        """
        source_id = self._id(source)
        destination_id = self._id(destination)
        try:
            return self._spf_table(source_id).dist[destination_id]
        except IndexError:
            return math.inf

    def shortest_path_table(self, source: E) -> Dict[E, Tuple[Optional[E], Distance]]:
        """Return `{vertex: (predecessor, distance)}` for vertices reachable from `source`.

        The source maps to `(None, 0)`.
        """
        table = self._spf_table(self._id(source))
        return {
            self._vertices[i]: (None if prev < 0 else self._vertices[prev], dist)
            for i, (prev, dist) in enumerate(table)
            if math.isfinite(dist)
        }

    def get_connected(self, vertex: E) -> List[E]:
        """Return every vertex with a path to `vertex`, `vertex` included, in id order."""
        return [self._vertices[i] for i in reaching_ids(self._matrix, self._id(vertex))]

    #
    # Cuts and clustering
    #
    def min_cut(self, rng: Optional[random.Random] = None) -> Cut:
        """Run one Karger contraction trial; the cut holds vertices, not ids."""
        return min_cut(self._matrix, rng).map(self._vertices.__getitem__)

    def karger(
        self,
        attempts: Optional[int] = None,
        rng: Optional[random.Random] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Cut:
        """Return the best cut over `attempts` Karger trials; the cut holds vertices.

        `attempts` defaults to an estimate based on the vertex count.
        """
        if attempts is None:
            attempts = CLUSTERING_CONFIG.estimate_attempts(len(self))
        return karger(self._matrix, attempts, rng, cancel_event).map(
            self._vertices.__getitem__
        )

    def highly_connected_subgraphs(
        self,
        connectedness: Optional[float] = None,
        attempts: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List["MatrixGraph[E]"]:
        """Partition the graph into highly connected subgraphs.

        See `amgraph.algorithms.clustering.highly_connected_subgraphs`.
        """
        # Import here to avoid circular import
        from amgraph.algorithms.clustering import highly_connected_subgraphs

        return highly_connected_subgraphs(
            self,
            connectedness=connectedness,
            attempts=attempts,
            seed=seed,
            rng=rng,
            cancel_event=cancel_event,
        )

    #
    # Representation
    #
    def __str__(self) -> str:
        return "".join(
            "[" + "][".join(" " if w == NO_EDGE else str(w) for w in row) + "]\n"
            for row in self._matrix.tolist()
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(vertices={self._vertices!r}, edges={len(self.get_edges())})"


def _check_vertex(vertex: object) -> None:
    if vertex is None:
        raise ValueError("Vertices cannot be None.")


def graph_of(vertices: Sequence[E], edges: Iterable[Tuple[E, E, int]] = ()) -> MatrixGraph[E]:
    """Build a graph from a vertex list and `(source, destination, weight)` triples."""
    graph = MatrixGraph(vertices)
    for source, destination, weight in edges:
        graph.set(source, destination, weight)
    return graph
