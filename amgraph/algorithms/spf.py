"""Single-source shortest paths over an adjacency weight matrix.

Two Dijkstra variants produce the same `SpfTable`:

* `dijkstra_heap` drives relaxation with a decrease-key priority queue and
  runs in O(V^2 * log(V)) on the matrix representation.
* `dijkstra_array` scans the distance vector for the next vertex instead of
  using a heap; O(V^2), usually faster on small dense graphs.

Both stop once no unvisited vertex has a finite distance, so vertices that
cannot be reached keep `NO_PREDECESSOR` and an infinite distance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np

from amgraph.algorithms.base import (
    NO_EDGE,
    NO_PREDECESSOR,
    Distance,
    WeightMatrix,
    successor_ids,
)
from amgraph.algorithms.heap import HeapNode, PriorityQueue
from amgraph.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SpfTable:
    """Shortest-path result for one source.

    Attributes:
        source: Source vertex id.
        prev: Predecessor id per destination id.
        dist: Distance per destination id (`math.inf` when unreached).
    """

    source: int
    prev: List[int]
    dist: List[Distance]

    def __len__(self) -> int:
        return len(self.prev)

    def __getitem__(self, destination: int) -> Tuple[int, Distance]:
        return self.prev[destination], self.dist[destination]

    def __iter__(self) -> Iterator[Tuple[int, Distance]]:
        return iter(zip(self.prev, self.dist))


def dijkstra_heap(matrix: WeightMatrix, source: int) -> SpfTable:
    """Compute the shortest-path table from `source` using a priority queue.

    Args:
        matrix: Square weight matrix.
        source: Source vertex id.

    Returns:
        SpfTable for `source`.
    """
    size = matrix.shape[0]
    prev = [NO_PREDECESSOR] * size
    dist: List[Distance] = [math.inf] * size
    dist[source] = 0

    queue: PriorityQueue[Distance, int] = PriorityQueue()
    handles: List[Optional[HeapNode[Distance, int]]] = [None] * size
    handles[source] = queue.insert(0, source)

    while queue:
        current = queue.extract_minimum()
        if current is None:
            break
        row = matrix[current]
        current_dist = dist[current]

        for neighbor in successor_ids(matrix, current):
            handle = handles[neighbor]
            if handle is not None and handle.extracted:
                continue
            new_dist = current_dist + int(row[neighbor])
            if new_dist < dist[neighbor]:
                dist[neighbor] = new_dist
                prev[neighbor] = current
                if handle is None:
                    handles[neighbor] = queue.insert(new_dist, neighbor)
                else:
                    queue.decrease_key(handle, new_dist)

    return SpfTable(source, prev, dist)


def dijkstra_array(matrix: WeightMatrix, source: int) -> SpfTable:
    """Compute the shortest-path table from `source` without a heap.

    The next vertex is the reached, unvisited one with the smallest distance
    (lowest id on ties). Distances are kept as exact int64 sums alongside a
    reached mask, so they match `dijkstra_heap` as long as no path weight
    overflows int64.

    Args:
        matrix: Square weight matrix.
        source: Source vertex id.

    Returns:
        SpfTable for `source`.
    """
    size = matrix.shape[0]
    dist = np.zeros(size, dtype=np.int64)
    reached = np.zeros(size, dtype=bool)
    reached[source] = True
    prev = np.full(size, NO_PREDECESSOR, dtype=np.int64)
    visited = np.zeros(size, dtype=bool)

    while True:
        frontier = np.flatnonzero(reached & ~visited)
        if frontier.size == 0:
            break
        current = int(frontier[np.argmin(dist[frontier])])
        visited[current] = True

        row = matrix[current]
        candidate = dist[current] + row
        improved = (row != NO_EDGE) & ~visited & (~reached | (candidate < dist))
        dist[improved] = candidate[improved]
        prev[improved] = current
        reached |= improved

    return SpfTable(
        source,
        prev.tolist(),
        [d if r else math.inf for d, r in zip(dist.tolist(), reached.tolist())],
    )


SPF_METHODS: Dict[str, Callable[[WeightMatrix, int], SpfTable]] = {
    "heap": dijkstra_heap,
    "array": dijkstra_array,
}


def spf(matrix: WeightMatrix, source: int, method: str = "heap") -> SpfTable:
    """Compute the shortest-path table from `source` with the named method.

    Raises:
        ValueError: If `method` is not one of `SPF_METHODS`.
    """
    try:
        algorithm = SPF_METHODS[method]
    except KeyError:
        raise ValueError(
            f"Unknown shortest-path method '{method}'. Expected one of {sorted(SPF_METHODS)}."
        ) from None
    logger.debug("Computing %s Dijkstra table from vertex id %d", method, source)
    return algorithm(matrix, source)


def trace_path(source: int, destination: int, table: SpfTable) -> List[int]:
    """Walk predecessor links from `destination` back to `source`.

    Args:
        source: Source vertex id the table was computed from.
        destination: Destination vertex id.
        table: Shortest-path table for `source`.

    Returns:
        Vertex ids from `source` to `destination` inclusive, `[source]` when
        they are equal, or an empty list if `destination` is unreachable.

    Raises:
        IndexError: If `destination` is outside the table.
    """
    if destination == source:
        return [source]

    path = [destination]
    current = destination
    while current != source:
        current = table.prev[current]
        if current == NO_PREDECESSOR:
            return []
        path.append(current)
    path.reverse()
    return path
