"""Unweighted traversal over an adjacency weight matrix.

All functions operate on vertex ids and follow only entries that hold a
real weight. Successors are expanded in ascending id order.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Tuple

import numpy as np

from amgraph.algorithms.base import NO_EDGE, WeightMatrix, successor_ids

_UNSEEN = -1
_START = -2


def search(
    matrix: WeightMatrix, use_depth_first: bool, source: int, destination: int
) -> List[int]:
    """Queue-based search for a path from `source` to `destination`.

    A vertex is recorded with its discoverer the first time it is seen and
    is never re-parented, so the search can stop as soon as `destination`
    is discovered.

    Args:
        matrix: Square weight matrix.
        use_depth_first: Expand the most recently discovered vertex first
            (stack order) instead of the oldest (FIFO order).
        source: Start vertex id.
        destination: Target vertex id.

    Returns:
        Vertex ids from `source` to `destination` inclusive, or an empty list
        if `destination` is unreachable.
    """
    prev = [_UNSEEN] * matrix.shape[0]
    prev[source] = _START
    queue: Deque[int] = deque([source])

    while queue and prev[destination] == _UNSEEN:
        current = queue.popleft()
        for neighbor in successor_ids(matrix, current):
            if prev[neighbor] != _UNSEEN or neighbor == current:
                continue
            if use_depth_first:
                queue.appendleft(neighbor)
            else:
                queue.append(neighbor)
            prev[neighbor] = current
            if neighbor == destination:
                break

    if prev[destination] == _UNSEEN:
        return []

    path = [destination]
    current = destination
    while current != source:
        current = prev[current]
        path.append(current)
    path.reverse()
    return path


def depth_first_search(matrix: WeightMatrix, source: int, destination: int) -> List[int]:
    """Depth-first path search that explores each branch to exhaustion.

    Same visiting order as the textbook recursive formulation, but the call
    stack is an explicit list of successor iterators so depth is not bound
    by the interpreter's recursion limit.

    Returns:
        Vertex ids from `source` to `destination` inclusive, `[source]` when
        they are equal, or an empty list if `destination` is unreachable.
    """
    if source == destination:
        return [source]

    visited = np.zeros(matrix.shape[0], dtype=bool)
    visited[source] = True
    stack: List[Tuple[int, Iterator[int]]] = [
        (source, iter(successor_ids(matrix, source)))
    ]

    while stack:
        _, successors = stack[-1]
        for neighbor in successors:
            if visited[neighbor]:
                continue
            if neighbor == destination:
                return [vertex for vertex, _ in stack] + [neighbor]
            visited[neighbor] = True
            stack.append((neighbor, iter(successor_ids(matrix, neighbor))))
            break
        else:
            stack.pop()

    return []


def reaching_ids(matrix: WeightMatrix, target: int) -> List[int]:
    """Return ids of every vertex with a path to `target`, `target` included.

    Runs a breadth-first search over reversed edges.
    """
    reached = np.zeros(matrix.shape[0], dtype=bool)
    reached[target] = True
    queue: Deque[int] = deque([target])

    while queue:
        current = queue.popleft()
        for predecessor in np.flatnonzero(matrix[:, current] != NO_EDGE).tolist():
            if not reached[predecessor]:
                reached[predecessor] = True
                queue.append(predecessor)

    return np.flatnonzero(reached).tolist()
