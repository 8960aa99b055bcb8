"""Random edge generation for existing vertex sets."""

from __future__ import annotations

import random
from typing import Any, Optional

import numpy as np

from amgraph.algorithms.base import NO_EDGE, empty_matrix
from amgraph.algorithms.traversal import reaching_ids
from amgraph.graph.matrix_graph import MatrixGraph
from amgraph.logging import get_logger

logger = get_logger(__name__)


def randomize(
    graph: MatrixGraph[Any],
    probability: float,
    min_weight: int,
    max_weight: int,
    allow_disjoint: bool = True,
    rng: Optional[random.Random] = None,
) -> None:
    """Replace every edge of `graph` with random ones.

    Each ordered vertex pair, self pairs included, independently receives an
    edge with `probability`, weighted uniformly in `[min_weight, max_weight)`.

    Args:
        graph: Graph to rewrite in place.
        probability: Chance of an edge for each ordered pair, in [0, 1].
        min_weight: Smallest weight (inclusive).
        max_weight: Largest weight (exclusive).
        allow_disjoint: If False, connect the result with `merge_disjoint`.
        rng: Random source.

    Raises:
        ValueError: If `probability` is outside [0, 1] or the weight range is empty.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be within [0, 1], got {probability}.")
    _check_weight_range(min_weight, max_weight)
    rng = rng or random.Random()

    size = len(graph)
    matrix = empty_matrix(size)
    for source in range(size):
        for destination in range(size):
            if rng.random() < probability:
                matrix[source, destination] = rng.randrange(min_weight, max_weight)
    graph._replace_matrix(matrix)

    if not allow_disjoint:
        merge_disjoint(graph, min_weight, max_weight, rng)


def merge_disjoint(
    graph: MatrixGraph[Any],
    min_weight: int,
    max_weight: int,
    rng: Optional[random.Random] = None,
) -> int:
    """Add random edges until every vertex is reachable ignoring direction.

    While a randomly picked vertex cannot reach some others, an edge with a
    random weight and direction is added between it and one of them.

    Returns:
        Number of edges added.

    Raises:
        ValueError: If the weight range is empty.
    """
    _check_weight_range(min_weight, max_weight)
    rng = rng or random.Random()

    size = len(graph)
    if size < 2:
        return 0

    has_edge = graph.matrix != NO_EDGE
    bidirectional = np.where(has_edge | has_edge.T, 1, NO_EDGE)

    added = 0
    while True:
        vertex = rng.randrange(size)
        reached = set(reaching_ids(bidirectional, vertex))
        unreachable = [i for i in range(size) if i not in reached]
        if not unreachable:
            break

        weight = rng.randrange(min_weight, max_weight)
        other = rng.choice(unreachable)
        source, destination = (vertex, other) if rng.random() < 0.5 else (other, vertex)
        graph._set_by_id(source, destination, weight)
        bidirectional[source, destination] = bidirectional[destination, source] = 1
        added += 1

    logger.debug("Merged disjoint components of %d vertices with %d edges", size, added)
    return added


def _check_weight_range(min_weight: int, max_weight: int) -> None:
    if max_weight <= min_weight:
        raise ValueError(f"Empty weight range [{min_weight}, {max_weight}).")
