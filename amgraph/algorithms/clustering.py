"""Highly connected subgraph (HCS) clustering.

A graph is a cluster once its minimum cut is at least `connectedness` times
its vertex count. Otherwise it is split along the best cut Karger's algorithm
finds and both halves are clustered independently.
"""

from __future__ import annotations

import random
import threading
from typing import TYPE_CHECKING, List, Optional, Tuple, TypeVar

from amgraph.algorithms.mincut import karger
from amgraph.config import CLUSTERING_CONFIG, ClusteringConfig
from amgraph.logging import get_logger
from amgraph.seed_manager import SeedManager

if TYPE_CHECKING:
    from amgraph.graph.matrix_graph import MatrixGraph

E = TypeVar("E")

logger = get_logger(__name__)


class ClusteringCancelled(RuntimeError):
    """Raised when a clustering run is interrupted through its cancel event."""


def highly_connected_subgraphs(
    graph: "MatrixGraph[E]",
    connectedness: Optional[float] = None,
    attempts: Optional[int] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    cancel_event: Optional[threading.Event] = None,
    config: ClusteringConfig = CLUSTERING_CONFIG,
) -> List["MatrixGraph[E]"]:
    """Partition `graph` into highly connected subgraphs.

    Subgraphs are processed depth first, first cut side before second, so the
    result lists clusters in the same order a recursive split would.

    Args:
        graph: Graph to cluster. It is not modified.
        connectedness: Cut-size-to-vertex-count ratio at which a subgraph is
            accepted as a cluster. Defaults to `config.connectedness`.
        attempts: Karger trials per cut. Defaults to
            `config.estimate_attempts(size)` for each subgraph.
        seed: Master seed; every subgraph draws from its own derived stream.
        rng: Single random source shared by all cuts; overrides `seed`.
        cancel_event: Checked before every cut search and between Karger trials.
        config: Source of defaults.

    Returns:
        Independent graphs covering every vertex exactly once.

    Raises:
        ClusteringCancelled: If `cancel_event` is set before clustering completes.
    """
    if connectedness is None:
        connectedness = config.connectedness
    seeds = SeedManager(seed)

    clusters: List["MatrixGraph[E]"] = []
    stack: List[Tuple["MatrixGraph[E]", str]] = [(graph.copy(), "0")]

    while stack:
        current, position = stack.pop()
        size = len(current)
        trials = attempts if attempts is not None else config.estimate_attempts(size)
        cut_rng = rng if rng is not None else seeds.rng("hcs", position)

        _raise_if_cancelled(cancel_event, len(clusters))
        cut = karger(current.matrix, trials, cut_rng, cancel_event)
        _raise_if_cancelled(cancel_event, len(clusters))

        if cut.is_degenerate or cut.size >= connectedness * size:
            clusters.append(current)
            continue

        logger.debug(
            "Splitting %d vertices at %s along a cut of size %d into %d + %d",
            size,
            position,
            cut.size,
            len(cut.cluster1),
            len(cut.cluster2),
        )
        stack.append((current._subgraph_from_ids(cut.cluster2), position + ".1"))
        stack.append((current._subgraph_from_ids(cut.cluster1), position + ".0"))

    logger.debug("Found %d clusters in %d vertices", len(clusters), len(graph))
    return clusters


def _raise_if_cancelled(cancel_event: Optional[threading.Event], found: int) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ClusteringCancelled(f"Clustering cancelled after {found} clusters.")
