"""Randomized minimum cut by edge contraction (Karger's algorithm).

A single contraction trial shuffles the edge list and merges the clusters
at both ends of each edge until two clusters remain. Every directed edge is
one contraction candidate, so a pair joined in both directions is twice as
likely to be contracted, matching how cut sizes are counted.
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from itertools import chain
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from amgraph.algorithms.base import NO_EDGE, WeightMatrix
from amgraph.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Cut:
    """A partition of the vertices into two clusters.

    Ordered by desirability as a minimum cut: fewer cut edges first, then the
    more balanced partition (larger smaller side).

    Attributes:
        size: Number of directed edges crossing the partition; -1 when the
            graph has a single vertex and no cut exists.
        cluster1: Vertices on one side.
        cluster2: Vertices on the other side.
    """

    size: int
    cluster1: Tuple[Any, ...]
    cluster2: Tuple[Any, ...]

    def min_cluster(self) -> int:
        """Return the size of the smaller side."""
        return min(len(self.cluster1), len(self.cluster2))

    @property
    def is_degenerate(self) -> bool:
        return self.size == -1

    def sort_key(self) -> Tuple[int, int]:
        return self.size, -self.min_cluster()

    def __lt__(self, other: "Cut") -> bool:
        if not isinstance(other, Cut):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def map(self, transform: Callable[[Any], Any]) -> "Cut":
        """Return the same cut with every member passed through `transform`."""
        return Cut(
            self.size,
            tuple(transform(v) for v in self.cluster1),
            tuple(transform(v) for v in self.cluster2),
        )


DEGENERATE_CUT = Cut(-1, (), ())


class _ContractionForest:
    """Cluster membership during contraction.

    The cluster whose representative has the smaller id is merged into the
    one with the larger id.
    """

    __slots__ = ("parent", "members", "count")

    def __init__(self, size: int) -> None:
        self.parent = list(range(size))
        self.members: List[List[int]] = [[i] for i in range(size)]
        self.count = size

    def find(self, vertex: int) -> int:
        root = vertex
        while root != self.parent[root]:
            root = self.parent[root]
        while vertex != root:
            self.parent[vertex], vertex = root, self.parent[vertex]
        return root

    def union(self, a: int, b: int) -> bool:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        big, small = max(root_a, root_b), min(root_a, root_b)
        self.parent[small] = big
        self.members[big] = self.members[small] + self.members[big]
        self.members[small] = []
        self.count -= 1
        return True

    def clusters(self) -> List[List[int]]:
        """Return member lists ordered by representative id."""
        return [self.members[i] for i in range(len(self.parent)) if self.parent[i] == i]


def _contraction_edges(has_edge: np.ndarray) -> List[Tuple[int, int]]:
    # One (high, low) entry per directed edge between distinct vertices
    multiplicity = np.tril(has_edge, -1).astype(np.int64) + np.tril(has_edge.T, -1)
    highs, lows = np.nonzero(multiplicity)
    return [
        (high, low)
        for high, low, count in zip(
            highs.tolist(), lows.tolist(), multiplicity[highs, lows].tolist()
        )
        for _ in range(count)
    ]


def min_cut(matrix: WeightMatrix, rng: Optional[random.Random] = None) -> Cut:
    """Run one contraction trial and return the cut it produces.

    Args:
        matrix: Square weight matrix.
        rng: Random source; a fresh unseeded one when omitted.

    Returns:
        - `DEGENERATE_CUT` if everything collapsed into one cluster.
        - A cut of size 0 splitting the surviving clusters in half (by
          representative order) if edges ran out with more than two clusters
          left, i.e. the graph is disconnected.
        - Otherwise the number of directed edges between the two surviving
          clusters, in either direction, and their members.
    """
    rng = rng or random.Random()
    has_edge = matrix != NO_EDGE

    edges = _contraction_edges(has_edge)
    rng.shuffle(edges)

    forest = _ContractionForest(matrix.shape[0])
    for high, low in edges:
        if forest.count <= 2:
            break
        forest.union(high, low)

    if forest.count == 1:
        return DEGENERATE_CUT

    clusters = forest.clusters()
    if forest.count == 2:
        first, second = clusters
        crossing = int(
            has_edge[np.ix_(first, second)].sum() + has_edge[np.ix_(second, first)].sum()
        )
        return Cut(crossing, tuple(sorted(first)), tuple(sorted(second)))

    half = len(clusters) // 2
    return Cut(
        0,
        tuple(sorted(chain.from_iterable(clusters[:half]))),
        tuple(sorted(chain.from_iterable(clusters[half:]))),
    )


def karger(
    matrix: WeightMatrix,
    attempts: int,
    rng: Optional[random.Random] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Cut:
    """Return the best cut over `attempts` contraction trials.

    `cancel_event` is checked before every trial after the first; once it is
    set the best cut found so far is returned.

    Raises:
        ValueError: If `attempts` is less than 1.
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}.")
    rng = rng or random.Random()

    best = min_cut(matrix, rng)
    for attempt in range(1, attempts):
        if cancel_event is not None and cancel_event.is_set():
            logger.info(
                "Min-cut search cancelled after %d of %d attempts", attempt, attempts
            )
            break
        cut = min_cut(matrix, rng)
        if cut < best:
            best = cut

    logger.debug(
        "Best cut of %d vertices: size=%d, sides=%d/%d",
        matrix.shape[0],
        best.size,
        len(best.cluster1),
        len(best.cluster2),
    )
    return best


def estimate_karger_success_rate(
    matrix: WeightMatrix,
    attempts: int,
    repetitions: int,
    rng: Optional[random.Random] = None,
    reference_attempts: int = 5000,
    update_interval: Optional[int] = None,
    max_runs: int = 100_000,
) -> float:
    """Estimate how often `karger(matrix, attempts)` finds the minimum cut.

    The reference minimum is taken from a `reference_attempts` run. Each
    repetition counts `karger` runs up to and including the first one that
    misses the reference size; with mean count m the success probability of
    a single run is (m - 1) / m.

    Args:
        matrix: Square weight matrix.
        attempts: Trials per `karger` call being measured.
        repetitions: Number of misses to observe.
        rng: Random source.
        reference_attempts: Trials used to establish the reference cut size.
        update_interval: Log progress every this many repetitions.
        max_runs: Cap on runs per repetition for graphs where misses are rare.

    Returns:
        Estimated probability of a single `karger` call finding the minimum cut.

    Raises:
        ValueError: If `repetitions` or `max_runs` is less than 1.
        RuntimeError: If a measured run beats the reference cut, meaning the
            reference itself was not minimal.
    """
    if repetitions < 1:
        raise ValueError(f"repetitions must be at least 1, got {repetitions}.")
    if max_runs < 1:
        raise ValueError(f"max_runs must be at least 1, got {max_runs}.")
    rng = rng or random.Random()
    reference = karger(matrix, reference_attempts, rng).size

    total_runs = 0
    for repetition in range(1, repetitions + 1):
        for runs in range(1, max_runs + 1):
            found = karger(matrix, attempts, rng).size
            if found < reference:
                raise RuntimeError(
                    f"Reference min-cut of size {reference} beaten by a cut of size {found}."
                )
            if found > reference:
                break
        else:
            logger.warning("No miss observed within %d runs", max_runs)
        total_runs += runs

        if update_interval and repetition % update_interval == 0:
            mean = total_runs / repetition
            logger.info(
                "%d/%d repetitions, running success rate %.6f",
                repetition,
                repetitions,
                (mean - 1) / mean,
            )

    mean_runs = total_runs / repetitions
    return (mean_runs - 1) / mean_runs
