"""Configuration classes for amgraph components."""

import math
from dataclasses import dataclass


@dataclass
class ClusteringConfig:
    """Defaults for Karger min-cut search and highly-connected-subgraph clustering."""

    # Cut size relative to graph size at which a subgraph counts as a cluster
    connectedness: float = 0.5

    # Minimum number of contraction trials per min-cut search
    min_attempts: int = 10

    # Maximum number of contraction trials per min-cut search
    max_attempts: int = 5000

    def estimate_attempts(self, vertex_count: int) -> int:
        """Trials needed for Karger to find a minimum cut with high probability.

        One contraction finds a given minimum cut with probability at least
        2 / (n * (n - 1)); n^2 * ln(n) / 2 trials drive the miss rate below 1/n.
        """
        if vertex_count < 2:
            return self.min_attempts
        estimated = math.ceil(vertex_count**2 * math.log(vertex_count) / 2)
        return max(self.min_attempts, min(estimated, self.max_attempts))


# Global configuration instance
CLUSTERING_CONFIG = ClusteringConfig()
