"""Reproducible random streams for the randomized graph algorithms."""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional

_SEED_MASK = 0x7FFFFFFF


class SeedManager:
    """Hands out one `random.Random` per subproblem of a seeded run.

    Clustering splits a graph into a tree of subgraphs and runs Karger on
    each. Keying every stream by the subgraph's position in that tree (for
    example ``("hcs", "0.1.0")``) makes each cut depend only on the master
    seed and the position, not on how many numbers earlier cuts consumed.

    Without a master seed every stream is seeded from the operating system.
    """

    __slots__ = ("master_seed",)

    def __init__(self, master_seed: Optional[int] = None) -> None:
        self.master_seed = master_seed

    def derive_seed(self, *path: Any) -> Optional[int]:
        """Return the 31-bit seed of the stream at `path`, or None when unseeded.

        `path` items are stringified, so ``("hcs", 0)`` and ``("hcs", "0")``
        name the same stream.
        """
        if self.master_seed is None:
            return None
        key = "/".join([str(self.master_seed), *map(str, path)])
        digest = hashlib.sha256(key.encode("utf-8")).digest()
        return int.from_bytes(digest[:4], "big") & _SEED_MASK

    def rng(self, *path: Any) -> random.Random:
        """Return a fresh random source for the stream at `path`."""
        return random.Random(self.derive_seed(*path))

    def __repr__(self) -> str:
        return f"SeedManager(master_seed={self.master_seed!r})"
