from __future__ import annotations

from typing import List, Union

import numpy as np
import numpy.typing as npt

#: Square weight matrix; entry [i, j] is the weight of the edge i -> j.
WeightMatrix = npt.NDArray[np.int64]

#: Represents an accumulated path weight; `math.inf` when unreachable.
Distance = Union[int, float]

#: Matrix value meaning there is no directed edge between two vertex ids.
NO_EDGE = -1

#: Predecessor value of the source vertex and of unreached vertices.
NO_PREDECESSOR = -1


def empty_matrix(size: int) -> WeightMatrix:
    """Return a `size` x `size` matrix with no edges."""
    return np.full((size, size), NO_EDGE, dtype=np.int64)


def successor_ids(matrix: WeightMatrix, vertex: int) -> List[int]:
    """Return ids with an edge from `vertex`, in ascending order (self-loops included)."""
    return np.flatnonzero(matrix[vertex] != NO_EDGE).tolist()
