"""Binary-heap priority queue with handle-based decrease-key.

`heapq` has no decrease-key, so a decreased entry is re-pushed and the stale
copy is skipped when it surfaces (lazy deletion). Each insert returns a
`HeapNode` handle that stays valid until its value is extracted.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

P = TypeVar("P")
V = TypeVar("V")


class HeapNode(Generic[P, V]):
    """Handle to an entry stored in a `PriorityQueue`."""

    __slots__ = ("priority", "value", "extracted")

    def __init__(self, priority: P, value: V) -> None:
        self.priority = priority
        self.value = value
        self.extracted = False

    def __repr__(self) -> str:
        return f"HeapNode(priority={self.priority!r}, value={self.value!r})"


class PriorityQueue(Generic[P, V]):
    """Min-priority queue supporting insert, extract-minimum and decrease-key.

    Complexity:
        - insert: O(log n)
        - extract_minimum: amortized O(log n)
        - decrease_key: O(log n)
        - peek_minimum_value: amortized O(1)
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[P, int, HeapNode[P, V]]] = []
        self._counter: Iterator[int] = count()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def insert(self, priority: P, value: V) -> HeapNode[P, V]:
        """Insert `value` with `priority` and return its handle."""
        node = HeapNode(priority, value)
        heappush(self._heap, (priority, next(self._counter), node))
        self._size += 1
        return node

    def decrease_key(self, node: HeapNode[P, V], priority: P) -> None:
        """Lower the priority of a queued entry.

        Raises:
            ValueError: If the entry was already extracted or `priority` is
                greater than its current priority.
        """
        if node.extracted:
            raise ValueError(f"{node!r} is no longer in the queue.")
        if priority > node.priority:  # type: ignore[operator]
            raise ValueError(
                f"New priority {priority!r} is greater than current priority {node.priority!r}."
            )
        if priority == node.priority:
            return
        node.priority = priority
        heappush(self._heap, (priority, next(self._counter), node))

    def _discard_stale(self) -> None:
        heap = self._heap
        while heap:
            priority, _, node = heap[0]
            if not node.extracted and priority == node.priority:
                return
            heappop(heap)

    def extract_minimum(self) -> Optional[V]:
        """Remove and return the value with the lowest priority, or None if empty."""
        self._discard_stale()
        if not self._heap:
            return None
        _, _, node = heappop(self._heap)
        node.extracted = True
        self._size -= 1
        return node.value

    def peek_minimum_value(self) -> Optional[V]:
        """Return the value with the lowest priority without removing it."""
        self._discard_stale()
        if not self._heap:
            return None
        return self._heap[0][2].value
