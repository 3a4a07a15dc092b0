"""
priority_queue.py — Binary Min-Heap
====================================
Hands items back in non-decreasing priority order.

Design decisions:
  - Array-backed binary heap of `(item, priority)` pairs; index 0 is
    always the minimum.
  - Strict `<` comparisons on both bubble-up and bubble-down, so an
    element never overtakes an equal-priority one it is compared with.
    Between two equal children the left one wins.
  - No decrease-key and no de-duplication.  Dijkstra pushes a node again
    whenever it finds a shorter route; the consumer drops the stale
    copies via its visited set when they surface.
  - `pop()` on an empty queue returns None.  That is the "frontier is
    exhausted" signal, not an error.
"""

from typing import Any, List, Optional, Tuple


class PriorityQueue:
    """
    Usage:
        pq = PriorityQueue()
        pq.add("B", 3)
        pq.add("A", 1)
        pq.pop()      # "A"
        pq.empty      # False
    """

    __slots__ = ("_heap",)

    def __init__(self):
        self._heap: List[Tuple[Any, float]] = []

    @property
    def empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def add(self, item: Any, priority: float) -> None:
        self._heap.append((item, priority))
        self._bubble_up(len(self._heap) - 1)

    def pop(self) -> Optional[Any]:
        if not self._heap:
            return None
        top = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._bubble_down(0)
        return top[0]

    def peek(self) -> Optional[Tuple[Any, float]]:
        """(item, priority) at the root, without removing it."""
        return self._heap[0] if self._heap else None

    def clear(self) -> None:
        self._heap = []

    def snapshot(self) -> List[Tuple[Any, float]]:
        """Entries in heap-array order (for overlays / debugging)."""
        return list(self._heap)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _bubble_up(self, i: int) -> None:
        heap = self._heap
        el = heap[i]
        while i > 0:
            parent = (i - 1) >> 1
            if el[1] >= heap[parent][1]:
                break
            heap[i] = heap[parent]
            i = parent
        heap[i] = el

    def _bubble_down(self, i: int) -> None:
        heap = self._heap
        size = len(heap)
        el = heap[i]
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            swap = None
            if left < size and heap[left][1] < el[1]:
                swap = left
            if right < size and heap[right][1] < (el[1] if swap is None else heap[swap][1]):
                swap = right
            if swap is None:
                break
            heap[i] = heap[swap]
            i = swap
        heap[i] = el
