"""Binary heap primitives over lists of players.

All heaps are 0-indexed with children at ``2i+1`` and ``2i+2``.

- ``replace_min``: overwrite the root of a min-heap and percolate it down.
  Unlike the textbook hole-based sift, the root is a live element, not an
  empty slot.
- ``heapify_max`` / ``pop_max``: in-place max-heap build and pop used by the
  offline heap ranker. ``heapq`` only exposes min-heaps publicly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import MutableSequence

    from leaderboard.players import Player


def replace_min(heap: MutableSequence[Player], target: Player, size: int | None = None) -> None:
    """Replace the minimum of a min-heap with ``target``.

    Runs in O(log H). An empty heap is left untouched.

    Args:
        heap: Min-heap by level. Only ``heap[:size]`` is considered.
        target: Player to install
        size: Heap length (defaults to ``len(heap)``)
    """
    if size is None:
        size = len(heap)
    if size <= 0:
        return

    heap[0] = target
    current = 0

    while True:
        left = 2 * current + 1
        right = left + 1
        smallest = current

        if left < size and heap[left].level < heap[smallest].level:
            smallest = left
        if right < size and heap[right].level < heap[smallest].level:
            smallest = right

        if smallest == current:
            break

        heap[current], heap[smallest] = heap[smallest], heap[current]
        current = smallest


def is_min_heap(heap: MutableSequence[Player], size: int | None = None) -> bool:
    """Check ``parent.level <= child.level`` for every pair in ``heap[:size]``."""
    if size is None:
        size = len(heap)
    return all(heap[(i - 1) // 2].level <= heap[i].level for i in range(1, size))


def _sift_down_max(items: MutableSequence[Player], pos: int, end: int) -> None:
    while True:
        left = 2 * pos + 1
        right = left + 1
        largest = pos

        if left < end and items[left].level > items[largest].level:
            largest = left
        if right < end and items[right].level > items[largest].level:
            largest = right

        if largest == pos:
            return

        items[pos], items[largest] = items[largest], items[pos]
        pos = largest


def heapify_max(items: MutableSequence[Player]) -> None:
    """Arrange ``items`` into a max-heap by level in O(N)."""
    n = len(items)
    for pos in range(n // 2 - 1, -1, -1):
        _sift_down_max(items, pos, n)


def pop_max(items: MutableSequence[Player], end: int) -> Player:
    """Move the maximum of the max-heap ``items[:end]`` to ``items[end - 1]``.

    The remaining ``items[:end - 1]`` is a max-heap again afterwards.

    Returns:
        The player now stored at ``items[end - 1]``
    """
    last = end - 1
    items[0], items[last] = items[last], items[0]
    _sift_down_max(items, 0, last)
    return items[last]
