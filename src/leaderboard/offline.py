"""Offline top-10% ranking over an in-memory population.

Both rankers take a caller-owned list and REORDER IT IN PLACE:

- ``heap_rank`` leaves the list as a max-heap over ``[0, N - K)`` with the
  K extracted players in the tail.
- ``quickselect_rank`` leaves the list partitioned around index
  ``N - K``.

The list always keeps every player it was given. Neither algorithm is
stable; which equal-level players fall on the selected side of the
boundary is unspecified. ``top`` itself is always ordered by
``(level, name)``.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from leaderboard.heap import heapify_max, pop_max
from leaderboard.players import Player, ranking_key
from leaderboard.result import RankingResult

if TYPE_CHECKING:
    from collections.abc import MutableSequence

logger = logging.getLogger(__name__)

# Fraction selected by the offline rankers: top N // TOP_DIVISOR players
TOP_DIVISOR = 10


def top_count(n: int) -> int:
    """Number of players the offline rankers select from ``n``."""
    return n // TOP_DIVISOR


def heap_rank(players: MutableSequence[Player]) -> RankingResult:
    """Select the top 10% with an early-stopping heapsort.

    Steps:
        1. Heapify the whole list into a max-heap, O(N)
        2. Pop the maximum K times into the tail, O(K log N)
        3. Copy the tail out and sort it, O(K log K)

    With fewer than 10 players nothing is selected, but the list is still
    heapified.

    Args:
        players: Population to rank; reordered in place

    Returns:
        RankingResult with ``top`` ascending and empty ``cutoffs``
    """
    start = time.perf_counter()

    n = len(players)
    k = top_count(n)

    heapify_max(players)

    end = n
    for _ in range(k):
        pop_max(players, end)
        end -= 1

    top = sorted(players[end:], key=ranking_key)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug("HEAP_RANK_DONE n=%d k=%d elapsed_ms=%.3f", n, k, elapsed_ms)

    return RankingResult(top=top, cutoffs={}, elapsed_ms=elapsed_ms)


def quickselect_rank(players: MutableSequence[Player]) -> RankingResult:
    """Select the top 10% by partitioning around the 90th-percentile rank.

    Partitions in place so that every player at index >= ``N - K`` has a
    level >= every player before it, then sorts only that tail. Extra memory
    is the output list.

    Args:
        players: Population to rank; reordered in place (left untouched
            when fewer than 10 players)

    Returns:
        RankingResult with ``top`` ascending and empty ``cutoffs``
    """
    start = time.perf_counter()

    n = len(players)
    k = top_count(n)
    split = n - k

    if k > 0:
        select_nth(players, split)

    top = sorted(players[split:], key=ranking_key)

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug("QUICKSELECT_RANK_DONE n=%d k=%d elapsed_ms=%.3f", n, k, elapsed_ms)

    return RankingResult(top=top, cutoffs={}, elapsed_ms=elapsed_ms)


def _median_of_three(items: MutableSequence[Player], lo: int, hi: int) -> int:
    """Level of the median of the first, middle and last players of ``[lo, hi)``."""
    a = items[lo].level
    b = items[(lo + hi - 1) // 2].level
    c = items[hi - 1].level
    if a > b:
        a, b = b, a
    if b > c:
        b = c
    return max(a, b)


def _partition3(items: MutableSequence[Player], lo: int, hi: int, pivot: int) -> tuple[int, int]:
    """Three-way partition of ``items[lo:hi]`` around ``pivot`` level.

    Returns:
        ``(lt, gt)`` such that ``[lo, lt)`` < pivot, ``[lt, gt)`` == pivot,
        ``[gt, hi)`` > pivot
    """
    lt = lo
    i = lo
    gt = hi
    while i < gt:
        level = items[i].level
        if level < pivot:
            items[lt], items[i] = items[i], items[lt]
            lt += 1
            i += 1
        elif level > pivot:
            gt -= 1
            items[gt], items[i] = items[i], items[gt]
        else:
            i += 1
    return lt, gt


def select_nth(items: MutableSequence[Player], nth: int) -> None:
    """Partially order ``items`` in place around sorted position ``nth``.

    Afterwards ``items[nth]`` holds the player that would be there if the
    list were sorted by level, everything before it has a level <= it and
    everything after has a level >= it.

    Introselect: iterative quickselect with a median-of-three pivot and a
    three-way partition (so runs of equal levels finish in one pass). After
    ``2 * floor(log2(N))`` rounds without converging, the remaining window
    is sorted directly, bounding the worst case at O(N log N).
    """
    lo = 0
    hi = len(items)
    if not lo <= nth < hi:
        return

    depth_limit = 2 * max(hi.bit_length() - 1, 0)

    while hi - lo > 1:
        if depth_limit == 0:
            items[lo:hi] = sorted(items[lo:hi], key=ranking_key)
            return
        depth_limit -= 1

        pivot = _median_of_three(items, lo, hi)
        lt, gt = _partition3(items, lo, hi, pivot)

        if nth < lt:
            hi = lt
        elif nth >= gt:
            lo = gt
        else:
            return
