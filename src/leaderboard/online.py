"""Online top-K ranking over a player stream.

Keeps a buffer of at most ``reporting_interval`` players:

1. Fill phase: append until the buffer holds ``reporting_interval``
   players, then heapify it into a min-heap (weakest player at index 0).
2. Heap phase: an incoming player strictly above the current minimum
   replaces it via ``replace_min``; anything else is discarded, so on
   equal levels the incumbent stays.

After every ``reporting_interval`` players a cutoff is recorded (the lowest
level still in the buffer), plus one for the final count if it is not a
multiple.

Memory is O(reporting_interval) regardless of stream length.
"""

from __future__ import annotations

import heapq
import logging
import operator
import time
from typing import TYPE_CHECKING

from leaderboard.errors import InvalidIntervalError
from leaderboard.heap import replace_min
from leaderboard.players import Player, ranking_key
from leaderboard.result import RankingResult

if TYPE_CHECKING:
    from leaderboard.stream import PlayerStream

logger = logging.getLogger(__name__)


def validate_interval(reporting_interval: int) -> int:
    """Return ``reporting_interval`` as an int or raise InvalidIntervalError.

    Anything supporting ``__index__`` (e.g. ``numpy.int64``) is accepted;
    ``bool`` is not.
    """
    if isinstance(reporting_interval, bool):
        raise InvalidIntervalError(reporting_interval)
    try:
        interval = operator.index(reporting_interval)
    except TypeError:
        raise InvalidIntervalError(reporting_interval) from None
    if interval <= 0:
        raise InvalidIntervalError(reporting_interval)
    return interval


def _current_min(buffer: list[Player], heap_ordered: bool) -> int:
    # Before heapify the buffer is in arrival order
    if heap_ordered:
        return buffer[0].level
    return min(p.level for p in buffer)


def rank_incoming(stream: PlayerStream, reporting_interval: int) -> RankingResult:
    """Exhaust ``stream``, tracking the top ``reporting_interval`` players.

    Args:
        stream: Source of players; read until ``remaining()`` is 0
        reporting_interval: Size of the tracked top set and the cutoff
            reporting period

    Returns:
        RankingResult where:
        - ``top``: the ``reporting_interval`` highest players seen (fewer
          if the stream was shorter), ascending
        - ``cutoffs``: milestone -> lowest level in the top set at that
          point, for every multiple of the interval and the final count
        - ``elapsed_ms``: selection and bookkeeping time, excluding
          stream reads

    Raises:
        InvalidIntervalError: Interval is not a positive int. Nothing is
            read from the stream in that case.
    """
    interval = validate_interval(reporting_interval)

    buffer: list[Player] = []
    cutoffs: dict[int, int] = {}
    heap_ordered = False
    count = 0
    replaced = 0
    elapsed = 0.0

    while stream.remaining() > 0:
        player = stream.next_player()

        start = time.perf_counter()
        count += 1

        if not heap_ordered:
            buffer.append(player)
            if len(buffer) == interval:
                heapq.heapify(buffer)
                heap_ordered = True
        elif player.level > buffer[0].level:
            replace_min(buffer, player)
            replaced += 1

        if count % interval == 0:
            cutoffs[count] = _current_min(buffer, heap_ordered)

        elapsed += time.perf_counter() - start

    start = time.perf_counter()

    if count > 0 and count not in cutoffs:
        cutoffs[count] = _current_min(buffer, heap_ordered)

    top = sorted(buffer, key=ranking_key)

    elapsed += time.perf_counter() - start
    elapsed_ms = elapsed * 1000

    logger.debug(
        "RANK_INCOMING_DONE count=%d interval=%d replaced=%d cutoffs=%d elapsed_ms=%.3f",
        count,
        interval,
        replaced,
        len(cutoffs),
        elapsed_ms,
    )

    return RankingResult(top=top, cutoffs=cutoffs, elapsed_ms=elapsed_ms)
