"""LEADERBOARD - offline and online top-K ranking of scored players.

Offline rankers select the top 10% of an in-memory population; the online
ranker tracks the top K of a stream with periodic cutoff reporting.

Note: version is sourced from package metadata (pyproject.toml).
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from leaderboard.errors import InvalidIntervalError, LeaderboardError, StreamExhaustedError
from leaderboard.heap import replace_min
from leaderboard.offline import heap_rank, quickselect_rank
from leaderboard.online import rank_incoming
from leaderboard.players import Player
from leaderboard.result import RankingResult
from leaderboard.stream import GeneratedPlayerStream, PlayerStream, VectorPlayerStream


def _pkg_version() -> str:
    try:
        return version("leaderboard")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _pkg_version()

__all__ = [
    "GeneratedPlayerStream",
    "InvalidIntervalError",
    "LeaderboardError",
    "Player",
    "PlayerStream",
    "RankingResult",
    "StreamExhaustedError",
    "VectorPlayerStream",
    "__version__",
    "heap_rank",
    "quickselect_rank",
    "rank_incoming",
    "replace_min",
]
