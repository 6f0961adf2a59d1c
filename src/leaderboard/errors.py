"""Leaderboard exception hierarchy.

Exception hierarchy:
- LeaderboardError (base)
  - StreamExhaustedError (next_player() called on an empty stream)
  - InvalidIntervalError (reporting interval is not a positive integer)

Empty inputs are not errors: zero-length lists and streams produce
empty results.
"""

from __future__ import annotations


class LeaderboardError(Exception):
    """Base exception for all leaderboard errors."""

    pass


class StreamExhaustedError(LeaderboardError):
    """A player was requested from a stream with nothing remaining.

    Attributes:
        produced: Number of players the stream yielded before running dry
    """

    def __init__(self, produced: int, message: str | None = None) -> None:
        self.produced = produced
        msg = message or f"No more players to fetch (stream produced {produced})"
        super().__init__(msg)


class InvalidIntervalError(LeaderboardError, ValueError):
    """Reporting interval is zero, negative, or not an integer.

    Raised before any stream consumption begins.

    Attributes:
        interval: The rejected value
    """

    def __init__(self, interval: object) -> None:
        self.interval = interval
        super().__init__(f"reporting_interval must be a positive integer, got {interval!r}")
