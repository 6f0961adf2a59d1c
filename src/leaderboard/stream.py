"""Pull-based player streams consumed by the online ranker.

The ranker only needs two calls: ``remaining()`` as the loop test and
``next_player()`` to fetch. A source that cannot report an accurate
remaining count must be adapted before it is handed to the ranker.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np

from leaderboard.errors import StreamExhaustedError
from leaderboard.players import Player
from leaderboard.population import DEFAULT_MAX_LEVEL, DEFAULT_SEED, draw_levels, player_name


class PlayerStream(Protocol):
    """Sequential, single-pass, single-consumer source of players."""

    def next_player(self) -> Player:
        """Return the next player; raise StreamExhaustedError if none remain."""
        ...

    def remaining(self) -> int:
        """Number of players not yet produced."""
        ...


class VectorPlayerStream:
    """Stream over a fixed sequence of players, in order.

    The sequence is copied on construction; later changes to the caller's
    list do not affect the stream.
    """

    def __init__(self, players: Sequence[Player]) -> None:
        self._players = list(players)
        self._index = 0

    def next_player(self) -> Player:
        if self._index >= len(self._players):
            raise StreamExhaustedError(produced=self._index)
        player = self._players[self._index]
        self._index += 1
        return player

    def remaining(self) -> int:
        return len(self._players) - self._index


class GeneratedPlayerStream:
    """Lazily generated synthetic stream of exactly ``count`` players.

    Levels are drawn from numpy in chunks, so memory stays at one chunk
    however long the stream is.

    Attributes:
        count: Total players the stream will produce
    """

    def __init__(
        self,
        count: int,
        seed: int = DEFAULT_SEED,
        max_level: int = DEFAULT_MAX_LEVEL,
        chunk_size: int = 4096,
    ) -> None:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        self.count = count
        self._rng = np.random.default_rng(seed)
        self._max_level = max_level
        self._chunk_size = chunk_size
        self._chunk: list[int] = []
        self._chunk_pos = 0
        self._produced = 0

    def next_player(self) -> Player:
        if self._produced >= self.count:
            raise StreamExhaustedError(produced=self._produced)
        if self._chunk_pos >= len(self._chunk):
            n = min(self._chunk_size, self.count - self._produced)
            self._chunk = draw_levels(self._rng, n, self._max_level)
            self._chunk_pos = 0
        level = self._chunk[self._chunk_pos]
        self._chunk_pos += 1
        player = Player(name=player_name(self._produced), level=level)
        self._produced += 1
        return player

    def remaining(self) -> int:
        return self.count - self._produced
