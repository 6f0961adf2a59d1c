"""Pytest configuration and fixtures."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest

from leaderboard.players import Player

if TYPE_CHECKING:
    from collections.abc import Callable


def players_from_levels(levels: list[int], prefix: str = "P") -> list[Player]:
    """Build players named ``{prefix}{index}`` from a list of levels."""
    return [Player(name=f"{prefix}{i}", level=level) for i, level in enumerate(levels)]


@pytest.fixture
def scenario_players() -> list[Player]:
    """Ten players with levels 0..9 in scrambled order."""
    return players_from_levels([5, 3, 8, 1, 9, 2, 7, 4, 6, 0])


@pytest.fixture
def make_players() -> Callable[[list[int]], list[Player]]:
    """Factory building players from a list of levels."""
    return players_from_levels


@pytest.fixture
def random_players() -> Callable[..., list[Player]]:
    """Factory for seeded random populations."""

    def _make(count: int, seed: int = 7, max_level: int = 1000) -> list[Player]:
        rng = random.Random(seed)
        return players_from_levels([rng.randint(0, max_level) for _ in range(count)])

    return _make
