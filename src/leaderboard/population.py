"""Seeded synthetic player populations.

Levels are drawn uniformly from ``[0, max_level]`` with numpy's
``default_rng`` so that a given seed always yields the same population.
"""

from __future__ import annotations

import numpy as np

from leaderboard.players import Player

DEFAULT_SEED = 42
DEFAULT_MAX_LEVEL = 2000

ROSTER: tuple[str, ...] = (
    "WYLDER",
    "GUARDIAN",
    "IRONEYE",
    "DUCHESS",
    "RAIDER",
    "REVENANT",
    "RECLUSE",
    "EXECUTOR",
)


def player_name(index: int) -> str:
    """Name for the ``index``-th generated player (e.g. ``DUCHESS_3``)."""
    return f"{ROSTER[index % len(ROSTER)]}_{index}"


def draw_levels(rng: np.random.Generator, count: int, max_level: int) -> list[int]:
    """Draw ``count`` levels in ``[0, max_level]`` as plain ints."""
    if count <= 0:
        return []
    levels = rng.integers(0, max_level, size=count, endpoint=True, dtype=np.int64)
    return [int(v) for v in levels]


def generate_players(
    count: int,
    seed: int = DEFAULT_SEED,
    max_level: int = DEFAULT_MAX_LEVEL,
) -> list[Player]:
    """Generate a deterministic population.

    Args:
        count: Number of players (0 gives an empty list)
        seed: RNG seed
        max_level: Inclusive upper bound for levels

    Returns:
        Players named ``player_name(0..count-1)``
    """
    if max_level < 0:
        raise ValueError(f"max_level must be >= 0, got {max_level}")
    rng = np.random.default_rng(seed)
    levels = draw_levels(rng, count, max_level)
    return [Player(name=player_name(i), level=level) for i, level in enumerate(levels)]
