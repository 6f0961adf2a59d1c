"""Ranking result shared by the offline and online rankers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from leaderboard.players import Player


@dataclass
class RankingResult:
    """Output of every ranking call.

    Attributes:
        top: Selected players, ascending by level (ties by name)
        cutoffs: Player-count milestone -> minimum level in the selected set
            at that milestone. Only the online ranker fills this in.
        elapsed_ms: Compute time in milliseconds, excluding stream reads
    """

    top: list[Player] = field(default_factory=list)
    cutoffs: dict[int, int] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    @property
    def min_level(self) -> int | None:
        """Lowest level in ``top`` (None when nothing was selected)."""
        if not self.top:
            return None
        return self.top[0].level

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict (milestones sorted)."""
        return {
            "top": [p.to_dict() for p in self.top],
            "cutoffs": {str(m): self.cutoffs[m] for m in sorted(self.cutoffs)},
            "elapsed_ms": self.elapsed_ms,
        }
