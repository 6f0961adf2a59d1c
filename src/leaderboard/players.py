"""Player record: a named score ordered by level only."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Player:
    """A scored, named value.

    Ordering operators compare ``level`` only; ``name`` never affects
    ``<``/``>``. Equality is plain value equality on both fields, so two
    players with the same level but different names are neither less nor
    greater than each other, yet not equal.

    Attributes:
        name: Opaque identifier
        level: Score used for ranking
    """

    name: str
    level: int

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.level < other.level

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.level <= other.level

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.level > other.level

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.level >= other.level

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"name": self.name, "level": self.level}


def ranking_key(player: Player) -> tuple[int, str]:
    """Sort key for published rankings: level ascending, ties by name."""
    return (player.level, player.name)
