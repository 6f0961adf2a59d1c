"""Runtime settings for the leaderboard CLI.

Read from the environment via ``env_parse``; CLI flags override them.
"""

from __future__ import annotations

from dataclasses import dataclass

from leaderboard.env_parse import parse_bool, parse_enum, parse_int
from leaderboard.population import DEFAULT_MAX_LEVEL, DEFAULT_SEED

ENV_SEED = "LEADERBOARD_SEED"
ENV_MAX_LEVEL = "LEADERBOARD_MAX_LEVEL"
ENV_ALGORITHM = "LEADERBOARD_ALGORITHM"
ENV_LOG_LEVEL = "LEADERBOARD_LOG_LEVEL"
ENV_VERBOSE = "LEADERBOARD_VERBOSE"

ALGORITHMS: frozenset[str] = frozenset({"heap", "quickselect"})
LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})

# Lower bounds shared by the environment and the CLI flags
MIN_SEED = 0
MIN_MAX_LEVEL = 1


@dataclass(frozen=True)
class LeaderboardSettings:
    """Settings for generated populations and ranking runs.

    Attributes:
        seed: RNG seed for synthetic populations
        max_level: Inclusive upper bound for generated levels
        algorithm: Offline algorithm ("heap" or "quickselect")
        log_level: Root logging level name
        verbose: Force DEBUG logging regardless of log_level
    """

    seed: int = DEFAULT_SEED
    max_level: int = DEFAULT_MAX_LEVEL
    algorithm: str = "heap"
    log_level: str = "WARNING"
    verbose: bool = False

    @property
    def effective_log_level(self) -> str:
        """Logging level to configure (DEBUG when verbose)."""
        return "DEBUG" if self.verbose else self.log_level

    @classmethod
    def from_env(cls) -> LeaderboardSettings:
        """Build settings from LEADERBOARD_* variables (strict parsing)."""
        seed = parse_int(ENV_SEED, DEFAULT_SEED, min_value=MIN_SEED)
        max_level = parse_int(ENV_MAX_LEVEL, DEFAULT_MAX_LEVEL, min_value=MIN_MAX_LEVEL)
        algorithm = parse_enum(ENV_ALGORITHM, set(ALGORITHMS), "heap")
        log_level = parse_enum(ENV_LOG_LEVEL, set(LOG_LEVELS), "WARNING")
        verbose = parse_bool(ENV_VERBOSE)
        assert seed is not None  # non-None default
        assert max_level is not None  # non-None default
        return cls(
            seed=seed,
            max_level=max_level,
            algorithm=algorithm or "heap",
            log_level=log_level or "WARNING",
            verbose=verbose,
        )
