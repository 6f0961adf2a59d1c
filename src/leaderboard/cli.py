"""Project CLI entrypoint.

Provides CLI commands for the leaderboard:
- leaderboard offline: Rank a generated population with heap or quickselect
- leaderboard online: Stream a generated population through rank_incoming
- leaderboard compare: Check both offline algorithms select the same levels

Settings default from LEADERBOARD_* environment variables (see config.py);
flags override them.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import TYPE_CHECKING, Any

from leaderboard.config import ALGORITHMS, MIN_MAX_LEVEL, MIN_SEED, LeaderboardSettings
from leaderboard.env_parse import ConfigError
from leaderboard.errors import LeaderboardError
from leaderboard.offline import heap_rank, quickselect_rank
from leaderboard.online import rank_incoming
from leaderboard.population import generate_players
from leaderboard.stream import GeneratedPlayerStream

if TYPE_CHECKING:
    from collections.abc import Callable, MutableSequence

    from leaderboard.players import Player
    from leaderboard.result import RankingResult

logger = logging.getLogger(__name__)

OFFLINE_RANKERS: dict[str, Callable[[MutableSequence[Player]], RankingResult]] = {
    "heap": heap_rank,
    "quickselect": quickselect_rank,
}


def _pkg_version() -> str:
    try:
        return version("leaderboard")
    except PackageNotFoundError:
        return "0.0.0"


def _emit(payload: dict[str, Any], out: str | None) -> None:
    text = json.dumps(payload, indent=2)
    if out:
        out_path = Path(out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n")
        logger.info("RESULT_WRITTEN path=%s", out_path)
    else:
        print(text)


def _cmd_offline(args: argparse.Namespace, settings: LeaderboardSettings) -> int:
    algorithm = args.algorithm or settings.algorithm
    players = generate_players(args.players, seed=settings.seed, max_level=settings.max_level)
    result = OFFLINE_RANKERS[algorithm](players)

    payload = {"algorithm": algorithm, "players": args.players, **result.to_dict()}
    _emit(payload, args.out)
    return 0


def _cmd_online(args: argparse.Namespace, settings: LeaderboardSettings) -> int:
    stream = GeneratedPlayerStream(args.players, seed=settings.seed, max_level=settings.max_level)
    result = rank_incoming(stream, args.interval)

    payload = {"interval": args.interval, "players": args.players, **result.to_dict()}
    _emit(payload, args.out)
    return 0


def _cmd_compare(args: argparse.Namespace, settings: LeaderboardSettings) -> int:
    population = generate_players(args.players, seed=settings.seed, max_level=settings.max_level)

    heap_result = heap_rank(list(population))
    select_result = quickselect_rank(list(population))

    heap_levels = Counter(p.level for p in heap_result.top)
    select_levels = Counter(p.level for p in select_result.top)
    match = heap_levels == select_levels

    print(
        json.dumps(
            {
                "players": args.players,
                "selected": len(heap_result.top),
                "match": match,
                "heap_elapsed_ms": heap_result.elapsed_ms,
                "quickselect_elapsed_ms": select_result.elapsed_ms,
            },
            indent=2,
        )
    )
    if not match:
        print("ERROR: heap and quickselect selected different levels", file=sys.stderr)
        return 1
    return 0


def _int_at_least(minimum: int) -> Callable[[str], int]:
    def _parse(raw: str) -> int:
        value = int(raw)
        if value < minimum:
            raise argparse.ArgumentTypeError(f"must be >= {minimum}, got {value}")
        return value

    return _parse


def _settings_options() -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand.

    SUPPRESS defaults keep a flag given at one level from being reset by
    the other.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--seed",
        type=_int_at_least(MIN_SEED),
        default=argparse.SUPPRESS,
        help="RNG seed (env LEADERBOARD_SEED)",
    )
    common.add_argument(
        "--max-level",
        type=_int_at_least(MIN_MAX_LEVEL),
        default=argparse.SUPPRESS,
        help="Max generated level (env LEADERBOARD_MAX_LEVEL)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Debug logging (env LEADERBOARD_VERBOSE)",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    common = _settings_options()
    parser = argparse.ArgumentParser(
        prog="leaderboard", description="Leaderboard ranking CLI", parents=[common]
    )
    parser.add_argument("--version", action="version", version=f"leaderboard {_pkg_version()}")

    sub = parser.add_subparsers(dest="cmd", required=True)
    players_type = _int_at_least(0)

    p_offline = sub.add_parser(
        "offline", parents=[common], help="Select the top 10%% of a generated population"
    )
    p_offline.add_argument("--players", type=players_type, required=True)
    p_offline.add_argument("--algorithm", choices=sorted(ALGORITHMS), help="Offline algorithm")
    p_offline.add_argument("--out", help="Output path for result JSON (optional)")

    p_online = sub.add_parser(
        "online", parents=[common], help="Stream a generated population and track the top K"
    )
    p_online.add_argument("--players", type=players_type, required=True)
    p_online.add_argument(
        "--interval", type=int, required=True, help="Top-K size and cutoff reporting interval"
    )
    p_online.add_argument("--out", help="Output path for result JSON (optional)")

    p_compare = sub.add_parser(
        "compare", parents=[common], help="Check heap and quickselect agree"
    )
    p_compare.add_argument("--players", type=players_type, required=True)

    return parser


def _resolve_settings(args: argparse.Namespace) -> LeaderboardSettings:
    settings = LeaderboardSettings.from_env()
    overrides: dict[str, Any] = {}
    if hasattr(args, "seed"):
        overrides["seed"] = args.seed
    if hasattr(args, "max_level"):
        overrides["max_level"] = args.max_level
    if getattr(args, "verbose", False):
        overrides["verbose"] = True
    if not overrides:
        return settings
    return replace(settings, **overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _resolve_settings(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    commands = {
        "offline": _cmd_offline,
        "online": _cmd_online,
        "compare": _cmd_compare,
    }
    try:
        return commands[args.cmd](args, settings)
    except LeaderboardError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
