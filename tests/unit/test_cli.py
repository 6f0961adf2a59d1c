"""Tests for the leaderboard CLI.

Tests:
- --help exits 0
- offline / online / compare commands print JSON results
- --out writes the result file
- invalid interval and bad environment map to exit code 2
"""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from leaderboard.cli import _resolve_settings, build_parser, main
from leaderboard.config import (
    ENV_ALGORITHM,
    ENV_LOG_LEVEL,
    ENV_MAX_LEVEL,
    ENV_SEED,
    ENV_VERBOSE,
    MIN_MAX_LEVEL,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_SEED, ENV_MAX_LEVEL, ENV_ALGORITHM, ENV_LOG_LEVEL, ENV_VERBOSE):
        monkeypatch.delenv(name, raising=False)


class TestCLIHelp:
    """Test CLI help functionality."""

    def test_cli_help_exits_zero(self) -> None:
        """leaderboard --help exits with code 0."""
        result = subprocess.run(
            [sys.executable, "-m", "leaderboard.cli", "--help"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).parent.parent.parent,
            env={"PYTHONPATH": "src"},
            check=False,
        )
        assert result.returncode == 0
        assert "Leaderboard ranking CLI" in result.stdout

    def test_subcommand_required(self) -> None:
        """Omitting the subcommand is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2


class TestOfflineCommand:
    """Tests for leaderboard offline."""

    @pytest.mark.parametrize("algorithm", ["heap", "quickselect"])
    def test_prints_top_ten_percent(
        self, algorithm: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """100 players select 10, ascending."""
        code = main(["--seed", "1", "offline", "--players", "100", "--algorithm", algorithm])
        payload = json.loads(capsys.readouterr().out)

        assert code == 0
        assert payload["algorithm"] == algorithm
        assert len(payload["top"]) == 10
        levels = [p["level"] for p in payload["top"]]
        assert levels == sorted(levels)
        assert payload["cutoffs"] == {}

    def test_algorithm_from_env(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """LEADERBOARD_ALGORITHM picks the default algorithm."""
        monkeypatch.setenv("LEADERBOARD_ALGORITHM", "quickselect")
        main(["offline", "--players", "20"])

        assert json.loads(capsys.readouterr().out)["algorithm"] == "quickselect"

    def test_out_writes_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """--out writes JSON instead of printing."""
        out = tmp_path / "nested" / "result.json"
        code = main(["offline", "--players", "30", "--out", str(out)])

        assert code == 0
        assert capsys.readouterr().out == ""
        assert len(json.loads(out.read_text())["top"]) == 3


class TestOnlineCommand:
    """Tests for leaderboard online."""

    def test_cutoff_milestones(self, capsys: pytest.CaptureFixture[str]) -> None:
        """132 players at interval 50 report 50, 100, 132."""
        code = main(["online", "--players", "132", "--interval", "50"])
        payload = json.loads(capsys.readouterr().out)

        assert code == 0
        assert list(payload["cutoffs"]) == ["50", "100", "132"]
        assert len(payload["top"]) == 50

    def test_invalid_interval_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Interval 0 fails with exit code 2."""
        code = main(["online", "--players", "10", "--interval", "0"])

        assert code == 2
        assert "positive integer" in capsys.readouterr().err


class TestCompareCommand:
    """Tests for leaderboard compare."""

    def test_algorithms_agree(self, capsys: pytest.CaptureFixture[str]) -> None:
        """compare reports a match and exits 0."""
        code = main(["--max-level", "10", "compare", "--players", "1000"])
        payload = json.loads(capsys.readouterr().out)

        assert code == 0
        assert payload["match"] is True
        assert payload["selected"] == 100


class TestConfigErrors:
    """Bad environment configuration."""

    def test_bad_seed_env(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A non-integer LEADERBOARD_SEED exits 2."""
        monkeypatch.setenv("LEADERBOARD_SEED", "abc")
        code = main(["offline", "--players", "10"])

        assert code == 2
        assert "LEADERBOARD_SEED" in capsys.readouterr().err


class TestSettingsOptions:
    """--seed, --max-level and -v work before or after the subcommand."""

    @pytest.mark.parametrize(
        "argv",
        [
            ["offline", "--players", "100", "--seed", "3"],
            ["online", "--players", "132", "--interval", "50", "--seed", "3"],
            ["compare", "--players", "100", "--seed", "3", "--max-level", "50"],
        ],
        ids=["offline", "online", "compare"],
    )
    def test_options_after_subcommand(
        self, argv: list[str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The per-subcommand usage forms parse and run."""
        code = main(argv)

        assert code == 0
        assert json.loads(capsys.readouterr().out)["players"] in (100, 132)

    def test_seed_position_gives_same_result(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--seed before and after the subcommand select the same players."""
        main(["--seed", "3", "offline", "--players", "100"])
        before = json.loads(capsys.readouterr().out)["top"]
        main(["offline", "--players", "100", "--seed", "3"])
        after = json.loads(capsys.readouterr().out)["top"]

        assert before == after

    def test_top_level_seed_not_reset_by_subcommand(self) -> None:
        """A seed given before the subcommand survives subcommand parsing."""
        args = build_parser().parse_args(["--seed", "3", "offline", "--players", "5"])
        assert args.seed == 3

    def test_unset_options_fall_back_to_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without flags, settings come from the environment."""
        monkeypatch.setenv(ENV_SEED, "11")
        args = build_parser().parse_args(["offline", "--players", "5"])

        settings = _resolve_settings(args)

        assert settings.seed == 11
        assert settings.verbose is False

    @pytest.mark.parametrize(
        "argv",
        [
            ["--max-level", "0", "offline", "--players", "5"],
            ["offline", "--players", "5", "--max-level", "0"],
        ],
    )
    def test_max_level_below_env_minimum_rejected(self, argv: list[str]) -> None:
        """The CLI enforces the same lower bound as LEADERBOARD_MAX_LEVEL."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(argv)
        assert exc_info.value.code == 2

    def test_max_level_minimum_accepted(self) -> None:
        """The smallest allowed max level parses."""
        args = build_parser().parse_args(
            ["offline", "--players", "5", "--max-level", str(MIN_MAX_LEVEL)]
        )
        assert _resolve_settings(args).max_level == MIN_MAX_LEVEL

    def test_verbose_flag_after_subcommand(self) -> None:
        """-v after the subcommand turns on DEBUG logging."""
        args = build_parser().parse_args(["compare", "--players", "5", "-v"])
        settings = _resolve_settings(args)

        assert settings.verbose is True
        assert settings.effective_log_level == "DEBUG"

    def test_verbose_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LEADERBOARD_VERBOSE=1 turns on DEBUG logging without the flag."""
        monkeypatch.setenv(ENV_VERBOSE, "1")
        args = build_parser().parse_args(["offline", "--players", "5"])

        assert _resolve_settings(args).effective_log_level == "DEBUG"
