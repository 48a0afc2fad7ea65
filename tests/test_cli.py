"""Tests for cli.py."""

import logging
from pathlib import Path

from click.testing import CliRunner

from branchlog.cli import cli, configure_logging
from branchlog.display.console import make_console

PIPED_ENV = {"TERM": "xterm-256color", "NO_COLOR": None, "FORCE_COLOR": None, "BRANCHLOG_COLOR": None}


def test_cli__fails_gracefully_when_not_a_git_repo(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["--no-color", "-C", str(tmp_path)])

    assert result.exit_code == 1
    assert "Failed to build report" in result.output


def test_cli__no_upstream_report(git_repo: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["--no-color", "-C", str(git_repo)])

    assert result.exit_code == 0
    assert "NO UPSTREAM" in result.output
    assert "Add utils" in result.output
    assert "Initial commit" in result.output
    assert "\x1b[" not in result.output


def test_cli__count_limits_rows(git_repo: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["--no-color", "-n", "1", "-C", str(git_repo)])

    assert result.exit_code == 0
    assert "Add utils" in result.output
    assert "Initial commit" not in result.output


def test_cli__diverged_report_with_hidden_merged(diverged_repo: Path) -> None:
    runner = CliRunner()

    shown = runner.invoke(cli, ["--no-color", "-C", str(diverged_repo), "feature"])
    hidden = runner.invoke(cli, ["--no-color", "--hide-merged", "-C", str(diverged_repo), "feature"])

    assert shown.exit_code == 0
    assert "UNMERGED" in shown.output
    assert "shared 4" in shown.output
    assert hidden.exit_code == 0
    assert "feature 2" in hidden.output
    assert "shared 4" not in hidden.output


def test_cli__invalid_token_reports_and_continues(git_repo: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["--no-color", "-C", str(git_repo), "no-such-thing"])

    assert result.exit_code == 0
    assert "no such ref or file: no-such-thing" in result.output
    assert "Add utils" in result.output


def test_cli__color_always_emits_escapes_when_piped(git_repo: Path) -> None:
    runner = CliRunner(env=PIPED_ENV)

    result = runner.invoke(cli, ["--color", "always", "-C", str(git_repo)])

    assert result.exit_code == 0
    assert "\x1b[" in result.output
    assert "Add utils" in result.output


def test_cli__color_auto_stays_plain_when_piped(git_repo: Path) -> None:
    runner = CliRunner(env=PIPED_ENV)

    result = runner.invoke(cli, ["--color", "auto", "-C", str(git_repo)])

    assert result.exit_code == 0
    assert "\x1b[" not in result.output


def test_cli__no_color_wins_over_color_always(git_repo: Path) -> None:
    runner = CliRunner(env=PIPED_ENV)

    result = runner.invoke(cli, ["--color", "always", "--no-color", "-C", str(git_repo)])

    assert result.exit_code == 0
    assert "\x1b[" not in result.output


def test_make_console__color_modes() -> None:
    assert make_console("always").is_terminal is True
    assert make_console("never").no_color is True
    assert make_console("never").color_system is None


def test_cli__rejects_more_than_two_arguments(git_repo: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["-C", str(git_repo), "a", "b", "c"])

    assert result.exit_code == 2
    assert "at most a REF and a FILE" in result.output


def test_configure_logging__enables_debug_only_when_asked() -> None:
    package_logger = logging.getLogger("branchlog")
    handlers_before = list(package_logger.handlers)

    configure_logging(False)
    assert package_logger.handlers == handlers_before

    try:
        configure_logging(True)
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == len(handlers_before) + 1
    finally:
        package_logger.handlers = handlers_before
        package_logger.setLevel(logging.NOTSET)
