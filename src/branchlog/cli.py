"""Command line entry point for branchlog."""

import logging
import sys
from pathlib import Path

import click
from rich.logging import RichHandler
from rich.markup import escape

from branchlog.core.git_tracker import GitCommandError, GitTracker
from branchlog.core.models import RenderConfig
from branchlog.core.settings import settings
from branchlog.display.console import make_console
from branchlog.display.formatters import ReportRenderer
from branchlog.services.report_service import ReportService


def configure_logging(debug: bool) -> None:
    """Send debug logging to stderr through rich when asked for."""
    if not debug:
        return

    handler = RichHandler(console=make_console(stderr=True), show_path=False)
    package_logger = logging.getLogger("branchlog")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


@click.command()
@click.argument("tokens", nargs=-1, metavar="[REF] [FILE]")
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=1),
    default=lambda: settings.default_count,
    help="Number of commits to show (default: 12)",
)
@click.option("--all", "-a", "all_history", is_flag=True, help="Show every commit reachable from the ref")
@click.option(
    "--color",
    "color_mode",
    type=click.Choice(["auto", "always", "never"]),
    default=lambda: settings.color,
    help="When to color output; 'always' colors even when piped (default: auto)",
)
@click.option("--no-color", is_flag=True, help="Same as --color=never")
@click.option(
    "--hide-merged/--show-merged",
    default=lambda: settings.hide_merged,
    help="Do not show commits already merged upstream",
)
@click.option(
    "--graph/--no-graph", "show_graph", default=lambda: settings.show_graph, help="Show the graph connector column"
)
@click.option(
    "--repo-path",
    "-C",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Repository path (default: current directory)",
)
@click.option("--debug", is_flag=True, help="Log git commands to stderr")
def cli(
    tokens: tuple[str, ...],
    count: int,
    all_history: bool,
    color_mode: str,
    no_color: bool,
    hide_merged: bool,
    show_graph: bool,
    repo_path: Path | None,
    debug: bool,
) -> None:
    """Show the recent history of REF (default: HEAD) against its upstream.

    Commits are grouped as NO UPSTREAM, UNRELATED, or UNMERGED followed by
    MERGED. FILE restricts the history to one path; a single argument that is
    not a ref but an existing path is taken as FILE.
    """
    if len(tokens) > 2:
        raise click.UsageError("expected at most a REF and a FILE")

    configure_logging(debug or settings.debug_mode)

    if no_color:
        color_mode = "never"
    console = make_console(color=color_mode)
    err_console = make_console(color=color_mode, stderr=True)
    config = RenderConfig(
        color=color_mode != "never", show_graph=show_graph, column_separator=settings.column_separator
    )

    git = GitTracker(
        working_dir=repo_path,
        timeout=settings.git_timeout,
        verify_signatures=settings.verify_signatures,
        date_format=settings.date_format,
    )
    service = ReportService(git, ReportRenderer(console, config))

    target = service.resolve(tokens)
    for diagnostic in target.diagnostics:
        err_console.print(f"[yellow]{escape(diagnostic)}[/yellow]")

    try:
        service.build_report(target, count=count, all_history=all_history, hide_merged=hide_merged)
    except GitCommandError as e:
        err_console.print(f"[red]Failed to build report: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    cli()
