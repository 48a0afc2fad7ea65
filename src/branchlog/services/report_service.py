"""Building a branch report end to end."""

import logging
from collections.abc import Sequence

from branchlog.core.git_tracker import GitTracker
from branchlog.core.log_parser import LogRecordParser
from branchlog.core.models import HistoryQuery, ReportBatch, ReportSummary, ResolvedTarget
from branchlog.core.ref_resolver import RefResolver
from branchlog.core.upstream_classifier import classify, plan_merged_query
from branchlog.display.formatters import ReportRenderer

logger = logging.getLogger(__name__)


class ReportService:
    """Resolves arguments, classifies the ref and renders its history."""

    def __init__(
        self,
        git: GitTracker,
        renderer: ReportRenderer,
        parser: LogRecordParser | None = None,
    ):
        self.git = git
        self.renderer = renderer
        self.parser = parser or LogRecordParser()
        self.resolver = RefResolver(git)

    def _fetch_batch(self, query: HistoryQuery, show_header: bool = True) -> ReportBatch:
        parsed = self.parser.parse(self.git.log_lines(query))
        if parsed.dropped_lines:
            logger.debug(f"{query.label}: dropped {parsed.dropped_lines} line(s) of {query.revision}")
        return ReportBatch.from_parsed(query.label, parsed, show_header=show_header)

    def resolve_count(self, ref: str, path: str | None, count: int, all_history: bool) -> int:
        """Commit budget for the report; all history means every reachable commit."""
        if all_history:
            return max(1, self.git.count_commits(ref, path))
        return count

    def resolve(self, tokens: Sequence[str]) -> ResolvedTarget:
        """Validate positional arguments, collecting diagnostics for bad ones."""
        return self.resolver.resolve(tokens)

    def build_report(
        self,
        target: ResolvedTarget,
        count: int,
        all_history: bool = False,
        hide_merged: bool = False,
    ) -> ReportSummary:
        """Render the report for a resolved ref and optional file.

        Raises:
            GitCommandError: If a history query fails.
        """
        budget = self.resolve_count(target.ref, target.file, count, all_history)

        facts = self.git.get_topology(target.ref)
        result = classify(target.ref, facts, budget, path=target.file, hide_merged=hide_merged)
        logger.debug(f"{target.ref}: upstream={facts.upstream} mode={result.mode.value} budget={budget}")

        batches = []
        shown = 0

        primary = self._fetch_batch(result.primary, show_header=result.show_header)
        shown += self.renderer.render(primary)
        batches.append(primary)

        merged_query = plan_merged_query(result, budget, shown, hide_merged=hide_merged)
        if merged_query is not None:
            merged = self._fetch_batch(merged_query)
            shown += self.renderer.render(merged)
            batches.append(merged)

        return ReportSummary(
            mode=result.mode,
            target=target,
            batches=batches,
            total_shown=shown,
            requested=budget,
        )
