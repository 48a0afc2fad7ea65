"""Choosing the report mode and commit ranges for a ref.

Everything here is a pure function of its arguments; the git facts are
collected beforehand by GitTracker.get_topology.
"""

from branchlog.core.models import ClassificationResult, HistoryQuery, ReportMode, TopologyFacts

NO_UPSTREAM_LABEL = "NO UPSTREAM"
UNRELATED_LABEL = "UNRELATED"
UNMERGED_LABEL = "UNMERGED"
MERGED_LABEL = "MERGED"


def classify(
    ref: str,
    facts: TopologyFacts,
    count: int,
    path: str | None = None,
    hide_merged: bool = False,
) -> ClassificationResult:
    """Pick the report mode for a ref and the first query to run.

    Args:
        ref: Validated ref the report is about
        facts: Upstream, ancestry and merge-base facts for the ref
        count: Commit budget for the whole report
        path: Optional file to scope history to
        hide_merged: Whether the merged section will be skipped

    Returns:
        The mode, the primary query and the base for a follow-up merged query
    """
    single_batch_header = not hide_merged

    if facts.upstream is None:
        return ClassificationResult(
            mode=ReportMode.NO_UPSTREAM,
            primary=HistoryQuery(label=NO_UPSTREAM_LABEL, revision=ref, limit=count, path=path),
            show_header=single_batch_header,
        )

    if facts.merge_base is not None:
        base = facts.merge_base
    elif facts.is_ancestor:
        # An ancestor without a merge-base cannot happen in a consistent
        # repository; the upstream itself is the common point.
        base = facts.upstream
    else:
        return ClassificationResult(
            mode=ReportMode.UNRELATED,
            primary=HistoryQuery(label=UNRELATED_LABEL, revision=ref, limit=count, path=path),
            show_header=single_batch_header,
        )

    return ClassificationResult(
        mode=ReportMode.DIVERGED,
        primary=HistoryQuery(label=UNMERGED_LABEL, revision=f"{base}..{ref}", limit=count, path=path),
        base=base,
        show_header=True,
    )


def plan_merged_query(
    result: ClassificationResult,
    count: int,
    shown: int,
    hide_merged: bool = False,
) -> HistoryQuery | None:
    """Plan the merged section that fills what is left of the budget.

    Returns:
        A query for at most ``count - shown`` commits from the merge-base, or
        None when there is nothing to ask for
    """
    if result.mode is not ReportMode.DIVERGED or result.base is None:
        return None
    if hide_merged:
        return None

    remaining = count - shown
    if remaining <= 0:
        return None

    return HistoryQuery(label=MERGED_LABEL, revision=result.base, limit=remaining, path=result.primary.path)
