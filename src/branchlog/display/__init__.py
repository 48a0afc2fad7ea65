"""Display and formatting utilities for branchlog."""

from branchlog.display.console import make_console
from branchlog.display.formatters import ReportRenderer, rule_text

__all__ = [
    "make_console",
    "ReportRenderer",
    "rule_text",
]
