"""Core git access, parsing and classification for branch reports."""

from branchlog.core.git_tracker import GitCommandError, GitTracker
from branchlog.core.log_parser import LogRecordParser
from branchlog.core.ref_resolver import RefResolver
from branchlog.core.settings import settings

__all__ = [
    "GitCommandError",
    "GitTracker",
    "LogRecordParser",
    "RefResolver",
    "settings",
]
