"""Services orchestrating git queries and rendering."""

from branchlog.services.report_service import ReportService

__all__ = [
    "ReportService",
]
