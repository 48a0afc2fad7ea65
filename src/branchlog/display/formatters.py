"""Rich formatting of report batches as aligned, colorized tables."""

from rich.console import Console
from rich.text import Text

from branchlog.core.models import CommitRecord, RenderConfig, ReportBatch
from branchlog.core.signature import classify_signature

RULE_CHAR = "─"
NO_RESULTS = "no results"

DEFAULT_ID_WIDTH = 7
DEFAULT_DATE_WIDTH = 10


def rule_text(label: str, width: int, empty: bool = False) -> str:
    """Build a header rule with the label embedded, padded to width."""
    head = f"{RULE_CHAR * 2} {label} "
    if empty:
        head += f"{RULE_CHAR * 2} {NO_RESULTS} "
    return head + RULE_CHAR * max(2, width - len(head))


class ReportRenderer:
    """Prints report batches, one header rule and one row per commit."""

    def __init__(self, console: Console, config: RenderConfig | None = None):
        self.console = console
        self.config = config or RenderConfig()

    def _style(self, fixed: str | None, tone: str) -> str:
        if not self.config.color:
            return ""
        return fixed if fixed is not None else tone

    def _graph_width(self, batch: ReportBatch) -> int:
        if not self.config.show_graph:
            return 0
        return max((len(r.graph_prefix) for r in batch.records), default=0)

    def content_width(self, batch: ReportBatch) -> int:
        """Width of the fixed columns: graph, id, date, author and separator."""
        id_width = max((len(r.id) for r in batch.records), default=DEFAULT_ID_WIDTH)
        date_width = max((len(r.date) for r in batch.records), default=DEFAULT_DATE_WIDTH)
        return (
            self._graph_width(batch)
            + id_width
            + 1
            + date_width
            + 1
            + batch.author_width
            + len(self.config.column_separator)
        )

    def header(self, batch: ReportBatch) -> Text:
        rule = rule_text(batch.label, self.content_width(batch), empty=not batch.records)
        return Text(rule, style=self._style(self.config.scheme.rule, ""))

    def format_row(self, record: CommitRecord, author_width: int, graph_width: int = 0) -> Text:
        """Format one commit as a table row.

        Fields without a fixed color take the tone of the commit's signature
        status. The author is only signature-toned when it is also the signer.
        """
        scheme = self.config.scheme
        tone = scheme.tone(classify_signature(record.signature_status))

        row = Text()
        if self.config.show_graph:
            row.append(record.graph_prefix.ljust(graph_width), style=self._style(scheme.graph, tone))
        row.append(record.id, style=self._style(scheme.id, tone))
        row.append(" ")
        row.append(record.date, style=self._style(scheme.date, tone))
        row.append(" ")

        if record.signer is not None and record.author == record.signer:
            author_style = self._style(None, tone)
        else:
            author_style = self._style(scheme.author, tone)
        row.append(record.author.ljust(author_width), style=author_style)

        row.append(self.config.column_separator, style=self._style(scheme.separator, tone))
        row.append(record.message, style=self._style(scheme.message, tone))

        if record.ref_names:
            row.append(" ")
            row.append(f"({record.ref_names})", style=self._style(scheme.ref_names, tone))
        if record.signer:
            row.append(" ")
            row.append(f"[{record.signer}]", style=self._style(scheme.signer, tone))

        return row

    def render(self, batch: ReportBatch) -> int:
        """Print a batch and return how many commits were printed."""
        if batch.show_header or not batch.records:
            self.console.print(self.header(batch), soft_wrap=True)

        graph_width = self._graph_width(batch)
        for record in batch.records:
            self.console.print(self.format_row(record, batch.author_width, graph_width), soft_wrap=True)

        return len(batch.records)
