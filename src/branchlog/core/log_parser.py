"""Decoding of separator-encoded git log output into commit records.

Each commit arrives as one line. Fields are joined by ``FIELD_SEPARATOR`` and,
so that no field contains a literal space, every space in the line has been
replaced with the same separator before it reaches the parser::

    <graph><id>␟<date>␟<author>␟[<signer>]␟[<status>]␟<message>␟(<refs>)

The id and date never contain the separator, and the bracketed and
parenthesized fields anchor the variable-width ones, so positions stay stable
even though the separator collides with field content.
"""

import logging
import re
from collections.abc import Iterable

from branchlog.core.models import CommitRecord, ParsedLog
from branchlog.core.signature import UNCHECKABLE_STATUS

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\x1f"

EMPTY_MESSAGE_PLACEHOLDER = "(no message)"
UNKNOWN_SIGNER_PLACEHOLDER = "unknown"

_SEP = re.escape(FIELD_SEPARATOR)


def _line_pattern(signer: str) -> re.Pattern[str]:
    return re.compile(
        rf"^(?P<graph>[*|/\\_.\-{_SEP}]*?)"
        rf"(?P<id>[0-9a-f]{{4,64}}){_SEP}"
        rf"(?P<date>[^{_SEP}]+){_SEP}"
        rf"(?P<author>.*?){_SEP}"
        rf"\[(?P<signer>{signer})\]{_SEP}"
        rf"\[(?P<status>[A-Z])\]{_SEP}"
        rf"(?P<message>.*){_SEP}"
        rf"\((?P<refs>.*)\)$"
    )


# A bracket in the author ("renovate [bot]") and one in the signer
# ("Jane [work] <j@x.org>") are ambiguous in a single pass. The first pattern
# keeps brackets out of the signer so they land in the author; the second lets
# the signer hold them when nothing else matches.
LINE_PATTERN = _line_pattern(r"[^\]]*")
BRACKETED_SIGNER_PATTERN = _line_pattern(r".*?")


def encode_line(line: str) -> str:
    """Apply the field-safe encoding: every space becomes the separator."""
    return line.replace(" ", FIELD_SEPARATOR)


def decode_field(value: str) -> str:
    """Restore the spaces in a field taken from an encoded line."""
    return value.replace(FIELD_SEPARATOR, " ")


def extract_signer(annotation: str) -> str | None:
    """Keep the name part of a ``Name <email>`` signer annotation."""
    name = annotation.split("<", 1)[0].strip()
    return name or None


class LogRecordParser:
    """Turns an encoded history stream into an ordered list of records."""

    def parse_line(self, line: str) -> CommitRecord | None:
        """Decode one line, or return None when it is not a commit line."""
        line = line.rstrip("\r\n")
        match = LINE_PATTERN.match(line) or BRACKETED_SIGNER_PATTERN.match(line)
        if match is None:
            return None

        status = match.group("status")
        if status == UNCHECKABLE_STATUS:
            signer = UNKNOWN_SIGNER_PLACEHOLDER
        else:
            signer = extract_signer(decode_field(match.group("signer")))

        message = decode_field(match.group("message"))
        refs = decode_field(match.group("refs")).strip()

        return CommitRecord(
            graph_prefix=decode_field(match.group("graph")),
            id=match.group("id"),
            date=match.group("date"),
            author=decode_field(match.group("author")),
            signer=signer,
            signature_status=status,
            message=message or EMPTY_MESSAGE_PLACEHOLDER,
            ref_names=refs or None,
        )

    def parse(self, lines: Iterable[str]) -> ParsedLog:
        """Decode a stream, dropping lines that do not have the commit shape.

        Git emits graph-only connector lines and a trailing newline between
        commits, so a mismatch is expected and never an error.
        """
        records: list[CommitRecord] = []
        author_width = 0
        dropped = 0

        for line in lines:
            record = self.parse_line(line)
            if record is None:
                if line.strip(FIELD_SEPARATOR + " \r\n"):
                    dropped += 1
                    logger.debug(f"Skipping non-commit line: {decode_field(line)!r}")
                continue

            records.append(record)
            author_width = max(author_width, len(record.author))

        return ParsedLog(records=records, author_width=author_width, dropped_lines=dropped)

    def parse_text(self, text: str) -> ParsedLog:
        return self.parse(text.split("\n"))
