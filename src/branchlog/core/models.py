"""Domain models for branch history reports.

All models are plain values created per invocation. Nothing here holds state
between runs: parse results and running totals are returned, never stored.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReportMode(str, Enum):
    """Relationship between a ref and its upstream tracking branch."""

    NO_UPSTREAM = "no_upstream"
    UNRELATED = "unrelated"
    DIVERGED = "diverged"


class SignatureSeverity(str, Enum):
    """Tone used to color a commit row based on its signature status."""

    GOOD = "good"
    CAUTION = "caution"
    BAD = "bad"
    NONE = "none"


class RefKind(str, Enum):
    """Kind of object a validated ref token names."""

    BRANCH = "branch"
    REMOTE_BRANCH = "remote_branch"
    TAG = "tag"
    COMMIT = "commit"


class CommitRecord(BaseModel):
    """One decoded line of history."""

    model_config = ConfigDict(frozen=True)

    graph_prefix: str = Field(default="", description="Opaque graph connector text, display only")
    id: str = Field(description="Short commit id")
    date: str = Field(description="Author date, passed through as emitted")
    author: str = Field(description="Author display name")
    signer: str | None = Field(default=None, description="Signer name, None when the commit carries none")
    signature_status: str = Field(default="N", description="Single character signature status code")
    message: str = Field(description="Subject line, placeholder when empty")
    ref_names: str | None = Field(default=None, description="Ref decoration, None when nothing points here")


class ParsedLog(BaseModel):
    """Records decoded from one history stream plus stream-scoped aggregates."""

    model_config = ConfigDict(frozen=True)

    records: list[CommitRecord] = Field(default_factory=list)
    author_width: int = 0
    dropped_lines: int = 0


class ReportBatch(BaseModel):
    """A named group of records sharing one section header."""

    model_config = ConfigDict(frozen=True)

    label: str
    records: list[CommitRecord] = Field(default_factory=list)
    author_width: int = 0
    show_header: bool = True

    @classmethod
    def from_parsed(cls, label: str, parsed: ParsedLog, show_header: bool = True) -> "ReportBatch":
        return cls(label=label, records=parsed.records, author_width=parsed.author_width, show_header=show_header)


class HistoryQuery(BaseModel):
    """A single bounded request for history."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Section header the results are reported under")
    revision: str = Field(description="A ref, or an 'A..B' range")
    limit: int = Field(ge=0, description="Maximum number of commits to return")
    path: str | None = Field(default=None, description="Restrict history to this path")


class TopologyFacts(BaseModel):
    """Repository facts the upstream classification is computed from."""

    model_config = ConfigDict(frozen=True)

    upstream: str | None = None
    is_ancestor: bool = False
    merge_base: str | None = None


class ClassificationResult(BaseModel):
    """Report mode and the primary query for one invocation."""

    model_config = ConfigDict(frozen=True)

    mode: ReportMode
    primary: HistoryQuery
    base: str | None = Field(default=None, description="Commit the merged section is read from")
    show_header: bool = True


class ResolvedTarget(BaseModel):
    """Validated positional arguments."""

    model_config = ConfigDict(frozen=True)

    ref: str = "HEAD"
    ref_kind: RefKind | None = None
    file: str | None = None
    diagnostics: list[str] = Field(default_factory=list)


class ColorScheme(BaseModel):
    """Fixed field colors and severity tones.

    A field color of None means the field inherits the row's signature tone.
    """

    model_config = ConfigDict(frozen=True)

    graph: str | None = "bright_black"
    id: str | None = None
    date: str | None = "cyan"
    author: str | None = "magenta"
    separator: str | None = "bright_black"
    message: str | None = None
    ref_names: str | None = "bright_blue"
    signer: str | None = None
    rule: str | None = "bright_black"

    good: str = "green"
    caution: str = "yellow"
    bad: str = "red"
    none: str = "default"

    def tone(self, severity: SignatureSeverity) -> str:
        return {
            SignatureSeverity.GOOD: self.good,
            SignatureSeverity.CAUTION: self.caution,
            SignatureSeverity.BAD: self.bad,
            SignatureSeverity.NONE: self.none,
        }[severity]


class RenderConfig(BaseModel):
    """Everything the renderer needs to know about presentation."""

    model_config = ConfigDict(frozen=True)

    color: bool = True
    show_graph: bool = False
    column_separator: str = " | "
    scheme: ColorScheme = Field(default_factory=ColorScheme)


class ReportSummary(BaseModel):
    """What a report run produced."""

    mode: ReportMode
    target: ResolvedTarget
    batches: list[ReportBatch] = Field(default_factory=list)
    total_shown: int = 0
    requested: int = 0
