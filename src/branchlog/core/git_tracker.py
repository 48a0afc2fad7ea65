"""Read-only git queries used to build branch reports."""

import logging
import subprocess
from pathlib import Path

from branchlog.core.log_parser import encode_line
from branchlog.core.models import HistoryQuery, RefKind, TopologyFacts

logger = logging.getLogger(__name__)

_SEP_ESCAPE = "%x1f"

# Order must match LINE_PATTERN in log_parser.
LOG_FORMAT = _SEP_ESCAPE.join(["%h", "%ad", "%an", "[%GS]", "[%G?]", "%s", "(%D)"])
UNVERIFIED_LOG_FORMAT = _SEP_ESCAPE.join(["%h", "%ad", "%an", "[]", "[N]", "%s", "(%D)"])


class GitCommandError(RuntimeError):
    """A git query that the report cannot do without failed."""


class GitTracker:
    """Answers history, ref and ancestry questions about a repository."""

    def __init__(
        self,
        working_dir: Path | None = None,
        timeout: float = 10.0,
        verify_signatures: bool = True,
        date_format: str = "short",
    ):
        self.working_dir = working_dir or Path.cwd()
        self.timeout = timeout
        self.verify_signatures = verify_signatures
        self.date_format = date_format

    def _run(self, *args: str) -> subprocess.CompletedProcess | None:
        """Run a lookup git command, returning None if git could not be run."""
        logger.debug(f"git {' '.join(args)}")
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, subprocess.SubprocessError, OSError) as e:
            logger.debug(f"git {' '.join(args)} could not run: {e}")
            return None

    def _succeeds(self, *args: str) -> bool:
        result = self._run(*args)
        return result is not None and result.returncode == 0

    def _output(self, *args: str) -> str | None:
        result = self._run(*args)
        if result is None or result.returncode != 0:
            return None
        output = result.stdout.strip()
        return output or None

    def is_git_repo(self) -> bool:
        return self._succeeds("rev-parse", "--is-inside-work-tree")

    def ref_kind(self, token: str) -> RefKind | None:
        """Classify a token as branch, remote branch, tag or commit.

        Returns:
            The kind of ref, or None when the token names nothing.
        """
        if not token or token.startswith("-"):
            return None

        if self._succeeds("show-ref", "--verify", "--quiet", f"refs/heads/{token}"):
            return RefKind.BRANCH
        if self._succeeds("show-ref", "--verify", "--quiet", f"refs/remotes/{token}"):
            return RefKind.REMOTE_BRANCH
        if self._succeeds("show-ref", "--verify", "--quiet", f"refs/tags/{token}"):
            return RefKind.TAG
        if self._succeeds("rev-parse", "--verify", "--quiet", f"{token}^{{commit}}"):
            return RefKind.COMMIT
        return None

    def path_exists(self, token: str) -> bool:
        return bool(token) and (self.working_dir / token).exists()

    def get_upstream(self, ref: str = "HEAD") -> str | None:
        """Get the upstream tracking ref configured for a local branch."""
        return self._output("rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{ref}@{{upstream}}")

    def get_merge_base(self, first: str, second: str) -> str | None:
        return self._output("merge-base", first, second)

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        return self._succeeds("merge-base", "--is-ancestor", ancestor, descendant)

    def get_topology(self, ref: str) -> TopologyFacts:
        """Collect everything the upstream classifier needs for a ref."""
        upstream = self.get_upstream(ref)
        if upstream is None:
            return TopologyFacts()

        return TopologyFacts(
            upstream=upstream,
            is_ancestor=self.is_ancestor(upstream, ref),
            merge_base=self.get_merge_base(upstream, ref),
        )

    def count_commits(self, ref: str, path: str | None = None) -> int:
        """Count commits reachable from a ref, optionally touching a path."""
        args = ["rev-list", "--count", ref]
        if path:
            args += ["--", path]
        output = self._output(*args)
        try:
            return int(output) if output else 0
        except ValueError:
            return 0

    def log_lines(self, query: HistoryQuery) -> list[str]:
        """Run a history query and return its lines in field-safe encoding.

        Raises:
            GitCommandError: If git fails, for example outside a repository.
        """
        if query.limit <= 0:
            return []

        log_format = LOG_FORMAT if self.verify_signatures else UNVERIFIED_LOG_FORMAT
        args = [
            "log",
            "--graph",
            "--color=never",
            "--no-show-signature",
            f"--date={self.date_format}",
            f"--format={log_format}",
            f"--max-count={query.limit}",
            query.revision,
            "--",
        ]
        if query.path:
            args.append(query.path)

        logger.debug(f"git {' '.join(args)}")
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except (subprocess.TimeoutExpired, subprocess.SubprocessError, OSError) as e:
            raise GitCommandError(f"git log {query.revision} failed: {e}") from e

        if result.returncode != 0:
            raise GitCommandError(result.stderr.strip() or f"git log {query.revision} failed")

        return [encode_line(line) for line in result.stdout.split("\n")]
