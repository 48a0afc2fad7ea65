"""Validation of positional ref and file arguments."""

import logging
from collections.abc import Sequence

from branchlog.core.git_tracker import GitTracker
from branchlog.core.models import ResolvedTarget

logger = logging.getLogger(__name__)

DEFAULT_REF = "HEAD"


def no_such_ref_or_file(token: str) -> str:
    return f"no such ref or file: {token}"


class RefResolver:
    """Decides which positional token is the ref and which is the file."""

    def __init__(self, git: GitTracker):
        self.git = git

    def resolve(self, tokens: Sequence[str]) -> ResolvedTarget:
        """Resolve zero, one or two tokens into a ref and an optional file.

        Invalid tokens never abort: they become diagnostics and the ref
        falls back to HEAD.
        """
        if len(tokens) > 2:
            raise ValueError(f"expected at most two arguments, got {len(tokens)}")

        if not tokens:
            return ResolvedTarget(ref=DEFAULT_REF, ref_kind=self.git.ref_kind(DEFAULT_REF))

        if len(tokens) == 1:
            return self._resolve_single(tokens[0])

        return self._resolve_pair(tokens[0], tokens[1])

    def _resolve_single(self, token: str) -> ResolvedTarget:
        kind = self.git.ref_kind(token)
        if kind is not None:
            return ResolvedTarget(ref=token, ref_kind=kind)

        if self.git.path_exists(token):
            return ResolvedTarget(ref=DEFAULT_REF, ref_kind=self.git.ref_kind(DEFAULT_REF), file=token)

        logger.debug(f"Token {token!r} is neither a ref nor a file")
        return ResolvedTarget(
            ref=DEFAULT_REF,
            ref_kind=self.git.ref_kind(DEFAULT_REF),
            diagnostics=[no_such_ref_or_file(token)],
        )

    def _resolve_pair(self, ref_token: str, file_token: str) -> ResolvedTarget:
        diagnostics = []

        ref = ref_token
        kind = self.git.ref_kind(ref_token)
        if kind is None:
            diagnostics.append(no_such_ref_or_file(ref_token))
            ref = DEFAULT_REF
            kind = self.git.ref_kind(DEFAULT_REF)

        file = file_token
        if not self.git.path_exists(file_token):
            diagnostics.append(no_such_ref_or_file(file_token))
            file = None

        return ResolvedTarget(ref=ref, ref_kind=kind, file=file, diagnostics=diagnostics)
