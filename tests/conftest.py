"""Shared test fixtures and helpers."""

import io
import subprocess
from pathlib import Path

import pytest
from rich.console import Console

from branchlog.core.log_parser import FIELD_SEPARATOR, encode_line


def git(repo: Path, *args: str) -> str:
    """Run git in a test repository and return stripped stdout."""
    result = subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)
    return result.stdout.strip()


def commit(repo: Path, message: str, filename: str | None = None) -> str:
    """Create a commit touching one file and return its short id."""
    name = filename or f"{message.replace(' ', '_') or 'empty'}.txt"
    path = repo / name
    path.write_text(path.read_text() + message + "\n" if path.exists() else message + "\n")
    git(repo, "add", name)
    git(repo, "commit", "-q", "--allow-empty-message", "-m", message)
    return git(repo, "rev-parse", "--short", "HEAD")


def init_repo(path: Path) -> Path:
    git(path, "init", "-q", "-b", "main")
    git(path, "config", "user.email", "test@example.com")
    git(path, "config", "user.name", "Test User")
    git(path, "config", "commit.gpgsign", "false")
    git(path, "config", "tag.gpgsign", "false")
    return path


def make_line(
    graph: str = "* ",
    commit_id: str = "abc1234",
    date: str = "2024-01-02",
    author: str = "Jane Doe",
    signer: str = "",
    status: str = "N",
    message: str = "Fix the thing",
    refs: str = "",
) -> str:
    """Build one line of history the way GitTracker.log_lines emits it."""
    raw = FIELD_SEPARATOR.join(
        [f"{graph}{commit_id}", date, author, f"[{signer}]", f"[{status}]", message, f"({refs})"]
    )
    return encode_line(raw)


def plain_console() -> Console:
    """A console writing uncolored text to an in-memory buffer."""
    return Console(file=io.StringIO(), color_system=None, no_color=True, highlight=False, width=200)


def output_of(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def git_repo(tmp_path):
    """A repository on main with two commits and no upstream."""
    repo = init_repo(tmp_path)
    commit(repo, "Initial commit", "main.py")
    commit(repo, "Add utils", "utils.py")
    return repo


@pytest.fixture
def diverged_repo(tmp_path):
    """A feature branch 3 commits ahead of main, which has 5 commits of its own.

    The merge-base has 5 commits of shared history, and feature tracks main.
    """
    repo = init_repo(tmp_path)
    for i in range(5):
        commit(repo, f"shared {i}", "shared.txt")

    git(repo, "checkout", "-q", "-b", "feature")
    for i in range(3):
        commit(repo, f"feature {i}", "feature.txt")

    git(repo, "checkout", "-q", "main")
    for i in range(5):
        commit(repo, f"upstream {i}", "upstream.txt")

    git(repo, "checkout", "-q", "feature")
    git(repo, "branch", "-q", "--set-upstream-to=main", "feature")
    return repo


@pytest.fixture
def unrelated_repo(tmp_path):
    """An orphan branch tracking main, with no history in common."""
    repo = init_repo(tmp_path)
    commit(repo, "main work", "main.txt")

    git(repo, "checkout", "-q", "--orphan", "orphan")
    git(repo, "rm", "-rq", "--cached", ".")
    commit(repo, "orphan root", "orphan.txt")
    commit(repo, "orphan work", "orphan.txt")
    git(repo, "branch", "-q", "--set-upstream-to=main", "orphan")
    return repo
