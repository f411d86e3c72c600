"""Exception types raised by the changelog tools."""
from __future__ import annotations


class ChangelogError(RuntimeError):
    """Base class for changelog tool failures."""


class UsageError(ChangelogError):
    """A required command-line argument is missing."""


class GitError(ChangelogError):
    """A git command could not be run or exited non-zero."""

    def __init__(self, cmd: list[str], returncode: int | None, stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no output"
        super().__init__(f"{' '.join(cmd)} failed (rc={returncode}): {detail}")
