"""Source-control capability used by the updater.

The updater only needs three things from git: the tag list, the subject
lines of a revision range, and the root commit. `GitClient` names that
surface so tests can pass a fake; `SubprocessGit` is the real thing.
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol

from .errors import GitError
from .lib.semver import GitTag, tag_from_name


logger = logging.getLogger("changelog.git")


class GitClient(Protocol):
    def list_tags(self) -> List[str]: ...

    def log_subjects(self, rev_range: str) -> List[str]: ...

    def root_commit(self) -> Optional[str]: ...


class SubprocessGit:
    """Run git in `cwd` (the current directory when None)."""

    def __init__(self, cwd: Optional[Path] = None):
        self.cwd = cwd

    def run(self, args: List[str]) -> str:
        cmd = ["git", *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            r = subprocess.run(
                cmd,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
            )
        except OSError as exc:
            raise GitError(cmd, None, str(exc)) from exc
        if r.returncode != 0:
            raise GitError(cmd, r.returncode, r.stderr)
        return r.stdout.strip()

    def list_tags(self) -> List[str]:
        return _lines(self.run(["tag"]))

    def log_subjects(self, rev_range: str) -> List[str]:
        return _lines(self.run(["log", rev_range, "--pretty=format:%s"]))

    def root_commit(self) -> Optional[str]:
        # repositories with merged histories can have several roots; take the last listed
        roots = _lines(self.run(["rev-list", "--max-parents=0", "HEAD"]))
        return roots[-1] if roots else None


def _lines(out: str) -> List[str]:
    return [ln.strip() for ln in out.splitlines() if ln.strip()]


def get_semver_tags(git: GitClient) -> List[GitTag]:
    """Return the repository's release tags (strict `v?M.m[.p]` names only)."""
    try:
        names = git.list_tags()
    except GitError as exc:
        logger.warning("could not list tags: %s", exc)
        return []
    tags: List[GitTag] = []
    for name in names:
        tag = tag_from_name(name.strip())
        if tag is not None:
            tags.append(tag)
    return tags
