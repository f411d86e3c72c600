import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path so tests can import local modules
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from changelog_json.errors import GitError  # noqa: E402


@pytest.fixture(autouse=True)
def _default_log_level(monkeypatch):
    # tests should not depend on the developer's shell
    monkeypatch.delenv("CHANGELOG_LOG_LEVEL", raising=False)
    yield


class FakeGit:
    """In-memory GitClient: tags, a range -> subjects map, and a root sha."""

    def __init__(self, tags=None, logs=None, root="abc123", fail=()):
        self.tags = list(tags or [])
        self.logs = dict(logs or {})
        self.root = root
        self.fail = set(fail)
        self.ranges = []

    def _maybe_fail(self, what):
        if what in self.fail:
            raise GitError(["git", what], 128, f"fatal: {what} failed")

    def list_tags(self):
        self._maybe_fail("tag")
        return list(self.tags)

    def log_subjects(self, rev_range):
        self._maybe_fail("log")
        self.ranges.append(rev_range)
        if rev_range not in self.logs:
            raise GitError(["git", "log", rev_range], 128, "fatal: bad revision")
        return list(self.logs[rev_range])

    def root_commit(self):
        self._maybe_fail("rev-list")
        return self.root


@pytest.fixture
def fake_git():
    return FakeGit
