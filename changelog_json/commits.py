"""Conventional-commit classification.

    Add    <- feat, docs
    Change <- fix, revert
    Remove <- remove

Subjects that are not `type(scope): subject` or whose type is not listed
above are dropped.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List


COMMIT_RE = re.compile(r"^(\w+)(\(([^)]+)\))?:\s*(.+)$")

BUCKET_FOR_TYPE: Dict[str, str] = {
    "feat": "add",
    "docs": "add",
    "fix": "change",
    "revert": "change",
    "remove": "remove",
}


@dataclass
class CommitBuckets:
    add: List[str] = field(default_factory=list)
    change: List[str] = field(default_factory=list)
    remove: List[str] = field(default_factory=list)


def format_subject(scope: str, subject: str) -> str:
    subject = subject.strip()
    return f"({scope}) {subject}" if scope else subject


def classify_commits(subjects: Iterable[str]) -> CommitBuckets:
    buckets = CommitBuckets()
    for msg in subjects:
        m = COMMIT_RE.match(msg)
        if not m:
            continue
        bucket = BUCKET_FOR_TYPE.get(m.group(1).lower())
        if bucket is None:
            continue
        getattr(buckets, bucket).append(format_subject(m.group(3) or "", m.group(4)))
    return buckets
