"""Semantic version helpers.

Two parsers live here on purpose:

- `parse_semver` is lenient and never raises. It is used for ordering the
  entries of a changelog document, where a malformed version should sort
  as 0 rather than abort the run.
- `parse_version_string` is strict (`M.m` or `M.m.p`, optional leading `v`)
  and returns None on anything else. It is used to decide which git tags
  are releases and which commit range a target version covers.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, List, NamedTuple, Optional


STRICT_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?", flags=re.ASCII)
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)", flags=re.ASCII)


class Semver(NamedTuple):
    major: int
    minor: int
    patch: int


class VersionInfo(NamedTuple):
    major: int
    minor: int
    patch: int
    normalized: str


class GitTag(NamedTuple):
    name: str
    major: int
    minor: int
    patch: int
    normalized: str


def _strip_v(value: Any) -> str:
    s = "" if value is None else str(value)
    return s[1:] if s.startswith("v") else s


def _leading_int(segment: str) -> int:
    # parseInt-style: optional sign and leading digits, anything else is 0
    m = _LEADING_INT_RE.match(segment)
    if not m:
        return 0
    return int(m.group(1))


def parse_semver(value: Any) -> Semver:
    """Leniently parse `value` into (major, minor, patch).

    Missing or unparseable segments become 0.
    """
    parts = _strip_v(value).split(".")
    nums = [_leading_int(parts[i]) if i < len(parts) else 0 for i in range(3)]
    return Semver(*nums)


def parse_version_string(value: Any) -> Optional[VersionInfo]:
    """Strictly parse `M.m[.p]` (optional leading `v`); None when it does not match."""
    if not value:
        return None
    m = STRICT_VERSION_RE.fullmatch(_strip_v(value))
    if not m:
        return None
    major = int(m.group(1))
    minor = int(m.group(2))
    patch = int(m.group(3)) if m.group(3) else 0
    return VersionInfo(major, minor, patch, f"{major}.{minor}.{patch}")


def tag_from_name(name: str) -> Optional[GitTag]:
    info = parse_version_string(name)
    if info is None:
        return None
    return GitTag(name, info.major, info.minor, info.patch, info.normalized)


def _triple(v) -> tuple:
    return (v.major, v.minor, v.patch)


def is_less(a, b) -> bool:
    return _triple(a) < _triple(b)


def find_prev_tag(tags: Iterable[GitTag], target) -> Optional[GitTag]:
    """Return the greatest tag strictly lower than `target`, or None."""
    prev: Optional[GitTag] = None
    for t in tags:
        if is_less(t, target) and (prev is None or is_less(prev, t)):
            prev = t
    return prev


def sort_tags_desc(entries: Iterable[dict]) -> List[dict]:
    """Sort changelog entries by version, highest first.

    Comparison is numeric on (major, minor, patch); ties keep input order.
    """
    return sorted(entries, key=_entry_key, reverse=True)


def _entry_key(entry: Any) -> Semver:
    return parse_semver(entry.get("version") if isinstance(entry, dict) else None)
