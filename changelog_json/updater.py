"""Upsert a version entry into the JSON changelog from git history.

Commit range selection for a target version T, in priority order:

1. A release tag equal to T exists: `(prev, T]` where prev is the greatest
   tag strictly below it, or everything reachable from T when there is none.
2. T is a valid version: `(prev, HEAD]`, or `(root, HEAD]` when no tag is
   lower than T.
3. Otherwise (T unparseable, or no tags): `(root, HEAD]`.
"""
from __future__ import annotations

import datetime
import logging
import sys
from typing import Any, Dict, List, Optional

from .commits import CommitBuckets, classify_commits
from .config import UpdateConfig
from .errors import ChangelogError, GitError
from .git import GitClient, get_semver_tags
from .lib.formatting import resolve_format_config
from .lib.json_io import dump_changelog_json, load_changelog, save_changelog
from .lib.semver import GitTag, find_prev_tag, parse_version_string, sort_tags_desc


logger = logging.getLogger("changelog.update")


def utc_today_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).date().isoformat()


def _root_range(git: GitClient) -> Optional[str]:
    try:
        base = git.root_commit()
    except GitError as exc:
        logger.warning("could not find the root commit: %s", exc)
        return None
    return f"{base}..HEAD" if base else None


def resolve_range(version: str, tags: List[GitTag], git: GitClient) -> Optional[str]:
    """Return the git revision range covering `version`, or None if there is none."""
    target = parse_version_string(version)
    if target is None or not tags:
        return _root_range(git)

    current = next((t for t in tags if t.normalized == target.normalized), None)
    if current is not None:
        prev = find_prev_tag(tags, current)
        return f"{prev.name}..{current.name}" if prev else current.name

    prev = find_prev_tag(tags, target)
    if prev is not None:
        return f"{prev.name}..HEAD"
    return _root_range(git)


def get_commits_for_version(version: str, git: GitClient) -> List[str]:
    tags = get_semver_tags(git)
    rev_range = resolve_range(version, tags, git)
    if rev_range is None:
        logger.info("no commit range for %s; entry will be empty", version)
        return []
    logger.info("collecting commits for %s from %s", version, rev_range)
    try:
        subjects = git.log_subjects(rev_range)
    except GitError as exc:
        logger.warning("git log failed for %s: %s", rev_range, exc)
        return []
    return [s.strip() for s in subjects if s.strip()]


def build_entry(version: str, buckets: CommitBuckets, today: str) -> Dict[str, Any]:
    return {
        "version": version,
        "date": today,
        "add": list(buckets.add),
        "change": list(buckets.change),
        "remove": list(buckets.remove),
    }


def merge_entry(doc: Any, entry: Dict[str, Any]) -> Dict[str, Any]:
    """Replace any entry with the same version string and re-sort.

    Matching is exact string equality on `version`: an existing "1.2" is
    not replaced by a new "1.2.0" even though both sort as the same rank.
    """
    if not isinstance(doc, dict):
        raise ChangelogError("changelog root must be a JSON object")
    tags = doc.get("tags")
    if not isinstance(tags, list):
        tags = []
    others = [t for t in tags if not (isinstance(t, dict) and t.get("version") == entry["version"])]
    doc["tags"] = sort_tags_desc([*others, entry])
    return doc


def update_changelog(config: UpdateConfig, git: GitClient) -> Dict[str, Any]:
    """Load, upsert the entry for `config.version`, and save. Returns the entry."""
    doc = load_changelog(config.json_path, persist_repair=not config.dry_run)

    subjects = get_commits_for_version(config.version, git)
    buckets = classify_commits(subjects)
    logger.info(
        "%d commits -> add=%d change=%d remove=%d",
        len(subjects), len(buckets.add), len(buckets.change), len(buckets.remove),
    )

    entry = build_entry(config.version, buckets, config.date or utc_today_iso())
    doc = merge_entry(doc, entry)

    if config.dry_run:
        print("DRY RUN: would write", config.json_path)
        sys.stdout.write(dump_changelog_json(doc))
        return entry

    save_changelog(config.json_path, doc, resolve_format_config(config.json_path))
    return entry
