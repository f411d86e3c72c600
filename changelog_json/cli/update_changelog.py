#!/usr/bin/env python3
"""Upsert a version entry into a JSON changelog from git history.

Usage: changelog-update <version> <changelog.json> [--date YYYY-MM-DD] [--dry-run]

Exit codes: 0 on success, 1 on a missing argument or any failure.
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional

from changelog_json.config import parse_update_args
from changelog_json.errors import UsageError
from changelog_json.git import GitClient, SubprocessGit
from changelog_json.updater import update_changelog

from ._common import configure_logging


logger = logging.getLogger("changelog.update")


def main(argv: Optional[List[str]] = None, git: Optional[GitClient] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    configure_logging()

    try:
        config = parse_update_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        entry = update_changelog(config, git or SubprocessGit())
    except Exception as e:
        print("ERROR:", e, file=sys.stderr)
        logger.debug("update failed", exc_info=True)
        return 1

    if not config.dry_run:
        print(f"Updated {config.json_path} with entry for {entry['version']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
