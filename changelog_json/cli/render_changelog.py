#!/usr/bin/env python3
"""Render a JSON changelog into Markdown.

Usage: changelog-render <changelog.json> [CHANGELOG.md] [--dry-run]
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional

from changelog_json.config import parse_render_args
from changelog_json.errors import UsageError
from changelog_json.renderer import render_changelog

from ._common import configure_logging


logger = logging.getLogger("changelog.render")


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    configure_logging()

    try:
        config = parse_render_args(argv)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        render_changelog(config)
    except Exception as e:
        print("ERROR:", e, file=sys.stderr)
        logger.debug("render failed", exc_info=True)
        return 1

    if not config.dry_run:
        print(f"Rendered {config.json_path} -> {config.md_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
