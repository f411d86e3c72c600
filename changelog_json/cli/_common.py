"""Shared setup for the CLI entry points."""
from __future__ import annotations

import logging
import os


LOG_LEVEL_ENV = "CHANGELOG_LOG_LEVEL"


def configure_logging() -> None:
    """Configure root logging once; level from CHANGELOG_LOG_LEVEL (default INFO)."""
    lvl_name = os.getenv(LOG_LEVEL_ENV, "INFO")
    lvl = getattr(logging, lvl_name.upper(), None)
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logging.basicConfig(level=lvl, format="%(levelname)s %(name)s: %(message)s")
