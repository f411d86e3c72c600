"""Run configuration for the two commands.

Arguments are parsed once in the CLI and frozen into one of these objects;
everything downstream takes the object explicitly.
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import UsageError


DEFAULT_MD_PATH = "CHANGELOG.md"

MISSING_VERSION = "Missing version (ex: 1.2.0)"
MISSING_JSON_PATH = "Missing path to changelog.json"


@dataclass(frozen=True)
class UpdateConfig:
    version: str
    json_path: Path
    date: Optional[str] = None
    dry_run: bool = False


@dataclass(frozen=True)
class RenderConfig:
    json_path: Path
    md_path: Path = Path(DEFAULT_MD_PATH)
    dry_run: bool = False


def _require(value: Optional[str], message: str) -> str:
    if not value:
        raise UsageError(message)
    return value


def build_update_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="changelog-update",
        description="Upsert a version entry into a JSON changelog from git history.",
    )
    # positionals are optional here so a missing one gets our message instead of argparse's
    p.add_argument("version", nargs="?", help="Target version, e.g. 1.2.0 or v1.2")
    p.add_argument("json_path", nargs="?", help="Path to changelog.json")
    p.add_argument("--date", default=None, help="Entry date YYYY-MM-DD (default: today, UTC)")
    p.add_argument("--dry-run", action="store_true", help="Print the updated JSON instead of writing it")
    return p


def build_render_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="changelog-render",
        description="Render a JSON changelog into Markdown.",
    )
    p.add_argument("json_path", nargs="?", help="Path to changelog.json")
    p.add_argument("md_path", nargs="?", default=DEFAULT_MD_PATH,
                   help=f"Markdown output path (default: {DEFAULT_MD_PATH})")
    p.add_argument("--dry-run", action="store_true", help="Print the Markdown instead of writing it")
    return p


def parse_update_args(argv: Optional[List[str]] = None) -> UpdateConfig:
    args = build_update_parser().parse_args(argv)
    version = _require(args.version, MISSING_VERSION)
    json_path = _require(args.json_path, MISSING_JSON_PATH)
    return UpdateConfig(version=version, json_path=Path(json_path), date=args.date, dry_run=args.dry_run)


def parse_render_args(argv: Optional[List[str]] = None) -> RenderConfig:
    args = build_render_parser().parse_args(argv)
    json_path = _require(args.json_path, MISSING_JSON_PATH)
    md_path = args.md_path or DEFAULT_MD_PATH
    return RenderConfig(json_path=Path(json_path), md_path=Path(md_path), dry_run=args.dry_run)
