"""Render the JSON changelog into Markdown.

Layout:

    # <title>

    <description>

    ## v<version> (<DD Mon YYYY>)

    ### Add

    - item

    ### Change

    -

    ### Remove

    -

Buckets always appear in Add, Change, Remove order; an empty bucket is a
single bare `-` line.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, List

from dateutil import parser as dt_parser

from .config import RenderConfig
from .lib.formatting import format_markdown, newline_for, resolve_format_config
from .lib.json_io import atomic_write, load_changelog
from .lib.semver import sort_tags_desc


logger = logging.getLogger("changelog.render")

DEFAULT_TITLE = "CHANGELOG"
BUCKETS = (("Add", "add"), ("Change", "change"), ("Remove", "remove"))
# fixed English abbreviations so output does not depend on the locale
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_date(value: Any) -> str:
    """`2024-01-05` -> `05 Jan 2024`; anything that is not ISO-8601 is returned unchanged."""
    if not value:
        return ""
    text = str(value)
    try:
        d = dt_parser.isoparse(text)
    except (ValueError, OverflowError):
        return text
    return f"{d.day:02d} {MONTHS[d.month - 1]} {d.year}"


def _items(entry: dict, key: str) -> List[str]:
    items = entry.get(key) or []
    if isinstance(items, str):
        items = [items]
    return [str(it) for it in items]


def render_markdown(doc: Any) -> str:
    data = doc if isinstance(doc, dict) else {}
    title = data.get("title") or DEFAULT_TITLE
    description = data.get("description") or ""
    tags = data.get("tags")
    tags = sort_tags_desc(t for t in tags if isinstance(t, dict)) if isinstance(tags, list) else []

    lines: List[str] = [f"# {title}", ""]
    if str(description).strip():
        lines += [str(description).strip(), ""]

    for tag in tags:
        nice_date = format_date(tag.get("date"))
        suffix = f" ({nice_date})" if nice_date else ""
        lines += [f"## v{tag.get('version')}{suffix}", ""]
        for heading, key in BUCKETS:
            lines += [f"### {heading}", ""]
            items = _items(tag, key)
            if items:
                lines += [f"- {it}" for it in items]
            else:
                lines.append("-")
            lines.append("")

    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines) + "\n"


def render_changelog(config: RenderConfig) -> str:
    """Render `config.json_path` into `config.md_path`; returns the written text."""
    doc = load_changelog(config.json_path)
    fmt = resolve_format_config(config.md_path)
    content = format_markdown(render_markdown(doc), fmt)

    if config.dry_run:
        print("DRY RUN: would write", config.md_path)
        sys.stdout.write(content)
        return content

    atomic_write(config.md_path, content, newline=newline_for(config.md_path, fmt))
    logger.info("wrote %s", config.md_path)
    return content
