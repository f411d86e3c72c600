"""Load, repair and write the JSON changelog.

Loading is a two-stage pipeline: a strict `json.loads`, and on failure a
text-level cleanup followed by a second strict parse. The cleanup is a
heuristic that only fixes two patterns (lines that are a lone comma, and
trailing commas before `]` or `}`); anything else still fails and the
decode error propagates to the caller.

Writes replace the whole file atomically: the new content goes to a
temporary sibling which is then moved over the target.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

from .formatting import FormatConfig, newline_for


logger = logging.getLogger("changelog.io")

DEFAULT_DESCRIPTION = "This file lists the changes by version."

_LONE_COMMA_RE = re.compile(r"^\s*,\s*$", flags=re.MULTILINE)
_TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")


def default_document() -> Dict[str, Any]:
    return {"title": None, "description": DEFAULT_DESCRIPTION, "tags": []}


def sanitize_json_string(text: str) -> str:
    text = _LONE_COMMA_RE.sub("", text)
    text = _TRAILING_COMMA_RE.sub(r"\1", text)
    return text


def dump_changelog_json(doc: Any) -> str:
    return json.dumps(doc, indent=2, ensure_ascii=False) + "\n"


def atomic_write(path: Path, text: str, newline: str = "\n") -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name("." + path.name + ".tmp")
    if newline != "\n":
        text = text.replace("\r\n", "\n").replace("\n", newline)
    # newline="" keeps the line endings exactly as given
    with tmp.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    os.replace(str(tmp), str(path))


def load_changelog(path: Path, persist_repair: bool = False) -> Any:
    """Return the parsed changelog at `path`.

    A missing file yields `default_document()`. When the file only parses
    after `sanitize_json_string` and `persist_repair` is set, the repaired
    JSON is written back immediately.
    """
    p = Path(path)
    if not p.exists():
        logger.info("%s not found; starting from an empty changelog", p)
        return default_document()
    raw = p.read_text(encoding="utf-8")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("%s is not valid JSON (%s); attempting comma repair", p, exc)
    parsed = json.loads(sanitize_json_string(raw))
    if persist_repair:
        atomic_write(p, dump_changelog_json(parsed))
        logger.warning("repaired %s and rewrote it", p)
    return parsed


def save_changelog(path: Path, doc: Any, config: Optional[FormatConfig] = None) -> None:
    config = config or FormatConfig()
    atomic_write(Path(path), dump_changelog_json(doc), newline=newline_for(path, config))
    logger.info("wrote %s", path)
