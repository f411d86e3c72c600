"""Project formatting configuration and Markdown formatting via mdformat.

The nearest `.mdformat.toml` found walking up from a target path is the
project's formatting configuration. Its options are passed to
`mdformat.text()` for Markdown output; `end_of_line` is also honored when
writing the JSON changelog so both files follow the same convention.
"""
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import mdformat


logger = logging.getLogger("changelog.io")

CONFIG_FILENAME = ".mdformat.toml"
KNOWN_OPTIONS = ("wrap", "number", "end_of_line")


@dataclass(frozen=True)
class FormatConfig:
    options: Dict[str, Any] = field(default_factory=dict)
    source: Optional[Path] = None

    @property
    def end_of_line(self) -> str:
        return str(self.options.get("end_of_line", "lf"))


def find_config_file(target: Path) -> Optional[Path]:
    start = Path(target).resolve().parent
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_format_config(target: Path) -> FormatConfig:
    """Resolve the formatting config that applies to `target`.

    Returns an empty config when no `.mdformat.toml` exists above it. A
    config file that is not valid TOML raises `tomllib.TOMLDecodeError`.
    """
    cfg_path = find_config_file(target)
    if cfg_path is None:
        return FormatConfig()
    with cfg_path.open("rb") as fh:
        raw = tomllib.load(fh)
    options: Dict[str, Any] = {}
    for key, value in raw.items():
        if key in KNOWN_OPTIONS:
            options[key] = value
        else:
            logger.debug("ignoring unknown formatting option %r in %s", key, cfg_path)
    return FormatConfig(options=options, source=cfg_path)


def format_markdown(text: str, config: FormatConfig) -> str:
    return mdformat.text(text, options=dict(config.options))


def newline_for(target: Path, config: FormatConfig) -> str:
    """Line ending to write `target` with.

    `crlf` always gives CRLF, `keep` reuses CRLF when the existing file has
    it, anything else gives LF.
    """
    eol = config.end_of_line
    if eol == "crlf":
        return "\r\n"
    if eol == "keep":
        p = Path(target)
        if p.exists() and b"\r\n" in p.read_bytes():
            return "\r\n"
    return "\n"
