"""Structured JSON changelog tooling.

Two commands share this package:

    changelog-update <version> <changelog.json>   upsert an entry from git history
    changelog-render <changelog.json> [CHANGELOG.md]   render the JSON as Markdown

Modules:
    config: run configuration built from CLI arguments
    commits: conventional-commit classifier
    git: source-control capability (subprocess git or a test double)
    updater: commit range selection and JSON upsert
    renderer: Markdown emission
    lib: JSON load/repair/write, semver helpers, mdformat integration
"""

__version__ = "0.1.0"

__all__ = ["config", "commits", "git", "updater", "renderer", "lib", "cli"]
