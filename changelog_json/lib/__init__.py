"""Shared helpers used by both the updater and the renderer.

Modules:
    json_io: load, repair and atomically rewrite the changelog JSON
    semver: lenient and strict version parsing, descending sort
    formatting: mdformat config discovery and formatting
"""

__all__ = ["json_io", "semver", "formatting"]
