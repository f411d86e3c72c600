"""CLI entrypoint package.

Thin wrappers that parse arguments into `changelog_json.config` objects and
call into the updater/renderer. Run as `python -m changelog_json.cli.<name>`
or through the installed console scripts.

Modules:
    update_changelog: upsert a version entry from git history
    render_changelog: render the JSON changelog into Markdown
"""

__all__ = ["update_changelog", "render_changelog"]
