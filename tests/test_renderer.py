import json
import re
from pathlib import Path

from changelog_json.config import RenderConfig
from changelog_json.renderer import format_date, render_changelog, render_markdown


DOC = {
    "title": "My App",
    "description": "  Notable changes.  ",
    "tags": [
        {"version": "1.2.0", "date": "2024-01-05", "add": ["a"], "change": [], "remove": []},
        {"version": "1.10.0", "date": "2024-03-09", "add": ["x", "y"], "change": ["z"], "remove": ["w"]},
        {"version": "0.9.0", "date": "not-a-date", "add": [], "change": [], "remove": []},
    ],
}


def test_format_date():
    assert format_date("2024-01-05") == "05 Jan 2024"
    assert format_date("2023-12-31") == "31 Dec 2023"
    assert format_date("not-a-date") == "not-a-date"
    assert format_date("Jan") == "Jan"
    assert format_date("2024") == "01 Jan 2024"
    assert format_date("2024-01-05T23:30:00Z") == "05 Jan 2024"
    assert format_date("") == ""
    assert format_date(None) == ""


def test_render_layout():
    md = render_markdown(DOC)
    assert md.startswith("# My App\n\nNotable changes.\n\n## v1.10.0 (09 Mar 2024)\n\n### Add\n\n- x\n- y\n\n")
    assert "### Change\n\n- z\n\n### Remove\n\n- w\n\n## v1.2.0 (05 Jan 2024)\n" in md
    assert "## v0.9.0 (not-a-date)\n" in md
    assert md.endswith("### Remove\n\n-\n")
    assert not md.endswith("\n\n")


def test_empty_bucket_is_a_bare_dash():
    md = render_markdown({"tags": [{"version": "1.0.0", "add": ["a"], "change": ["b"], "remove": []}]})
    assert "### Remove\n\n-\n" in md


def test_defaults_for_title_description_and_date():
    md = render_markdown({"title": None, "tags": [{"version": "1.0.0"}]})
    assert md == (
        "# CHANGELOG\n\n"
        "## v1.0.0\n\n"
        "### Add\n\n-\n\n"
        "### Change\n\n-\n\n"
        "### Remove\n\n-\n"
    )
    assert render_markdown({}) == "# CHANGELOG\n"


def test_headings_round_trip_to_sorted_versions():
    md = render_markdown(DOC)
    versions = re.findall(r"^## v(\S+)", md, flags=re.MULTILINE)
    assert versions == ["1.10.0", "1.2.0", "0.9.0"]


def test_render_changelog_writes_file(tmp_path: Path):
    src = tmp_path / "changelog.json"
    src.write_text(json.dumps(DOC), encoding="utf-8")
    out = tmp_path / "docs" / "CHANGELOG.md"
    render_changelog(RenderConfig(json_path=src, md_path=out))
    text = out.read_text(encoding="utf-8")
    # mdformat leaves the layout untouched, bare "-" bucket lines included
    assert text == render_markdown(DOC)
    assert re.findall(r"^## v(\S+)", text, flags=re.MULTILINE) == ["1.10.0", "1.2.0", "0.9.0"]
    assert text.endswith("\n")


def test_render_does_not_rewrite_broken_json(tmp_path: Path):
    src = tmp_path / "changelog.json"
    broken = '{"tags":[{"version":"1.0.0",},]}'
    src.write_text(broken, encoding="utf-8")
    out = tmp_path / "CHANGELOG.md"
    render_changelog(RenderConfig(json_path=src, md_path=out))
    assert src.read_text(encoding="utf-8") == broken
    assert "## v1.0.0" in out.read_text(encoding="utf-8")


def test_render_honors_mdformat_config(tmp_path: Path):
    (tmp_path / ".mdformat.toml").write_text('end_of_line = "crlf"\n', encoding="utf-8")
    src = tmp_path / "changelog.json"
    src.write_text(json.dumps({"tags": []}), encoding="utf-8")
    out = tmp_path / "CHANGELOG.md"
    render_changelog(RenderConfig(json_path=src, md_path=out))
    assert out.read_bytes() == b"# CHANGELOG\r\n"


def test_render_dry_run(tmp_path: Path, capsys):
    src = tmp_path / "changelog.json"
    out = tmp_path / "CHANGELOG.md"
    render_changelog(RenderConfig(json_path=src, md_path=out, dry_run=True))
    printed = capsys.readouterr().out
    assert "# CHANGELOG" in printed
    assert "This file lists the changes by version." in printed
    assert not out.exists()
