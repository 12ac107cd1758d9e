"""Tests for canopy.site.markdown module."""

from pathlib import Path

from canopy.core.result import Err, Ok
from canopy.site.markdown import is_markdown, read_markdown, render_markdown


class TestMarkdown:
    def test_render_basic(self) -> None:
        assert render_markdown("# Title") == "<h1>Title</h1>"

    def test_render_tables_enabled(self) -> None:
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table>" in html

    def test_render_empty(self) -> None:
        assert render_markdown(None) == ""
        assert render_markdown("") == ""

    def test_is_markdown(self) -> None:
        assert is_markdown("docs/FAQ.md")
        assert is_markdown("notes.MARKDOWN")
        assert not is_markdown("page.html")

    def test_read_markdown(self, tmp_path: Path) -> None:
        path = tmp_path / "README.md"
        path.write_text("hello *world*", encoding="utf-8")

        assert read_markdown(path) == Ok("<p>hello <em>world</em></p>")

    def test_read_missing_file(self, tmp_path: Path) -> None:
        result = read_markdown(tmp_path / "missing.md", filedesc="readme")

        assert isinstance(result, Err)
        assert "readme" in result.error.message
