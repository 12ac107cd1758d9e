"""Tests for page output paths and writing (canopy.site.page)."""

from pathlib import Path

import pytest

from canopy.core.errors import ErrorKind
from canopy.core.result import Err, Ok
from canopy.site.page import Page, output_path, write_pages


class TestOutputPath:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("index.html", "index.html"),
            ("changelog.html", "changelog/index.html"),
            ("changelog/v1.0.0.html", "changelog/v1.0.0/index.html"),
            ("changelog.rss", "changelog.rss"),
            ("artifacts.json", "artifacts.json"),
        ],
    )
    def test_pretty_links(self, tmp_path: Path, filename: str, expected: str) -> None:
        assert output_path(tmp_path, filename) == tmp_path / expected

    @pytest.mark.parametrize("filename", ["../escape.html", "/abs.html", ""])
    def test_rejects_paths_outside_dist(self, tmp_path: Path, filename: str) -> None:
        with pytest.raises(ValueError):
            output_path(tmp_path, filename)


class TestWritePages:
    def test_writes_every_page(self, tmp_path: Path) -> None:
        pages = [
            Page(filename="index.html", contents="<p>home</p>"),
            Page(filename="funding.html", contents="<p>fund ✓</p>"),
        ]

        assert write_pages(pages, tmp_path) == Ok(None)

        assert (tmp_path / "index.html").read_text(encoding="utf-8") == "<p>home</p>"
        assert (tmp_path / "funding" / "index.html").read_text(encoding="utf-8") == "<p>fund ✓</p>"

    def test_failure_is_structural(self, tmp_path: Path) -> None:
        blocker = tmp_path / "dist"
        blocker.write_text("not a directory", encoding="utf-8")

        result = write_pages([Page(filename="index.html", contents="x")], blocker)

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.STRUCTURAL_IO
        assert result.error.is_fatal
