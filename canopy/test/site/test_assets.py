"""Tests for static asset placement (canopy.site.assets)."""

from pathlib import Path

import pytest

from canopy.core.config import BuildConfig, Config, ProjectConfig, StylesConfig
from canopy.core.result import Err, Ok
from canopy.output.console import MockConsole, Style
from canopy.site.assets import (
    BUNDLED_CSS,
    CSS_ENV_VAR,
    copy_static,
    place_css,
    place_favicon,
    stylesheet_source,
    write_additional_css,
)


class TestStylesheetSource:
    def test_bundled_by_default(self) -> None:
        console = MockConsole()
        assert stylesheet_source(console, environ={}) == BUNDLED_CSS
        assert BUNDLED_CSS.is_file()
        assert console.outputs == []

    def test_valid_override(self, tmp_path: Path) -> None:
        css = tmp_path / "mine.css"
        css.write_text("body{}", encoding="utf-8")

        assert stylesheet_source(MockConsole(), environ={CSS_ENV_VAR: str(css)}) == css

    def test_invalid_override_warns_and_falls_back(self, tmp_path: Path) -> None:
        console = MockConsole()

        source = stylesheet_source(console, environ={CSS_ENV_VAR: str(tmp_path / "nope.css")})

        assert source == BUNDLED_CSS
        assert console.count(Style.WARNING) == 1
        assert CSS_ENV_VAR in console.warnings()[0]


class TestPlacement:
    def test_place_css(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CSS_ENV_VAR, raising=False)
        dist = tmp_path / "public"

        result = place_css(dist, MockConsole())

        assert result == Ok(dist / "canopy.css")
        assert (dist / "canopy.css").read_bytes() == BUNDLED_CSS.read_bytes()

    def test_place_favicon(self, tmp_path: Path) -> None:
        (tmp_path / "img").mkdir()
        (tmp_path / "img" / "icon.ico").write_bytes(b"ico")
        dist = tmp_path / "public"
        dist.mkdir()

        assert place_favicon(None, tmp_path, dist) == Ok(None)
        assert place_favicon("img/icon.ico", tmp_path, dist) == Ok(dist / "icon.ico")
        assert (dist / "icon.ico").read_bytes() == b"ico"

    def test_missing_favicon(self, tmp_path: Path) -> None:
        result = place_favicon("missing.ico", tmp_path, tmp_path)
        assert isinstance(result, Err)

    def test_copy_static(self, tmp_path: Path) -> None:
        (tmp_path / "assets").mkdir()
        (tmp_path / "assets" / "logo.svg").write_text("<svg/>", encoding="utf-8")
        config = Config(root=tmp_path, project=ProjectConfig(name="x"), build=BuildConfig(static_dir="assets"))
        dist = tmp_path / "public"

        assert copy_static(config, dist) == Ok(True)
        assert (dist / "assets" / "logo.svg").exists()

    def test_copy_static_without_directory(self, tmp_path: Path) -> None:
        config = Config(root=tmp_path, project=ProjectConfig(name="x"))
        assert copy_static(config, tmp_path / "public") == Ok(False)


class TestAdditionalCss:
    def test_concatenates_in_order(self, tmp_path: Path) -> None:
        (tmp_path / "a.css").write_text("a{}", encoding="utf-8")
        (tmp_path / "b.css").write_text("b{}", encoding="utf-8")
        dist = tmp_path / "public"
        styles = StylesConfig(additional_css=("a.css", "b.css"))

        result = write_additional_css(styles.additional_css, tmp_path, dist)

        assert result == Ok(dist / "custom.css")
        text = (dist / "custom.css").read_text(encoding="utf-8")
        assert text.index("a{}") < text.index("b{}")

    def test_nothing_to_write(self, tmp_path: Path) -> None:
        assert write_additional_css((), tmp_path, tmp_path) == Ok(None)

    def test_missing_file(self, tmp_path: Path) -> None:
        result = write_additional_css(("gone.css",), tmp_path, tmp_path / "public")
        assert isinstance(result, Err)
