"""Tests for template rendering and navigation (canopy.site.templates)."""

from pathlib import Path

from canopy.core.config import (
    ArtifactsConfig,
    BuildConfig,
    ChangelogConfig,
    ComponentsConfig,
    Config,
    FundingConfig,
    MdBookConfig,
    ProjectConfig,
    StylesConfig,
)
from canopy.core.errors import ErrorKind
from canopy.core.result import Err, Ok
from canopy.releases.context import Context
from canopy.releases.model import Full, Release, ReleaseSource
from canopy.site.templates import Templates, navigation


def make_config(tmp_path: Path, prefix: str | None = None) -> Config:
    return Config(
        root=tmp_path,
        project=ProjectConfig(name="tool <beta>", description="A tool"),
        build=BuildConfig(path_prefix=prefix, additional_pages=(("FAQ", "docs/FAQ.md"),)),
        components=ComponentsConfig(
            artifacts=ArtifactsConfig(),
            changelog=ChangelogConfig(),
            funding=FundingConfig(),
            mdbook=MdBookConfig(),
        ),
        styles=StylesConfig(theme="dark", favicon="img/icon.png", additional_css=("x.css",)),
    )


def real_history() -> Context:
    return Context(releases=(Release(version_tag="v1.0.0", source=ReleaseSource.GITHUB, status=Full()),))


class TestNavigation:
    def test_full_navigation_with_history(self, tmp_path: Path) -> None:
        nav = navigation(make_config(tmp_path, prefix="tool"), real_history())

        assert [(n["title"], n["href"]) for n in nav] == [
            ("Home", "/tool/"),
            ("FAQ", "/tool/FAQ/"),
            ("Install", "/tool/artifacts/"),
            ("Changelog", "/tool/changelog/"),
            ("Funding", "/tool/funding/"),
            ("Docs", "/tool/book/"),
        ]

    def test_release_pages_hidden_without_history(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)
        nav = navigation(config, Context.current(config))

        titles = [n["title"] for n in nav]
        assert "Install" not in titles
        assert "Changelog" not in titles


class TestTemplates:
    def test_layout_globals(self, tmp_path: Path) -> None:
        templates = Templates.for_site(make_config(tmp_path), real_history())

        result = templates.render("index.html", readme="<p>hi</p>", artifacts=None)

        assert isinstance(result, Ok)
        html = result.value
        assert "<p>hi</p>" in html
        assert "tool &lt;beta&gt;" in html
        assert 'class="dark"' in html
        assert 'href="/icon.png"' in html
        assert 'href="/custom.css"' in html
        assert "v1.0.0" in html
        assert "changelog.rss" in html

    def test_placeholder_tag_not_shown(self, tmp_path: Path) -> None:
        config = Config(root=tmp_path, project=ProjectConfig(name="tool", version="0.1.0"))
        templates = Templates.for_site(config, Context.current(config))

        result = templates.render("index.html", readme="", artifacts=None)

        assert isinstance(result, Ok)
        assert "v0.1.0" not in result.value

    def test_missing_template_is_component_failure(self, tmp_path: Path) -> None:
        templates = Templates.for_site(make_config(tmp_path), None)

        result = templates.render("nope.html")

        assert isinstance(result, Err)
        assert result.error.kind is ErrorKind.COMPONENT_FAILED
        assert "nope.html" in result.error.message
