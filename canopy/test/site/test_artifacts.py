"""Tests for the artifacts component (canopy.site.artifacts)."""

import json
from pathlib import Path

from canopy.core.config import ArtifactsConfig, ComponentsConfig, Config, ProjectConfig
from canopy.core.result import Ok
from canopy.releases.context import Context
from canopy.releases.model import Artifact, Full, Partial, Release, ReleaseSource, Unparseable
from canopy.site.artifacts import ARTIFACTS_JSON, build_artifacts, template_context
from canopy.site.templates import Templates


def artifact(name: str, target: str = "x86_64-unknown-linux-gnu", kind: str = "archive") -> Artifact:
    return Artifact(target=target, name=name, url=f"https://dl.example/{name}", kind=kind)


def release(tag: str, *artifacts: Artifact) -> Release:
    return Release(version_tag=tag, source=ReleaseSource.GITHUB, status=Full(), artifacts=artifacts)


def templates_for(tmp_path: Path, context: Context) -> Templates:
    config = Config(
        root=tmp_path,
        project=ProjectConfig(name="tool"),
        components=ComponentsConfig(artifacts=ArtifactsConfig()),
    )
    return Templates.for_site(config, context)


class TestTemplateContext:
    def test_latest_with_installers_and_previous(self) -> None:
        context = Context(
            releases=(
                release("v2", artifact("tool-v2.tar.gz"), artifact("install.sh", target="any", kind="installer")),
                release("v1", artifact("tool-v1.tar.gz", target="aarch64-apple-darwin")),
            )
        )
        context.mark_latest_scripts_viewable()

        data = template_context(context)

        assert data is not None
        assert data["latest"]["tag"] == "v2"
        assert [i["name"] for i in data["installers"]] == ["install.sh"]
        assert data["targets"] == ["any", "x86_64-unknown-linux-gnu"]
        assert [p["tag"] for p in data["previous"]] == ["v1"]
        assert data["previous"][0]["artifacts"][0]["install_command"] is None

    def test_none_without_artifacts(self) -> None:
        assert template_context(Context(releases=(release("v1"),))) is None

    def test_partial_latest_keeps_older_downloads(self) -> None:
        newer = Release(version_tag="v3", source=ReleaseSource.GITHUB, status=Partial("schema 2.0"))
        context = Context(releases=(newer, release("v2", artifact("tool.zip"))))

        data = template_context(context)

        assert data is not None
        assert data["latest"]["tag"] == "v3"
        assert data["latest"]["artifacts"] == []
        assert data["installers"] == []
        assert [p["tag"] for p in data["previous"]] == ["v2"]

    def test_unparseable_newest_is_skipped(self) -> None:
        broken = Release(version_tag="v3", source=ReleaseSource.GITHUB, status=Unparseable("bad"))
        context = Context(releases=(broken, release("v2", artifact("tool.zip"))))

        data = template_context(context)

        assert data is not None
        assert data["latest"]["tag"] == "v2"


class TestBuildArtifacts:
    def test_renders_page_and_json(self, tmp_path: Path) -> None:
        context = Context(releases=(release("v1.0.0", artifact("install.sh", target="any", kind="installer")),))
        context.mark_latest_scripts_viewable()

        result = build_artifacts(context, templates_for(tmp_path, context))

        assert isinstance(result, Ok)
        pages, data = result.value
        assert [p.filename for p in pages] == ["artifacts.html", ARTIFACTS_JSON]
        html = pages[0].contents
        assert "v1.0.0" in html
        assert "curl --proto" in html
        decoded = json.loads(pages[1].contents)
        assert decoded["latest"]["tag"] == "v1.0.0"
        assert data is not None and data["latest"] == decoded["latest"]

    def test_nothing_to_download_yields_no_pages(self, tmp_path: Path) -> None:
        context = Context(releases=(release("v1.0.0"),))

        result = build_artifacts(context, templates_for(tmp_path, context))

        assert isinstance(result, Ok)
        assert result.value == ([], None)
