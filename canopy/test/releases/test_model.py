"""Tests for canopy.releases.model module."""

import pytest

from canopy.releases.model import (
    Artifact,
    Full,
    Release,
    ReleaseSource,
    Unparseable,
    parse_timestamp,
)


def artifact(name: str, kind: str = "installer") -> Artifact:
    return Artifact(target="any", name=name, url=f"https://dl.example/{name}", kind=kind)


class TestArtifact:
    def test_scripts(self) -> None:
        assert artifact("install.sh").is_script
        assert artifact("install.ps1").is_script
        assert not artifact("tool.tar.gz", kind="archive").is_script
        assert not artifact("notes.sh", kind="archive").is_script

    def test_install_command_only_when_viewable(self) -> None:
        sh = artifact("install.sh")
        assert sh.install_command is None

        viewable = Artifact(target="any", name="install.sh", url="https://dl.example/install.sh", kind="installer", viewable=True)
        assert viewable.install_command == (
            "curl --proto '=https' --tlsv1.2 -LsSf https://dl.example/install.sh | sh"
        )

    def test_powershell_install_command(self) -> None:
        ps = Artifact(target="any", name="install.ps1", url="https://dl.example/install.ps1", kind="installer", viewable=True)
        assert ps.install_command == 'powershell -c "irm https://dl.example/install.ps1 | iex"'


class TestRelease:
    def test_unparseable_cannot_carry_artifacts(self) -> None:
        with pytest.raises(ValueError, match="cannot carry artifacts"):
            Release(
                version_tag="v1",
                source=ReleaseSource.GITHUB,
                status=Unparseable("bad"),
                artifacts=(artifact("install.sh"),),
            )

    def test_with_viewable_scripts_marks_only_scripts(self) -> None:
        release = Release(
            version_tag="v1",
            source=ReleaseSource.GITHUB,
            status=Full(),
            artifacts=(artifact("install.sh"), artifact("tool.zip", kind="archive")),
        )

        marked = release.with_viewable_scripts()

        assert [a.viewable for a in marked.artifacts] == [True, False]
        assert [a.viewable for a in release.artifacts] == [False, False]

    def test_current_source(self) -> None:
        assert ReleaseSource.CURRENT.is_current_state
        assert not ReleaseSource.GITHUB.is_current_state


class TestParseTimestamp:
    def test_github_format(self) -> None:
        ts = parse_timestamp("2024-05-01T12:30:00Z")
        assert ts is not None
        assert (ts.year, ts.month, ts.day, ts.hour) == (2024, 5, 1, 12)
        assert ts.utcoffset() is not None

    def test_invalid_or_missing(self) -> None:
        assert parse_timestamp(None) is None
        assert parse_timestamp("yesterday") is None
