from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class ReleaseSource(Enum):
    """Where a release came from."""

    GITHUB = "github"
    HOSTED = "hosted"
    # synthetic: the project's present, unreleased state
    CURRENT = "current"

    @property
    def is_current_state(self) -> bool:
        return self is ReleaseSource.CURRENT

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Full:
    pass


@dataclass(frozen=True, slots=True)
class Partial:
    reason: str


@dataclass(frozen=True, slots=True)
class Unparseable:
    reason: str


ParseStatus = Full | Partial | Unparseable


_SCRIPT_SUFFIXES = (".sh", ".ps1")


@dataclass(frozen=True, slots=True)
class Artifact:
    target: str
    name: str
    url: str
    kind: str
    # set on the latest release only: the page shows an inline install command
    viewable: bool = False

    @property
    def is_script(self) -> bool:
        return self.kind in ("installer", "script") and self.name.endswith(_SCRIPT_SUFFIXES)

    @property
    def install_command(self) -> str | None:
        if not self.viewable:
            return None
        if self.name.endswith(".sh"):
            return f"curl --proto '=https' --tlsv1.2 -LsSf {self.url} | sh"
        if self.name.endswith(".ps1"):
            return f'powershell -c "irm {self.url} | iex"'
        return None


@dataclass(frozen=True, slots=True)
class Release:
    version_tag: str
    source: ReleaseSource
    status: ParseStatus
    published_at: datetime | None = None
    schema_version: str | None = None
    artifacts: tuple[Artifact, ...] = ()
    changelog: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.status, Unparseable) and self.artifacts:
            raise ValueError(f"unparseable release {self.version_tag} cannot carry artifacts")

    @property
    def is_parsed(self) -> bool:
        """True unless the manifest was unparseable."""
        return not isinstance(self.status, Unparseable)

    def with_viewable_scripts(self) -> Release:
        return replace(
            self,
            artifacts=tuple(
                replace(a, viewable=True) if a.is_script else a for a in self.artifacts
            ),
        )


@dataclass(frozen=True, slots=True)
class RawManifest:
    """A release as reported by a source, before its manifest is parsed.

    Attributes:
        tag: Release tag name.
        payload: Manifest text, or None if it could not be downloaded.
        source: Which client produced it.
        download_base: URL prefix for artifacts without an explicit URL.
        published_at: Publish date reported by the source.
        body: Release notes reported by the source.
        error: Why `payload` is missing.
    """

    tag: str
    payload: str | None
    source: ReleaseSource
    download_base: str
    published_at: datetime | None = None
    body: str | None = None
    error: str | None = None


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by release APIs."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
