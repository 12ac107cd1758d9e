"""Release aggregation: build one Context per project build.

Aggregation degrades monotonically. A source that cannot be reached means
"no history", a manifest that cannot be read means "no artifacts for that
tag"; neither stops the site from being built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from canopy.core.errors import ErrorKind, Severity, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.output.errors import print_site_error
from canopy.releases.manifest import MANIFEST_ASSET, parse_manifest
from canopy.releases.model import Full, Partial, Release, ReleaseSource, Unparseable
from canopy.releases.notes import find_version_section
from canopy.releases.repo import GithubRepo
from canopy.releases.sources import (
    GithubReleases,
    HostedReleases,
    ReleaseClient,
    fetch_manifests,
)

if TYPE_CHECKING:
    from canopy.core.config import Config
    from canopy.net.http import HttpClient
    from canopy.output.console import ConsoleProtocol

__all__ = ["Context", "build_context", "select_client"]


@dataclass
class Context:
    """Ordered release history of one project, newest first.

    Either real history or exactly one CURRENT placeholder, never both.
    The only change allowed after construction is
    `mark_latest_scripts_viewable`.
    """

    releases: tuple[Release, ...]

    def __post_init__(self) -> None:
        current = [r for r in self.releases if r.source.is_current_state]
        if current and len(self.releases) != 1:
            raise ValueError("a context holds either release history or the current state")
        self._scripts_marked = False

    @classmethod
    def current(cls, config: Config) -> Context:
        """Context for a project without usable release history."""
        version = config.project.version
        tag = f"v{version.lstrip('v')}" if version else "Unreleased"
        return cls(
            releases=(
                Release(
                    version_tag=tag,
                    source=ReleaseSource.CURRENT,
                    status=Full(),
                    changelog=_local_changelog(config, tag),
                ),
            )
        )

    @property
    def latest(self) -> Release | None:
        """The newest release whose manifest could be parsed at all."""
        for release in self.releases:
            if release.is_parsed:
                return release
        return None

    @property
    def has_history(self) -> bool:
        """True when releases came from a source, not the placeholder."""
        return any(not r.source.is_current_state for r in self.releases)

    def mark_latest_scripts_viewable(self) -> None:
        """Give the latest release inline install commands for its scripts.

        Other releases keep plain download links. Applying it twice is a no-op.
        """
        if self._scripts_marked:
            return
        latest = self.latest
        if latest is None:
            return
        index = self.releases.index(latest)
        self.releases = (
            self.releases[:index] + (latest.with_viewable_scripts(),) + self.releases[index + 1 :]
        )
        self._scripts_marked = True


def _local_changelog(config: Config, tag: str) -> str | None:
    changelog_cfg = config.components.changelog
    path = config.resolve(changelog_cfg.path if changelog_cfg else "CHANGELOG.md")
    try:
        text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError, UnicodeDecodeError):
        return None
    return find_version_section(text, tag)


def select_client(config: Config, repo: GithubRepo) -> ReleaseClient:
    """GitHub unless the config explicitly asks for hosted releases."""
    if config.components.source == "hosted":
        return HostedReleases(
            repo=repo,
            project=config.project.name,
            base_url=config.components.hosted_url,
        )
    return GithubReleases(repo=repo)


def _report_outcome(release: Release, console: ConsoleProtocol) -> None:
    match release.status:
        case Partial(reason=reason):
            print_site_error(
                SiteError(
                    kind=ErrorKind.MANIFEST_PARTIAL,
                    message=f"Skipping artifacts of {release.version_tag}: "
                    f"unsupported {MANIFEST_ASSET} schema",
                    severity=Severity.WARNING,
                    hint=reason,
                ),
                console,
            )
        case Unparseable(reason=reason):
            print_site_error(
                SiteError(
                    kind=ErrorKind.MANIFEST_MALFORMED,
                    message=f"Skipping malformed {MANIFEST_ASSET} for {release.version_tag}",
                    severity=Severity.WARNING,
                    cause=reason,
                ),
                console,
            )
        case Full():
            pass


def build_context(
    config: Config,
    http: HttpClient,
    console: ConsoleProtocol,
) -> Result[Context, SiteError]:
    """Aggregate the project's release history.

    Returns:
        Ok(Context) in every degraded case: no repository, an unreachable
        source, no releases. Err only when the configured repository URL
        cannot be understood at all.
    """
    repo_url = config.project.repository
    if repo_url is None:
        return Ok(Context.current(config))

    repo = GithubRepo.from_url(repo_url)
    if isinstance(repo, Err):
        return repo

    client = select_client(config, repo.value)
    fetched = fetch_manifests(client, http)
    if isinstance(fetched, Err):
        error = fetched.error
        print_site_error(
            SiteError(
                kind=error.kind,
                message=f"{error.message} Proceeding without releases...",
                severity=Severity.WARNING,
                hint=error.hint,
                cause=error.cause,
            ),
            console,
        )
        return Ok(Context.current(config))

    releases: list[Release] = []
    for raw in fetched.value:
        release = parse_manifest(raw)
        _report_outcome(release, console)
        releases.append(release)

    if not releases:
        console.info(
            f"No releases with a {MANIFEST_ASSET} found for {repo.value}, "
            "using the current state of the project"
        )
        return Ok(Context.current(config))

    return Ok(Context(releases=tuple(releases)))
