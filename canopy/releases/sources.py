"""Release sources: where raw manifests are fetched from.

The set of sources is closed: `ReleaseClient` is a union of plain dataclasses
and the two capabilities (`fetch_manifests`, `has_releases`) dispatch on it
with `match`. All network access goes through an injected `HttpClient`.

Failure semantics are the same for every source:
- the repository or API cannot be reached, or answers garbage:
  Err(SOURCE_UNREACHABLE) naming the repository;
- the repository has no qualifying releases: Ok([]);
- one manifest fails to download: that release gets `payload=None`, its
  siblings are unaffected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from canopy.core.config import DEFAULT_HOSTED_URL
from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.core.structured import StrDict, as_obj_list, as_str_dict, get_bool, get_list, get_str
from canopy.net.http import HttpError
from canopy.releases.manifest import MANIFEST_ASSET
from canopy.releases.model import RawManifest, ReleaseSource, parse_timestamp
from canopy.releases.repo import GithubRepo

if TYPE_CHECKING:
    from canopy.net.http import HttpClient

__all__ = [
    "GITHUB_API",
    "GITHUB_PAGE_SIZE",
    "GithubReleases",
    "HostedReleases",
    "ReleaseClient",
    "fetch_manifests",
    "has_releases",
]

GITHUB_API = "https://api.github.com"
GITHUB_PAGE_SIZE = 100
GITHUB_MAX_PAGES = 10


@dataclass(frozen=True, slots=True)
class GithubReleases:
    """Releases listed by the GitHub REST API."""

    repo: GithubRepo
    api_url: str = GITHUB_API

    @property
    def label(self) -> str:
        return "GitHub"

    def releases_url(self, *, per_page: int, page: int) -> str:
        return (
            f"{self.api_url}/repos/{self.repo.owner}/{self.repo.name}/releases"
            f"?per_page={per_page}&page={page}"
        )


@dataclass(frozen=True, slots=True)
class HostedReleases:
    """Releases published on the first-party release hosting service."""

    repo: GithubRepo
    project: str
    base_url: str = DEFAULT_HOSTED_URL

    @property
    def label(self) -> str:
        return "hosted releases"

    @property
    def releases_url(self) -> str:
        return f"{self.base_url}/v1/projects/{self.repo.owner}/{self.project}/releases"


ReleaseClient = GithubReleases | HostedReleases


def _unreachable(client: ReleaseClient, cause: HttpError | str) -> SiteError:
    hint: str | None = None
    if isinstance(cause, HttpError) and cause.status in (401, 403):
        hint = "Set GITHUB_TOKEN if the repository is private or you hit the rate limit."
    elif isinstance(cause, HttpError) and cause.status == 404:
        hint = "Check `project.repository` in canopy.json."
    return SiteError(
        kind=ErrorKind.SOURCE_UNREACHABLE,
        message=f"Failed fetching releases for {client.repo} from {client.label}.",
        hint=hint,
        cause=str(cause),
    )


def _manifest_asset_url(release: StrDict) -> str | None:
    for asset_obj in get_list(release, "assets") or []:
        asset = as_str_dict(asset_obj)
        if asset is not None and get_str(asset, "name") == MANIFEST_ASSET:
            return get_str(asset, "browser_download_url")
    return None


def _download(http: HttpClient, url: str) -> tuple[str | None, str | None]:
    """Fetch one manifest; returns (payload, error)."""
    result = http.get_text(url)
    if isinstance(result, Err):
        return None, str(result.error)
    return result.value, None


def _fetch_github(client: GithubReleases, http: HttpClient) -> Result[list[RawManifest], SiteError]:
    raws: list[RawManifest] = []
    for page in range(1, GITHUB_MAX_PAGES + 1):
        url = client.releases_url(per_page=GITHUB_PAGE_SIZE, page=page)
        result = http.get_json(url)
        if isinstance(result, Err):
            return Err(_unreachable(client, result.error))
        items = as_obj_list(result.value)
        if items is None:
            return Err(_unreachable(client, f"expected a list of releases from {url}"))

        for item in items:
            release = as_str_dict(item)
            if release is None or get_bool(release, "draft"):
                continue
            tag = get_str(release, "tag_name")
            asset_url = _manifest_asset_url(release)
            if tag is None or asset_url is None:
                continue
            payload, error = _download(http, asset_url)
            raws.append(
                RawManifest(
                    tag=tag,
                    payload=payload,
                    source=ReleaseSource.GITHUB,
                    download_base=f"{client.repo.url}/releases/download/{tag}",
                    published_at=parse_timestamp(get_str(release, "published_at")),
                    body=get_str(release, "body"),
                    error=error,
                )
            )

        if len(items) < GITHUB_PAGE_SIZE:
            break
    return Ok(raws)


def _hosted_listing(client: HostedReleases, http: HttpClient) -> Result[list[StrDict], SiteError]:
    result = http.get_json(client.releases_url)
    if isinstance(result, Err):
        return Err(_unreachable(client, result.error))
    data = as_str_dict(result.value)
    items = get_list(data, "releases") if data is not None else None
    if items is None:
        return Err(_unreachable(client, f"expected a `releases` list from {client.releases_url}"))
    return Ok([r for r in (as_str_dict(i) for i in items) if r is not None])


def _fetch_hosted(client: HostedReleases, http: HttpClient) -> Result[list[RawManifest], SiteError]:
    listing = _hosted_listing(client, http)
    if isinstance(listing, Err):
        return listing

    raws: list[RawManifest] = []
    for release in listing.value:
        tag = get_str(release, "tag")
        manifest_url = get_str(release, "manifest_url")
        if tag is None or manifest_url is None:
            continue
        payload, error = _download(http, manifest_url)
        raws.append(
            RawManifest(
                tag=tag,
                payload=payload,
                source=ReleaseSource.HOSTED,
                download_base=get_str(release, "artifacts_url")
                or f"{client.releases_url}/{tag}/artifacts",
                published_at=parse_timestamp(get_str(release, "published_at")),
                body=get_str(release, "body"),
                error=error,
            )
        )
    return Ok(raws)


def fetch_manifests(client: ReleaseClient, http: HttpClient) -> Result[list[RawManifest], SiteError]:
    """Fetch every release that ships a manifest, newest first.

    Order is the order the source reports; nothing is re-sorted.
    """
    match client:
        case GithubReleases():
            return _fetch_github(client, http)
        case HostedReleases():
            return _fetch_hosted(client, http)


def has_releases(client: ReleaseClient, http: HttpClient) -> Result[bool, SiteError]:
    """Cheap check whether the repository has published anything at all."""
    match client:
        case GithubReleases():
            result = http.get_json(client.releases_url(per_page=1, page=1))
            if isinstance(result, Err):
                return Err(_unreachable(client, result.error))
            items = as_obj_list(result.value)
            if items is None:
                return Err(_unreachable(client, "expected a list of releases"))
            return Ok(len(items) > 0)
        case HostedReleases():
            listing = _hosted_listing(client, http)
            if isinstance(listing, Err):
                return listing
            return Ok(len(listing.value) > 0)
