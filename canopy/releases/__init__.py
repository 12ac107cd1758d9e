"""Release history: sources, manifest parsing and aggregation."""

from .context import Context, build_context, select_client
from .manifest import MANIFEST_ASSET, SUPPORTED_SCHEMA_VERSION, parse_manifest
from .model import (
    Artifact,
    Full,
    ParseStatus,
    Partial,
    RawManifest,
    Release,
    ReleaseSource,
    Unparseable,
)
from .repo import GithubRepo
from .sources import GithubReleases, HostedReleases, ReleaseClient, fetch_manifests, has_releases

__all__ = [
    "MANIFEST_ASSET",
    "SUPPORTED_SCHEMA_VERSION",
    "Artifact",
    "Context",
    "Full",
    "GithubReleases",
    "GithubRepo",
    "HostedReleases",
    "ParseStatus",
    "Partial",
    "RawManifest",
    "Release",
    "ReleaseClient",
    "ReleaseSource",
    "Unparseable",
    "build_context",
    "fetch_manifests",
    "has_releases",
    "parse_manifest",
    "select_client",
]
