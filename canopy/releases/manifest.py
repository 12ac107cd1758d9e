"""Release manifest parsing.

A release manifest is a JSON document published as a release asset:

    {
      "schema_version": "1.2",
      "changelog": "## Fixes\\n...",
      "artifacts": [
        {"target": "x86_64-unknown-linux-gnu",
         "name": "tool-x86_64-unknown-linux-gnu.tar.xz",
         "kind": "archive"}
      ]
    }

Parsing never fails: every manifest becomes a `Release` whose status tells
how much of it could be trusted.

- Full: same major version and a minor not newer than ours.
- Partial: another schema version, but a JSON object that names one. Only
  identity and changelog are kept, never artifacts.
- Unparseable: no payload, not JSON, not an object, no `schema_version`, or a
  compatible manifest with malformed artifacts.

Unknown fields are ignored.
"""

from __future__ import annotations

import json

from canopy.core.result import Err, Ok, Result
from canopy.core.structured import StrDict, as_str_dict, get_list, get_str
from canopy.releases.model import (
    Artifact,
    Full,
    Partial,
    RawManifest,
    Release,
    Unparseable,
)

__all__ = ["MANIFEST_ASSET", "SUPPORTED_SCHEMA_VERSION", "parse_manifest", "is_compatible"]

MANIFEST_ASSET = "release-manifest.json"
SUPPORTED_SCHEMA_VERSION = "1.2"


def _version_tuple(version: str) -> tuple[int, int] | None:
    parts = version.strip().lstrip("v").split(".")
    try:
        major = int(parts[0])
        minor = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        return None
    return major, minor


def is_compatible(declared: str, supported: str = SUPPORTED_SCHEMA_VERSION) -> bool:
    """Whether a manifest of version `declared` can be read fully.

    Same major, and a minor no newer than the supported one.
    """
    ours = _version_tuple(supported)
    theirs = _version_tuple(declared)
    if ours is None or theirs is None:
        return False
    return theirs[0] == ours[0] and theirs[1] <= ours[1]


def _parse_artifacts(data: StrDict, download_base: str) -> Result[tuple[Artifact, ...], str]:
    entries = get_list(data, "artifacts")
    if entries is None:
        return Err("`artifacts` must be a list")

    artifacts: list[Artifact] = []
    for i, entry in enumerate(entries):
        table = as_str_dict(entry)
        if table is None:
            return Err(f"artifact #{i + 1} is not an object")
        name = get_str(table, "name")
        kind = get_str(table, "kind")
        if name is None or kind is None:
            return Err(f"artifact #{i + 1} needs `name` and `kind`")
        artifacts.append(
            Artifact(
                target=get_str(table, "target") or "any",
                name=name,
                url=get_str(table, "url") or f"{download_base.rstrip('/')}/{name}",
                kind=kind,
            )
        )
    return Ok(tuple(artifacts))


def parse_manifest(raw: RawManifest) -> Release:
    """Turn one fetched manifest into a Release.

    Args:
        raw: Tag, payload and source metadata as fetched.

    Returns:
        A Release with status Full, Partial or Unparseable.
    """

    def unparseable(reason: str, schema_version: str | None = None) -> Release:
        return Release(
            version_tag=raw.tag,
            source=raw.source,
            status=Unparseable(reason),
            published_at=raw.published_at,
            schema_version=schema_version,
            changelog=raw.body,
        )

    if raw.payload is None:
        return unparseable(f"manifest could not be downloaded: {raw.error or 'unknown error'}")

    try:
        data_obj: object = json.loads(raw.payload)
    except json.JSONDecodeError as e:
        return unparseable(f"manifest is not valid JSON: {e}")

    data = as_str_dict(data_obj)
    if data is None:
        return unparseable("manifest root must be a JSON object")

    schema_version = get_str(data, "schema_version")
    if schema_version is None:
        return unparseable("manifest has no `schema_version`")

    changelog = get_str(data, "changelog") or raw.body

    if not is_compatible(schema_version):
        return Release(
            version_tag=raw.tag,
            source=raw.source,
            status=Partial(
                f"the schema was version {schema_version}, "
                f"while our parser is version {SUPPORTED_SCHEMA_VERSION}"
            ),
            published_at=raw.published_at,
            schema_version=schema_version,
            changelog=changelog,
        )

    artifacts = _parse_artifacts(data, raw.download_base)
    if isinstance(artifacts, Err):
        return unparseable(artifacts.error, schema_version)

    return Release(
        version_tag=raw.tag,
        source=raw.source,
        status=Full(),
        published_at=raw.published_at,
        schema_version=schema_version,
        artifacts=artifacts.value,
        changelog=changelog,
    )
