"""Artifacts component: install page and `artifacts.json` for the latest release."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from canopy.core.errors import SiteError
from canopy.core.result import Err, Ok, Result
from canopy.releases.model import Artifact, Release
from canopy.site.page import Page

if TYPE_CHECKING:
    from canopy.releases.context import Context
    from canopy.site.templates import Templates

__all__ = ["ARTIFACTS_JSON", "build_artifacts", "template_context"]

ARTIFACTS_JSON = "artifacts.json"


def _artifact_dict(artifact: Artifact) -> dict[str, Any]:
    return {
        "name": artifact.name,
        "target": artifact.target,
        "kind": artifact.kind,
        "url": artifact.url,
        "install_command": artifact.install_command,
    }


def _release_dict(release: Release) -> dict[str, Any]:
    return {
        "tag": release.version_tag,
        "published_at": release.published_at.isoformat() if release.published_at else None,
        "artifacts": [_artifact_dict(a) for a in release.artifacts],
    }


def template_context(context: Context) -> dict[str, Any] | None:
    """Data shared by the install page, the index and `artifacts.json`.

    The latest release keeps its place even when its manifest could not list
    artifacts; older releases with downloads are still offered under
    `previous`. Returns None when no release has artifacts to offer.
    """
    latest = context.latest
    if latest is None or not any(r.artifacts for r in context.releases):
        return None
    latest_dict = _release_dict(latest)
    return {
        "latest": latest_dict,
        "installers": [a for a in latest_dict["artifacts"] if a["install_command"]],
        "targets": sorted({a.target for a in latest.artifacts}),
        "previous": [
            _release_dict(r) for r in context.releases if r is not latest and r.artifacts
        ],
    }


def artifacts_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, sort_keys=True) + "\n"


def build_artifacts(
    context: Context, templates: Templates
) -> Result[tuple[list[Page], dict[str, Any] | None], SiteError]:
    """Render `artifacts.html` and `artifacts.json`.

    The context's latest release must already have its scripts marked viewable.
    Returns the pages plus the template data, which the index page reuses.
    With nothing to download both are empty.
    """
    data = template_context(context)
    if data is None:
        return Ok(([], None))

    rendered = templates.render("artifacts.html", artifacts=data)
    if isinstance(rendered, Err):
        return rendered
    pages = [
        Page(filename="artifacts.html", contents=rendered.value),
        Page(filename=ARTIFACTS_JSON, contents=artifacts_json(data)),
    ]
    return Ok((pages, data))
