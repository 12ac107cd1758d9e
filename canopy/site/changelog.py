"""Changelog component: index page, one page per release, optional RSS feed."""

from __future__ import annotations

import re
from email.utils import format_datetime
from typing import TYPE_CHECKING, Any

from canopy.core.result import Err, Ok, Result
from canopy.releases.model import Partial, Release, Unparseable
from canopy.site.markdown import render_markdown
from canopy.site.page import Page

if TYPE_CHECKING:
    from canopy.core.config import Config
    from canopy.core.errors import SiteError
    from canopy.releases.context import Context
    from canopy.site.templates import Templates

__all__ = ["build_changelog", "index_context", "page_slug", "single_context"]

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]+")


def _status_note(release: Release) -> str | None:
    match release.status:
        case Partial():
            return "Artifacts unavailable: unsupported manifest schema"
        case Unparseable():
            return "Artifacts unavailable: manifest could not be read"
    return None


def page_slug(tag: str) -> str:
    """File-system safe page name for a tag (`release/1.0` -> `release-1.0`)."""
    slug = _UNSAFE_RE.sub("-", tag).strip(".-")
    return slug or "release"


def single_context(release: Release) -> dict[str, Any]:
    return {
        "version_tag": release.version_tag,
        "slug": page_slug(release.version_tag),
        "date": release.published_at.strftime("%Y-%m-%d") if release.published_at else None,
        "rfc822_date": format_datetime(release.published_at) if release.published_at else None,
        "body": render_markdown(release.changelog),
        "note": _status_note(release),
        "is_current_state": release.source.is_current_state,
    }


def _listed(release: Release) -> bool:
    # an unreadable manifest still gets listed when the source gave us notes
    return release.is_parsed or bool(release.changelog)


def index_context(context: Context) -> dict[str, Any]:
    """Listed releases, each with a page slug no other release uses.

    Distinct tags can sanitize to the same slug (`v1.0+b`, `v1.0-b`); later
    ones get a numeric suffix so no page overwrites another.
    """
    releases: list[dict[str, Any]] = []
    taken: set[str] = set()
    for release in context.releases:
        if not _listed(release):
            continue
        entry = single_context(release)
        slug = entry["slug"]
        n = 2
        while slug in taken:
            slug = f"{entry['slug']}-{n}"
            n += 1
        taken.add(slug)
        entry["slug"] = slug
        releases.append(entry)
    return {"releases": releases}


def build_changelog(
    context: Context, config: Config, templates: Templates
) -> Result[list[Page], SiteError]:
    data = index_context(context)
    pages: list[Page] = []

    rendered = templates.render("changelog_index.html", **data)
    if isinstance(rendered, Err):
        return rendered
    pages.append(Page(filename="changelog.html", contents=rendered.value))

    changelog_cfg = config.components.changelog
    if changelog_cfg is not None and changelog_cfg.rss_feed:
        feed = templates.render(
            "changelog.rss",
            base_url=(config.project.homepage or "").rstrip("/"),
            **data,
        )
        if isinstance(feed, Err):
            return feed
        pages.append(Page(filename="changelog.rss", contents=feed.value))

    if context.has_history:
        for release in data["releases"]:
            single = templates.render("changelog_single.html", release=release)
            if isinstance(single, Err):
                return single
            pages.append(
                Page(filename=f"changelog/{release['slug']}.html", contents=single.value)
            )
    return Ok(pages)
