"""Workspace builds: every member site, then a landing page listing them.

Members are built one after another. Each member's config is already rooted
at its own directory, so nothing here touches the process working directory.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.core.workspace import resolve_members
from canopy.site import assets
from canopy.site.page import Page, write_pages
from canopy.site.site import Site, clean_dist_dir
from canopy.site.templates import Templates

if TYPE_CHECKING:
    from canopy.core.workspace import WorkspaceConfig
    from canopy.net.http import HttpClient
    from canopy.output.console import ConsoleProtocol

__all__ = ["build_workspace", "build_workspace_index", "write_workspace_index"]


def build_workspace(
    workspace: WorkspaceConfig,
    http_for: Callable[[float], HttpClient],
    console: ConsoleProtocol,
    *,
    json_only: bool = False,
) -> Result[list[Site], SiteError]:
    """Build and write every member site.

    `http_for` makes each member's client from its own `build.http_timeout`.
    The first fatal member error stops the loop and is returned, wrapped with
    the member's slug.
    """
    members = resolve_members(workspace)
    if isinstance(members, Err):
        return Err(
            SiteError(
                kind=ErrorKind.CONFIG_INVALID,
                message=members.error.message,
                hint=f"Check {members.error.path}" if members.error.path else None,
            )
        )

    cleaned = clean_dist_dir(workspace.dist_path)
    if isinstance(cleaned, Err):
        return cleaned

    sites: list[Site] = []
    for member in members.value:
        console.header(f"Building {member.slug}")
        build = Site.build_json_only if json_only else Site.build_single
        http = http_for(member.config.build.http_timeout)
        result = build(member.config, http, console, member=member)
        if isinstance(result, Ok):
            written = result.value.write(console)
            if isinstance(written, Err):
                result = written
        if isinstance(result, Err):
            return Err(
                SiteError(
                    kind=result.error.kind,
                    message=f"Failed to build workspace member `{member.slug}`",
                    cause=result.error,
                )
            )
        sites.append(result.value)
    return Ok(sites)


def _member_entry(site: Site) -> dict[str, str | None]:
    slug = site.member.slug if site.member is not None else site.config.build.path_prefix or ""
    project = site.config.project
    return {
        "slug": slug,
        "name": project.name,
        "description": project.description,
        "latest_tag": site.latest_tag,
        "href": f"{slug}/",
    }


def build_workspace_index(workspace: WorkspaceConfig, sites: list[Site]) -> Result[Page, SiteError]:
    templates = Templates.for_workspace(workspace)
    rendered = templates.render("workspace_index.html", members=[_member_entry(s) for s in sites])
    if isinstance(rendered, Err):
        return rendered
    return Ok(Page(filename="index.html", contents=rendered.value))


def write_workspace_index(
    workspace: WorkspaceConfig, page: Page, console: ConsoleProtocol
) -> Result[None, SiteError]:
    """Write the landing page and its stylesheets to the workspace dist dir."""
    dist = workspace.dist_path
    written = write_pages([page], dist)
    if isinstance(written, Err):
        return written

    for result in (
        assets.place_css(dist, console),
        assets.place_favicon(workspace.styles.favicon, workspace.root, dist),
        assets.write_additional_css(workspace.styles.additional_css, workspace.root, dist),
    ):
        if isinstance(result, Err):
            return result
    console.success(f"Wrote workspace index to {dist}")
    return Ok(None)
