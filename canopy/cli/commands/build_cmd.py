"""Build command - build a project site or a whole workspace."""

from __future__ import annotations

from pathlib import Path

import typer

from canopy.cli.commands._helpers import config_site_error, exit_with_error
from canopy.cli.context import CLIContext, build_context
from canopy.core.config import load_config
from canopy.core.result import Err
from canopy.core.workspace import find_workspace, load_workspace
from canopy.site.site import Site
from canopy.site.workspace import build_workspace, build_workspace_index, write_workspace_index


def build(
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project or workspace directory (default: current directory)",
        show_default=False,
    ),
    json_only: bool = typer.Option(
        False, "--json-only", help="Only write artifacts.json, skip the website"
    ),
) -> None:
    """Build the website into the configured dist directory."""
    ctx = build_context(root)

    workspace_file = find_workspace(ctx.root)
    if workspace_file is not None:
        _build_workspace(ctx, workspace_file, json_only=json_only)
        return

    loaded = load_config(ctx.root)
    if isinstance(loaded, Err):
        exit_with_error(config_site_error(loaded.error), ctx.console)
    config = loaded.value

    http = ctx.http(config.build.http_timeout)
    build_site = Site.build_json_only if json_only else Site.build_single
    site = build_site(config, http, ctx.console)
    if isinstance(site, Err):
        exit_with_error(site.error, ctx.console)

    written = site.value.write(ctx.console)
    if isinstance(written, Err):
        exit_with_error(written.error, ctx.console)


def _build_workspace(ctx: CLIContext, workspace_file: Path, *, json_only: bool) -> None:
    loaded = load_workspace(workspace_file)
    if isinstance(loaded, Err):
        exit_with_error(config_site_error(loaded.error), ctx.console)
    workspace = loaded.value

    ctx.console.header(f"Building workspace {workspace.name}")
    sites = build_workspace(workspace, ctx.http, ctx.console, json_only=json_only)
    if isinstance(sites, Err):
        exit_with_error(sites.error, ctx.console)
    if json_only:
        return

    index = build_workspace_index(workspace, sites.value)
    if isinstance(index, Err):
        exit_with_error(index.error, ctx.console)
    written = write_workspace_index(workspace, index.value, ctx.console)
    if isinstance(written, Err):
        exit_with_error(written.error, ctx.console)
