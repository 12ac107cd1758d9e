"""Jinja2 templates for site pages.

Templates live in `canopy/site/templates/`. Every page shares the layout
globals set here (project metadata, navigation, links under the path prefix),
so component builders only pass their own data to `render`.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.site.link import generate_link

if TYPE_CHECKING:
    from canopy.core.config import Config
    from canopy.core.workspace import WorkspaceConfig
    from canopy.releases.context import Context

__all__ = ["TEMPLATE_DIR", "Templates", "navigation"]

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml", "rss"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def navigation(config: Config, context: Context | None) -> list[dict[str, str]]:
    """Header links for the components that will produce pages."""
    link = partial(generate_link, config.build.path_prefix)
    has_history = context is not None and context.has_history
    nav = [{"title": "Home", "href": link("")}]
    for title, path in config.build.additional_pages:
        nav.append({"title": title, "href": link(f"{Path(path).stem}/")})
    if config.components.artifacts_enabled and has_history:
        nav.append({"title": "Install", "href": link("artifacts/")})
    if config.components.changelog is not None and has_history:
        nav.append({"title": "Changelog", "href": link("changelog/")})
    if config.components.funding is not None:
        nav.append({"title": "Funding", "href": link("funding/")})
    if config.components.mdbook is not None:
        nav.append({"title": "Docs", "href": link("book/")})
    return nav


class Templates:
    """Renders named templates with the layout globals of one site."""

    def __init__(self, env: Environment, globals_: dict[str, Any]) -> None:
        self._env = env
        self._env.globals.update(globals_)

    @classmethod
    def for_site(cls, config: Config, context: Context | None) -> Templates:
        latest = context.latest if context is not None else None
        changelog_cfg = config.components.changelog
        favicon = config.styles.favicon
        return cls(
            _environment(),
            {
                "project": config.project,
                "theme": config.styles.theme,
                "nav": navigation(config, context),
                "link": partial(generate_link, config.build.path_prefix),
                "latest_tag": (
                    latest.version_tag
                    if latest is not None and not latest.source.is_current_state
                    else None
                ),
                "favicon": Path(favicon).name if favicon else None,
                "has_custom_css": bool(config.styles.additional_css),
                "rss": bool(
                    changelog_cfg is not None
                    and changelog_cfg.rss_feed
                    and context is not None
                    and context.has_history
                ),
            },
        )

    @classmethod
    def for_workspace(cls, workspace: WorkspaceConfig) -> Templates:
        favicon = workspace.styles.favicon
        return cls(
            _environment(),
            {
                "workspace": workspace,
                "theme": workspace.styles.theme,
                "link": partial(generate_link, None),
                "favicon": Path(favicon).name if favicon else None,
                "has_custom_css": bool(workspace.styles.additional_css),
            },
        )

    def render(self, template: str, **context: Any) -> Result[str, SiteError]:
        """Render `template`, turning template errors into COMPONENT_FAILED."""
        try:
            return Ok(self._env.get_template(template).render(**context))
        except TemplateError as e:
            return Err(
                SiteError(
                    kind=ErrorKind.COMPONENT_FAILED,
                    message=f"Failed to render template {template}",
                    cause=f"{type(e).__name__}: {e}",
                )
            )
