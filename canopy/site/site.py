"""Build orchestration for one project site.

Stages, in order:

1. prepare the output directory (fatal on failure)
2. build the release Context when something needs it
3. components: additional pages, artifacts, changelog, funding
4. the index page (always exactly one)
5. write pages (fatal on failure), then the book and static assets

Each component in 3 and 5 is an isolated unit: its failure is printed as a
warning and the component is skipped, siblings are unaffected.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from canopy.core.errors import ErrorKind, Severity, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.output.errors import print_site_error
from canopy.platform.files import remove_tree
from canopy.releases.context import Context, build_context, select_client
from canopy.releases.repo import GithubRepo
from canopy.releases.sources import has_releases
from canopy.site import assets
from canopy.site.artifacts import ARTIFACTS_JSON, artifacts_json, build_artifacts, template_context
from canopy.site.changelog import build_changelog
from canopy.site.funding import build_funding
from canopy.site.markdown import is_markdown, read_markdown
from canopy.site.mdbook import build_mdbook
from canopy.site.page import Page, write_pages
from canopy.site.templates import Templates

if TYPE_CHECKING:
    from canopy.core.config import Config
    from canopy.core.workspace import WorkspaceMember
    from canopy.net.http import HttpClient
    from canopy.output.console import ConsoleProtocol

__all__ = ["Site", "clean_dist_dir", "needs_context"]

T = TypeVar("T")


def _isolated(
    component: str, console: ConsoleProtocol, build: Callable[[], Result[T, SiteError]]
) -> T | None:
    """Run one component; on failure warn, skip it and return None."""
    result = build()
    if isinstance(result, Err):
        error = result.error
        print_site_error(
            SiteError(
                kind=ErrorKind.COMPONENT_FAILED,
                message=f"Skipping the {component} component: {error.message}",
                severity=Severity.WARNING,
                hint=error.hint,
                cause=error.cause,
            ),
            console,
        )
        return None
    return result.value


def clean_dist_dir(dist: Path) -> Result[None, SiteError]:
    """Remove and recreate the output directory."""
    try:
        remove_tree(dist)
        dist.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(
            SiteError(
                kind=ErrorKind.STRUCTURAL_IO,
                message=f"Failed to create a directory, `{dist}`, to build your project in.",
                cause=str(e),
            )
        )
    return Ok(None)


def _has_repo_and_releases(config: Config, http: HttpClient, console: ConsoleProtocol) -> bool:
    repo_url = config.project.repository
    if repo_url is None:
        return False
    repo = GithubRepo.from_url(repo_url)
    if isinstance(repo, Err):
        print_site_error(repo.error.as_warning(), console)
        return False
    result = has_releases(select_client(config, repo.value), http)
    if isinstance(result, Err):
        print_site_error(
            SiteError(
                kind=ErrorKind.SOURCE_UNREACHABLE,
                message=(
                    f"Failed checking for releases for repo, {repo.value}. "
                    "Proceeding without releases..."
                ),
                severity=Severity.WARNING,
                hint=result.error.hint,
                cause=result.error,
            ),
            console,
        )
        return False
    return result.value


def needs_context(config: Config, http: HttpClient, console: ConsoleProtocol) -> bool:
    """Whether release history is worth fetching for this build.

    Components that render releases always need it. Otherwise the existence
    check decides, so a repository with releases still shows its version.
    """
    if config.project.repository is None:
        return False
    components = config.components
    if components.artifacts_enabled or components.changelog is not None:
        return True
    return _has_repo_and_releases(config, http, console)


def _context_or_current(config: Config, http: HttpClient, console: ConsoleProtocol) -> Context:
    result = build_context(config, http, console)
    if isinstance(result, Err):
        # a broken release source must not prevent publishing the docs
        print_site_error(result.error.as_warning(), console)
        return Context.current(config)
    return result.value


def _page_name(path: str) -> str:
    return f"{Path(path).stem}.html"


def _build_additional_pages(
    config: Config, templates: Templates, console: ConsoleProtocol
) -> Result[list[Page], SiteError]:
    pages: list[Page] = []
    for title, path in config.build.additional_pages:
        if not is_markdown(path):
            console.warning(f"File {path} in additional pages is not markdown and will be skipped")
            continue
        body = read_markdown(config.resolve(path), filedesc=f"additional page `{title}`")
        if isinstance(body, Err):
            return body
        rendered = templates.render("markdown_page.html", title=title, body=body.value)
        if isinstance(rendered, Err):
            return rendered
        pages.append(Page(filename=_page_name(path), contents=rendered.value))
    return Ok(pages)


def _readme_html(config: Config, console: ConsoleProtocol) -> str:
    rendered = read_markdown(config.readme_path, filedesc="readme")
    if isinstance(rendered, Err):
        print_site_error(rendered.error.as_warning(), console)
        return ""
    return rendered.value


def _build_index(
    config: Config,
    templates: Templates,
    console: ConsoleProtocol,
    artifacts: dict[str, Any] | None,
) -> Result[Page, SiteError]:
    readme = _readme_html(config, console)
    rendered = templates.render("index.html", readme=readme, artifacts=artifacts)
    if isinstance(rendered, Err) and artifacts is not None:
        print_site_error(rendered.error.as_warning(), console)
        rendered = templates.render("index.html", readme=readme, artifacts=None)
    if isinstance(rendered, Err):
        return rendered
    return Ok(Page(filename="index.html", contents=rendered.value))


@dataclass
class Site:
    """The pages of one build, plus what is needed to write them."""

    config: Config
    pages: list[Page] = field(default_factory=list)
    member: WorkspaceMember | None = None
    latest_tag: str | None = None
    json_only: bool = False

    @classmethod
    def build_single(
        cls,
        config: Config,
        http: HttpClient,
        console: ConsoleProtocol,
        member: WorkspaceMember | None = None,
    ) -> Result[Site, SiteError]:
        cleaned = clean_dist_dir(config.dist_path)
        if isinstance(cleaned, Err):
            return cleaned

        context = (
            _context_or_current(config, http, console)
            if needs_context(config, http, console)
            else None
        )
        if context is not None:
            context.mark_latest_scripts_viewable()

        planned = config.components.planned()
        if planned:
            console.info(f"Building components: {', '.join(planned)}")

        templates = Templates.for_site(config, context)
        pages: list[Page] = []

        extra = _isolated(
            "additional pages", console, lambda: _build_additional_pages(config, templates, console)
        )
        pages.extend(extra or [])

        has_history = context is not None and context.has_history
        index_artifacts: dict[str, Any] | None = None

        if config.components.artifacts_enabled:
            if context is not None and has_history:
                built = _isolated("artifacts", console, lambda: build_artifacts(context, templates))
                if built is not None:
                    artifact_pages, index_artifacts = built
                    if not artifact_pages:
                        console.info("No release lists any artifacts, skipping the artifacts page")
                    pages.extend(artifact_pages)
            else:
                console.info("No published releases found, skipping the artifacts page")

        if config.components.changelog is not None:
            if context is not None and has_history:
                changelog = _isolated(
                    "changelog", console, lambda: build_changelog(context, config, templates)
                )
                pages.extend(changelog or [])
            else:
                console.info("No published releases found, skipping the changelog")

        funding_cfg = config.components.funding
        if funding_cfg is not None:
            funding = _isolated(
                "funding", console, lambda: build_funding(funding_cfg, config, templates, console)
            )
            pages.extend(funding or [])

        index = _build_index(config, templates, console, index_artifacts)
        if isinstance(index, Err):
            return index
        pages.append(index.value)

        return Ok(cls(config=config, pages=pages, member=member, latest_tag=_latest_tag(context)))

    @classmethod
    def build_json_only(
        cls,
        config: Config,
        http: HttpClient,
        console: ConsoleProtocol,
        member: WorkspaceMember | None = None,
    ) -> Result[Site, SiteError]:
        """Only produce `artifacts.json`, for consumers of the release data."""
        cleaned = clean_dist_dir(config.dist_path)
        if isinstance(cleaned, Err):
            return cleaned

        pages: list[Page] = []
        context: Context | None = None
        if config.components.artifacts_enabled and needs_context(config, http, console):
            context = _context_or_current(config, http, console)
            context.mark_latest_scripts_viewable()
            data = template_context(context) if context.has_history else None
            if data is not None:
                pages.append(Page(filename=ARTIFACTS_JSON, contents=artifacts_json(data)))
            else:
                console.info(f"No release lists any artifacts, {ARTIFACTS_JSON} was not written")

        return Ok(
            cls(
                config=config,
                pages=pages,
                member=member,
                latest_tag=_latest_tag(context),
                json_only=True,
            )
        )

    def write(self, console: ConsoleProtocol) -> Result[None, SiteError]:
        """Write pages, then build the book and place assets.

        Page writes are fatal on failure; book and asset failures only warn.
        """
        dist = self.config.dist_path
        written = write_pages(self.pages, dist)
        if isinstance(written, Err):
            return written
        if self.json_only:
            return Ok(None)

        book_cfg = self.config.components.mdbook
        if book_cfg is not None:
            _isolated("mdbook", console, lambda: build_mdbook(book_cfg, self.config, dist))

        _isolated("stylesheet", console, lambda: assets.place_css(dist, console))
        _isolated(
            "favicon",
            console,
            lambda: assets.place_favicon(self.config.styles.favicon, self.config.root, dist),
        )
        _isolated("static files", console, lambda: assets.copy_static(self.config, dist))
        _isolated(
            "additional css",
            console,
            lambda: assets.write_additional_css(
                self.config.styles.additional_css, self.config.root, dist
            ),
        )
        console.success(f"Wrote {len(self.pages)} page(s) to {dist}")
        return Ok(None)


def _latest_tag(context: Context | None) -> str | None:
    if context is None or not context.has_history:
        return None
    latest = context.latest
    return latest.version_tag if latest is not None else None
