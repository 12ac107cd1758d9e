"""Funding component.

Reads GitHub's `.github/FUNDING.yml` convention (platform -> handle or list of
handles) and an optional `funding.md` with free-form text. Either file is
enough; without both the component is disabled with a warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import yaml

from canopy.core.errors import ErrorKind, Severity, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.core.structured import as_str_dict
from canopy.output.errors import print_site_error
from canopy.site.markdown import read_markdown
from canopy.site.page import Page

if TYPE_CHECKING:
    from canopy.core.config import Config, FundingConfig
    from canopy.output.console import ConsoleProtocol
    from canopy.site.templates import Templates

__all__ = ["Funding", "FundingLink", "build_funding", "load_funding"]

DEFAULT_YML_PATH = ".github/FUNDING.yml"
DEFAULT_MD_PATH = "funding.md"

_FUNDING_DOCS = (
    "https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/"
    "customizing-your-repository/displaying-a-sponsor-button-in-your-repository"
)

# platform key -> (label, url template)
PLATFORMS: dict[str, tuple[str, str]] = {
    "github": ("GitHub Sponsors", "https://github.com/sponsors/{}"),
    "patreon": ("Patreon", "https://www.patreon.com/{}"),
    "open_collective": ("Open Collective", "https://opencollective.com/{}"),
    "ko_fi": ("Ko-fi", "https://ko-fi.com/{}"),
    "tidelift": ("Tidelift", "https://tidelift.com/funding/github/{}"),
    "community_bridge": ("LFX Mentorship", "https://funding.communitybridge.org/projects/{}"),
    "lfx_crowdfunding": ("LFX Crowdfunding", "https://crowdfunding.lfx.linuxfoundation.org/projects/{}"),
    "liberapay": ("Liberapay", "https://liberapay.com/{}"),
    "issuehunt": ("IssueHunt", "https://issuehunt.io/r/{}"),
    "polar": ("Polar", "https://polar.sh/{}"),
    "buy_me_a_coffee": ("Buy Me a Coffee", "https://www.buymeacoffee.com/{}"),
    "thanks_dev": ("thanks.dev", "https://thanks.dev/{}"),
    "custom": ("Donate", "{}"),
}


@dataclass(frozen=True, slots=True)
class FundingLink:
    platform: str
    label: str
    handle: str
    url: str


@dataclass(frozen=True, slots=True)
class Funding:
    links: tuple[FundingLink, ...]
    preferred: FundingLink | None = None
    content: str | None = None  # rendered funding.md


def _handles(value: object) -> list[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        return [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return []


def parse_funding_yml(text: str) -> Result[tuple[FundingLink, ...], SiteError]:
    try:
        data_obj: object = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return Err(_parse_error(str(e)))

    if data_obj is None:
        return Ok(())
    data = as_str_dict(data_obj)
    if data is None:
        return Err(_parse_error("FUNDING.yml must be a mapping of platform to handle(s)"))

    links: list[FundingLink] = []
    for platform, value in data.items():
        known = PLATFORMS.get(platform)
        if known is None:
            continue
        label, template = known
        for handle in _handles(value):
            links.append(
                FundingLink(
                    platform=platform,
                    label=label,
                    handle=handle,
                    url=template.format(handle),
                )
            )
    return Ok(tuple(links))


def _parse_error(details: str) -> SiteError:
    return SiteError(
        kind=ErrorKind.COMPONENT_FAILED,
        message="Error while parsing FUNDING.yml",
        hint=f"Make sure your FUNDING.yml conforms to GitHub's format! {_FUNDING_DOCS}",
        cause=details,
    )


def load_funding(
    funding_cfg: FundingConfig, config: Config, console: ConsoleProtocol
) -> Result[Funding, SiteError]:
    """Load funding data for a project.

    An unknown `preferred_funding` only produces a warning.
    """
    yml_path = config.resolve(funding_cfg.yml_path or DEFAULT_YML_PATH)
    md_path = config.resolve(funding_cfg.md_path or DEFAULT_MD_PATH)

    if not yml_path.is_file() and not md_path.is_file():
        return Err(
            SiteError(
                kind=ErrorKind.CONFIG_INVALID,
                message="Couldn't find your FUNDING.yml or funding.md",
                hint="You can set yml_path or md_path in your components.funding config",
            )
        )

    links: tuple[FundingLink, ...] = ()
    if yml_path.is_file():
        try:
            text = yml_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                SiteError(
                    kind=ErrorKind.SOURCE_UNREACHABLE,
                    message=f"Failed to load funding details at {yml_path}",
                    cause=str(e),
                )
            )
        parsed = parse_funding_yml(text)
        if isinstance(parsed, Err):
            return parsed
        links = parsed.value

    content: str | None = None
    if md_path.is_file():
        rendered = read_markdown(md_path, filedesc="funding.md")
        if isinstance(rendered, Err):
            return rendered
        content = rendered.value

    preferred: FundingLink | None = None
    if funding_cfg.preferred_funding:
        preferred = next(
            (link for link in links if link.platform == funding_cfg.preferred_funding), None
        )
        if preferred is None:
            available = ", ".join(sorted({link.platform for link in links})) or "none"
            print_site_error(
                SiteError(
                    kind=ErrorKind.CONFIG_INVALID,
                    message=(
                        f"Your preferred_funding '{funding_cfg.preferred_funding}' "
                        "didn't match any of the sources we found"
                    ),
                    severity=Severity.WARNING,
                    hint=f"Available sources: {available}",
                ),
                console,
            )

    return Ok(Funding(links=links, preferred=preferred, content=content))


def build_funding(
    funding_cfg: FundingConfig,
    config: Config,
    templates: Templates,
    console: ConsoleProtocol,
) -> Result[list[Page], SiteError]:
    loaded = load_funding(funding_cfg, config, console)
    if isinstance(loaded, Err):
        return loaded
    funding = loaded.value
    others = [link for link in funding.links if link != funding.preferred]
    rendered = templates.render(
        "funding.html",
        preferred=funding.preferred,
        links=others,
        content=funding.content,
    )
    if isinstance(rendered, Err):
        return rendered
    return Ok([Page(filename="funding.html", contents=rendered.value)])
