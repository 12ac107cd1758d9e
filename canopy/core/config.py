"""Typed configuration loading and access.

A project is configured by an optional `canopy.json` next to its readme.
Every relative path in it is resolved against `Config.root`, the directory
the file was loaded from, so a build never depends on the process working
directory.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_number,
    get_str,
    get_str_list,
    get_table,
)

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_HOSTED_URL",
    "ArtifactsConfig",
    "BuildConfig",
    "ChangelogConfig",
    "ComponentsConfig",
    "Config",
    "ConfigError",
    "FundingConfig",
    "MdBookConfig",
    "ProjectConfig",
    "ReleasesSourceKind",
    "StylesConfig",
    "load_config",
    "parse_styles",
]

CONFIG_FILE = "canopy.json"
DEFAULT_HOSTED_URL = "https://releases.canopy.dev"
DEFAULT_HTTP_TIMEOUT = 30.0

ReleasesSourceKind = Literal["github", "hosted"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    name: str
    version: str | None = None
    description: str | None = None
    homepage: str | None = None
    repository: str | None = None
    readme_path: str = "README.md"
    license: str | None = None


@dataclass(frozen=True, slots=True)
class BuildConfig:
    dist_dir: str = "public"
    static_dir: str = "static"
    path_prefix: str | None = None
    # title -> markdown path, in declaration order
    additional_pages: tuple[tuple[str, str], ...] = ()
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


@dataclass(frozen=True, slots=True)
class ArtifactsConfig:
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    rss_feed: bool = True
    # local changelog used for the unreleased state
    path: str = "CHANGELOG.md"


@dataclass(frozen=True, slots=True)
class FundingConfig:
    yml_path: str | None = None
    md_path: str | None = None
    preferred_funding: str | None = None


@dataclass(frozen=True, slots=True)
class MdBookConfig:
    path: str = "docs"


@dataclass(frozen=True, slots=True)
class ComponentsConfig:
    artifacts: ArtifactsConfig | None = None
    changelog: ChangelogConfig | None = None
    funding: FundingConfig | None = None
    mdbook: MdBookConfig | None = None
    source: ReleasesSourceKind = "github"
    hosted_url: str = DEFAULT_HOSTED_URL

    @property
    def artifacts_enabled(self) -> bool:
        return self.artifacts is not None and self.artifacts.enabled

    def planned(self) -> list[str]:
        """Names of the enabled components, in build order."""
        out: list[str] = []
        if self.artifacts_enabled:
            out.append("artifacts")
        if self.changelog is not None:
            out.append("changelog")
        if self.funding is not None:
            out.append("funding")
        if self.mdbook is not None:
            out.append("mdbook")
        return out


@dataclass(frozen=True, slots=True)
class StylesConfig:
    theme: str = "light"
    favicon: str | None = None
    additional_css: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container for one project."""

    root: Path
    project: ProjectConfig
    build: BuildConfig = field(default_factory=BuildConfig)
    components: ComponentsConfig = field(default_factory=ComponentsConfig)
    styles: StylesConfig = field(default_factory=StylesConfig)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a config-relative path against the project root."""
        p = Path(path).expanduser()
        if p.is_absolute():
            return p
        return self.root / p

    @property
    def dist_path(self) -> Path:
        return self.resolve(self.build.dist_dir)

    @property
    def readme_path(self) -> Path:
        return self.resolve(self.project.readme_path)

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, root: Path) -> Config:
        """Create Config from a parsed `canopy.json` mapping."""
        project: StrDict = get_table(data, "project") or {}
        build: StrDict = get_table(data, "build") or {}
        components: StrDict = get_table(data, "components") or {}
        styles: StrDict = get_table(data, "styles") or {}

        pages: StrDict = get_table(build, "additional_pages") or {}

        return cls(
            root=root,
            project=ProjectConfig(
                name=get_str(project, "name") or root.name,
                version=get_str(project, "version"),
                description=get_str(project, "description"),
                homepage=get_str(project, "homepage"),
                repository=get_str(project, "repository"),
                readme_path=get_str(project, "readme_path") or "README.md",
                license=get_str(project, "license"),
            ),
            build=BuildConfig(
                dist_dir=get_str(build, "dist_dir") or "public",
                static_dir=get_str(build, "static_dir") or "static",
                path_prefix=get_str(build, "path_prefix"),
                additional_pages=tuple(
                    (title, value.strip())
                    for title, value in pages.items()
                    if isinstance(value, str) and value.strip()
                ),
                http_timeout=get_number(build, "http_timeout") or DEFAULT_HTTP_TIMEOUT,
            ),
            components=_parse_components(components),
            styles=parse_styles(styles),
        )


def _component_table(components: Mapping[str, object], key: str) -> StrDict | None:
    """Read a component that may be given as `true`, `false` or a table.

    Returns None when the component is disabled or absent.
    """
    value = components.get(key)
    if value is True:
        return {}
    table = as_str_dict(value)
    if table is None:
        return None
    if get_bool(table, "enabled") is False:
        return None
    return table


def _parse_components(components: Mapping[str, object]) -> ComponentsConfig:
    artifacts = _component_table(components, "artifacts")
    changelog = _component_table(components, "changelog")
    funding = _component_table(components, "funding")
    mdbook = _component_table(components, "mdbook")

    source: ReleasesSourceKind = "hosted" if get_str(components, "source") == "hosted" else "github"

    return ComponentsConfig(
        artifacts=ArtifactsConfig() if artifacts is not None else None,
        changelog=(
            ChangelogConfig(
                rss_feed=get_bool(changelog, "rss_feed") is not False,
                path=get_str(changelog, "path") or "CHANGELOG.md",
            )
            if changelog is not None
            else None
        ),
        funding=(
            FundingConfig(
                yml_path=get_str(funding, "yml_path"),
                md_path=get_str(funding, "md_path"),
                preferred_funding=get_str(funding, "preferred_funding"),
            )
            if funding is not None
            else None
        ),
        mdbook=MdBookConfig(path=get_str(mdbook, "path") or "docs") if mdbook is not None else None,
        source=source,
        hosted_url=(get_str(components, "hosted_url") or DEFAULT_HOSTED_URL).rstrip("/"),
    )


def parse_styles(styles: Mapping[str, object]) -> StylesConfig:
    return StylesConfig(
        theme=get_str(styles, "theme") or "light",
        favicon=get_str(styles, "favicon"),
        additional_css=tuple(get_str_list(styles, "additional_css")),
    )


def read_json_object(path: Path) -> Result[StrDict, ConfigError]:
    """Read a JSON file whose root must be an object."""
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a JSON object", path=path))
    return Ok(data)


def load_config(root: Path) -> Result[Config, ConfigError]:
    """Load the project config found in `root`.

    A missing `canopy.json` is not an error: the project is built with
    defaults and named after its directory.

    Args:
        root: Project directory.

    Returns:
        Ok(Config) on success, Err(ConfigError) if the file exists but is
        unreadable or malformed.
    """
    root = root.resolve()
    path = root / CONFIG_FILE
    if not path.exists():
        return Ok(Config(root=root, project=ProjectConfig(name=root.name)))

    result = read_json_object(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value, root=root))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
