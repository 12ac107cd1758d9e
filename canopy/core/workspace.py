"""Workspace descriptor loading and member discovery.

A workspace root is identified by a `canopy-workspace.json` file:

    {
      "workspace": {
        "name": "my tools",
        "dist_dir": "public",
        "members": [{"slug": "cli", "path": "./cli"}]
      },
      "styles": {"theme": "dark"}
    }

Each member is an ordinary project directory with its own (optional)
`canopy.json`. Member configs are resolved against the member directory and
their output is redirected under `<workspace dist>/<slug>`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path

from .config import Config, ConfigError, StylesConfig, load_config, parse_styles, read_json_object
from .result import Err, Ok, Result
from .structured import as_str_dict, get_list, get_str, get_table

__all__ = [
    "WORKSPACE_FILE",
    "MemberSpec",
    "WorkspaceConfig",
    "WorkspaceMember",
    "find_workspace",
    "load_workspace",
    "resolve_members",
]

WORKSPACE_FILE = "canopy-workspace.json"

_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


@dataclass(frozen=True, slots=True)
class MemberSpec:
    """A member entry as written in the workspace descriptor."""

    slug: str
    path: str


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    root: Path
    name: str
    members: tuple[MemberSpec, ...]
    dist_dir: str = "public"
    styles: StylesConfig = field(default_factory=StylesConfig)

    @property
    def dist_path(self) -> Path:
        p = Path(self.dist_dir).expanduser()
        return p if p.is_absolute() else self.root / p


@dataclass(frozen=True, slots=True)
class WorkspaceMember:
    """One member project, fully resolved.

    Attributes:
        slug: Unique path segment of the member on the workspace index.
        path: Absolute member directory.
        config: The member's config, rooted at `path`.
    """

    slug: str
    path: Path
    config: Config


def find_workspace(root: Path) -> Path | None:
    """Return the workspace descriptor in `root`, if there is one."""
    path = root / WORKSPACE_FILE
    return path if path.is_file() else None


def load_workspace(path: Path) -> Result[WorkspaceConfig, ConfigError]:
    result = read_json_object(path)
    if isinstance(result, Err):
        return result

    data = result.value
    workspace = get_table(data, "workspace") or {}
    root = path.parent.resolve()

    members: list[MemberSpec] = []
    for i, entry in enumerate(get_list(workspace, "members") or []):
        table = as_str_dict(entry)
        member_path = get_str(table, "path") if table is not None else None
        if table is None or member_path is None:
            return Err(ConfigError(f"Workspace member #{i + 1} needs a `path`", path=path))
        slug = get_str(table, "slug") or Path(member_path).name
        if not _SLUG_RE.match(slug):
            return Err(ConfigError(f"Invalid workspace member slug: {slug!r}", path=path))
        members.append(MemberSpec(slug=slug, path=member_path))

    slugs = [m.slug for m in members]
    duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
    if duplicates:
        return Err(
            ConfigError(f"Duplicate workspace member slug(s): {', '.join(duplicates)}", path=path)
        )

    return Ok(
        WorkspaceConfig(
            root=root,
            name=get_str(workspace, "name") or root.name,
            members=tuple(members),
            dist_dir=get_str(workspace, "dist_dir") or "public",
            styles=parse_styles(get_table(data, "styles") or {}),
        )
    )


def resolve_members(workspace: WorkspaceConfig) -> Result[list[WorkspaceMember], ConfigError]:
    """Load every member's config relative to the workspace root.

    Members that do not set their own styles inherit the workspace's.
    """
    out: list[WorkspaceMember] = []
    for spec in workspace.members:
        member_root = (workspace.root / spec.path).resolve()
        if not member_root.is_dir():
            return Err(
                ConfigError(
                    f"Specified path `{spec.path}` was not found on your filesystem!",
                    path=member_root,
                )
            )

        loaded = load_config(member_root)
        if isinstance(loaded, Err):
            return loaded
        config = loaded.value

        config = replace(
            config,
            build=replace(
                config.build,
                dist_dir=str(workspace.dist_path / spec.slug),
                path_prefix=spec.slug,
            ),
            styles=workspace.styles if config.styles == StylesConfig() else config.styles,
        )
        out.append(WorkspaceMember(slug=spec.slug, path=member_root, config=config))
    return Ok(out)
