"""Static asset placement: stylesheet, favicon, static dir, extra CSS."""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from canopy.core.errors import ErrorKind, Severity, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.output.errors import print_site_error
from canopy.platform.files import atomic_write_text, copy_tree

if TYPE_CHECKING:
    from canopy.core.config import Config
    from canopy.output.console import ConsoleProtocol

__all__ = [
    "BUNDLED_CSS",
    "CSS_ENV_VAR",
    "place_css",
    "place_favicon",
    "copy_static",
    "stylesheet_source",
    "write_additional_css",
]

CSS_ENV_VAR = "CANOPY_CSS"
BUNDLED_CSS = Path(__file__).parent / "static" / "canopy.css"
CSS_FILENAME = "canopy.css"
CUSTOM_CSS_FILENAME = "custom.css"


def stylesheet_source(
    console: ConsoleProtocol, environ: Mapping[str, str] | None = None
) -> Path:
    """The stylesheet to ship: `$CANOPY_CSS` if it names a file, else the bundled one.

    An invalid override is a configuration warning, not a build failure.
    """
    env = os.environ if environ is None else environ
    override = env.get(CSS_ENV_VAR)
    if not override:
        return BUNDLED_CSS
    path = Path(override).expanduser()
    if path.is_file():
        return path
    print_site_error(
        SiteError(
            kind=ErrorKind.CONFIG_INVALID,
            message=f"Found an invalid value, `{override}`, assigned to {CSS_ENV_VAR} environment variable.",
            severity=Severity.WARNING,
            hint="Please make sure you give a valid path pointing to a css file.",
        ),
        console,
    )
    return BUNDLED_CSS


def _copy_error(what: str, error: OSError) -> SiteError:
    return SiteError(
        kind=ErrorKind.STRUCTURAL_IO,
        message=f"Failed to place {what}",
        cause=str(error),
    )


def place_css(dist: Path, console: ConsoleProtocol) -> Result[Path, SiteError]:
    dest = dist / CSS_FILENAME
    try:
        dist.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(stylesheet_source(console), dest)
    except OSError as e:
        return Err(_copy_error("the stylesheet", e))
    return Ok(dest)


def place_favicon(favicon: str | None, root: Path, dist: Path) -> Result[Path | None, SiteError]:
    if favicon is None:
        return Ok(None)
    src = Path(favicon).expanduser()
    src = src if src.is_absolute() else root / src
    try:
        dest = dist / src.name
        shutil.copyfile(src, dest)
    except OSError as e:
        return Err(_copy_error(f"favicon {src}", e))
    return Ok(dest)


def copy_static(config: Config, dist: Path) -> Result[bool, SiteError]:
    """Copy the project's static directory into the output, if it has one."""
    src = config.resolve(config.build.static_dir)
    if not src.is_dir():
        return Ok(False)
    try:
        copy_tree(src, dist / src.name)
    except (OSError, shutil.Error) as e:
        return Err(_copy_error(f"static directory {src}", e))
    return Ok(True)


def write_additional_css(
    paths: tuple[str, ...], root: Path, dist: Path
) -> Result[Path | None, SiteError]:
    """Concatenate user stylesheets into `custom.css`."""
    if not paths:
        return Ok(None)
    chunks: list[str] = []
    for entry in paths:
        path = Path(entry).expanduser()
        path = path if path.is_absolute() else root / path
        try:
            chunks.append(f"/* {entry} */\n{path.read_text(encoding='utf-8')}")
        except (OSError, UnicodeDecodeError) as e:
            return Err(
                SiteError(
                    kind=ErrorKind.CONFIG_INVALID,
                    message=f"failed to read additional css at {path}",
                    cause=str(e),
                )
            )
    dest = dist / CUSTOM_CSS_FILENAME
    try:
        atomic_write_text(dest, "\n".join(chunks))
    except OSError as e:
        return Err(_copy_error(CUSTOM_CSS_FILENAME, e))
    return Ok(dest)
