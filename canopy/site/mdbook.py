"""Documentation book component, built by the external `mdbook` tool.

Runs after pages are written, straight into `<dist>/book`.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.platform.process import run

if TYPE_CHECKING:
    from canopy.core.config import Config, MdBookConfig

__all__ = ["BOOK_DIR", "MDBOOK_TIMEOUT_SECONDS", "build_mdbook"]

BOOK_DIR = "book"
MDBOOK_TIMEOUT_SECONDS = 300.0


def build_mdbook(book_cfg: MdBookConfig, config: Config, dist: Path) -> Result[Path, SiteError]:
    """Build the book; returns its output directory."""
    src = config.resolve(book_cfg.path).resolve()
    if not (src / "book.toml").is_file():
        return Err(
            SiteError(
                kind=ErrorKind.CONFIG_INVALID,
                message=f"Couldn't find your book.toml in {src}",
                hint="You can set path in your components.mdbook config",
            )
        )

    dest = (dist / BOOK_DIR).resolve()
    if dest.is_relative_to(src):
        return Err(
            SiteError(
                kind=ErrorKind.CONFIG_INVALID,
                message=(
                    f"Can't build mdbook because book output directory {dest} "
                    f"is under book source directory {src}"
                ),
                hint="Move your dist_dir outside of the book source directory.",
            )
        )

    if shutil.which("mdbook") is None:
        return Err(
            SiteError(
                kind=ErrorKind.COMPONENT_FAILED,
                message="mdbook: missing",
                hint="Install mdbook: https://rust-lang.github.io/mdBook/",
            )
        )

    result = run(
        ["mdbook", "build", str(src), "--dest-dir", str(dest)],
        cwd=src,
        timeout=MDBOOK_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(
            SiteError(
                kind=ErrorKind.COMPONENT_FAILED,
                message=f"Couldn't build your mdbook at {src}",
                cause=result.error.stderr.strip() or str(result.error),
            )
        )
    return Ok(dest)
