"""Rendered pages and how they land on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result
from canopy.platform.files import atomic_write_text

__all__ = ["Page", "output_path", "write_pages"]


@dataclass(frozen=True, slots=True)
class Page:
    """One output file.

    Attributes:
        filename: Relative, slash-separated name such as `changelog/v1.0.html`.
        contents: Rendered text, written UTF-8 encoded.
    """

    filename: str
    contents: str


def output_path(dist: Path, filename: str) -> Path:
    """Where a page is written, applying pretty links.

    `name.html` becomes `name/index.html` so it is served as `/name/`.
    `index.html` and non-HTML files (`changelog.rss`, `artifacts.json`) keep
    their literal path.

    Raises:
        ValueError: If `filename` is absolute or escapes the output directory.
    """
    rel = PurePosixPath(filename)
    if rel.is_absolute() or ".." in rel.parts or not rel.parts:
        raise ValueError(f"page file name must be relative to the output directory: {filename!r}")
    if rel.suffix == ".html" and rel.name != "index.html":
        return dist.joinpath(*rel.parent.parts, rel.stem, "index.html")
    return dist.joinpath(*rel.parts)


def write_pages(pages: list[Page], dist: Path) -> Result[None, SiteError]:
    """Write every page under `dist`. The first failure is fatal."""
    for page in pages:
        try:
            path = output_path(dist, page.filename)
            atomic_write_text(path, page.contents)
        except (OSError, ValueError) as e:
            return Err(
                SiteError(
                    kind=ErrorKind.STRUCTURAL_IO,
                    message=f"Failed to write page {page.filename} to {dist}",
                    cause=str(e),
                )
            )
    return Ok(None)
