"""Markdown to HTML."""

from __future__ import annotations

from pathlib import Path

from markdown_it import MarkdownIt

from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result

__all__ = ["is_markdown", "read_markdown", "render_markdown"]

_md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])

_MARKDOWN_SUFFIXES = (".md", ".markdown")


def render_markdown(content: str | None) -> str:
    if not content:
        return ""
    return _md.render(content).strip()


def is_markdown(path: str | Path) -> bool:
    return Path(path).suffix.lower() in _MARKDOWN_SUFFIXES


def read_markdown(path: Path, *, filedesc: str = "markdown file") -> Result[str, SiteError]:
    """Read a markdown file and render it to HTML."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            SiteError(
                kind=ErrorKind.CONFIG_INVALID,
                message=f"failed to read {filedesc} at {path}",
                cause=str(e),
            )
        )
    return Ok(render_markdown(text))
