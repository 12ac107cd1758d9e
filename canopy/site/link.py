"""Site-relative links that honor the build's path prefix."""

from __future__ import annotations

__all__ = ["generate_link"]


def generate_link(prefix: str | None, path: str) -> str:
    """Join `path` under `prefix` as an absolute site link.

    Directory links keep their trailing slash:

        >>> generate_link("cli", "changelog/")
        '/cli/changelog/'
        >>> generate_link(None, "canopy.css")
        '/canopy.css'
    """
    parts = [p.strip("/") for p in (prefix or "", path) if p.strip("/")]
    link = "/" + "/".join(parts)
    if (not path or path.endswith("/")) and not link.endswith("/"):
        link += "/"
    return link
