"""Extract a version's section from a local CHANGELOG.md."""

from __future__ import annotations

import re

__all__ = ["find_version_section"]

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")


def _heading_mentions(title: str, version: str) -> bool:
    v = version.lstrip("v")
    # "1.2.0" must not match "11.2.0" or "1.2.01"
    pattern = rf"(?<![\w.])v?{re.escape(v)}(?![\w.]*\d)"
    return re.search(pattern, title, flags=re.IGNORECASE) is not None


def find_version_section(text: str, version: str) -> str | None:
    """Return the body under the first heading that names `version`.

    The section ends at the next heading of the same or higher level.
    `version` may also be a plain word such as "Unreleased".

    Example:
        >>> find_version_section("# 1.0.0\\nfirst\\n# 0.9.0\\nold", "v1.0.0")
        'first'
    """
    lines = text.splitlines()
    start: int | None = None
    level = 0
    for i, line in enumerate(lines):
        match = _HEADING_RE.match(line)
        if match is None:
            continue
        depth = len(match.group(1))
        if start is not None and depth <= level:
            body = "\n".join(lines[start:i]).strip()
            return body or None
        if start is None and _heading_mentions(match.group(2), version):
            start = i + 1
            level = depth

    if start is None:
        return None
    body = "\n".join(lines[start:]).strip()
    return body or None
