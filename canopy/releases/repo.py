"""Repository identity parsed from a configured repository URL."""

from __future__ import annotations

import re
from dataclasses import dataclass

from canopy.core.errors import ErrorKind, SiteError
from canopy.core.result import Err, Ok, Result

__all__ = ["GithubRepo"]

# https://github.com/owner/name(.git)(/...), git@github.com:owner/name(.git)
_HTTPS_RE = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/([^/\s]+)/([^/\s#?]+)")
_SSH_RE = re.compile(r"^(?:ssh://)?git@github\.com[:/]([^/\s]+)/([^/\s]+)$")


@dataclass(frozen=True, slots=True)
class GithubRepo:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.name}"

    @classmethod
    def from_url(cls, url: str) -> Result[GithubRepo, SiteError]:
        """Parse the owner and name out of a git-usable GitHub URL."""
        text = url.strip()
        match = _HTTPS_RE.match(text) or _SSH_RE.match(text)
        if match is None:
            return Err(
                SiteError(
                    kind=ErrorKind.CONFIG_INVALID,
                    message=f"Your repository URL {url} couldn't be parsed.",
                    hint="Only GitHub URLs you can also use with git are supported.",
                )
            )
        owner, name = match.group(1), match.group(2)
        if name.endswith(".git"):
            name = name[: -len(".git")]
        return Ok(cls(owner=owner, name=name))

    def __str__(self) -> str:
        return self.slug
