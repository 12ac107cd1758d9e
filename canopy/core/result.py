"""Result type for explicit error handling.

Fallible steps of a site build (fetching releases, loading config, writing
pages) return a Result instead of raising, so the orchestrator can decide per
step whether a failure is fatal or only worth a warning.

Usage:
    def load_readme(path: Path) -> Result[str, SiteError]:
        if not path.exists():
            return Err(SiteError(ErrorKind.CONFIG_INVALID, f"missing {path}"))
        return Ok(path.read_text(encoding="utf-8"))

    match load_readme(path):
        case Ok(text):
            render(text)
        case Err(error):
            print_site_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result holding `value`."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result holding `error`."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
