"""Error presentation.

One place decides how a `SiteError` looks: the headline at its severity,
then the hint and each cause dimmed underneath, so a warning carries enough
context (tag, path, repository) to act on without a verbose rerun.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from canopy.core.errors import SiteError
from canopy.output.console import Style

if TYPE_CHECKING:
    from canopy.output.console import ConsoleProtocol

__all__ = ["print_site_error"]


def print_site_error(error: SiteError, console: ConsoleProtocol) -> None:
    """Print an error with its hint and cause chain."""
    if error.is_fatal:
        console.error(error.message)
    else:
        console.warning(error.message)
    for cause in error.chain():
        console.print(f"  caused by: {cause}", Style.DIM)
    if error.hint:
        console.print(f"  hint: {error.hint}", Style.DIM)
