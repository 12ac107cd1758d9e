"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from canopy.core.errors import ErrorKind, SiteError, exit_code_for
from canopy.output.errors import print_site_error

if TYPE_CHECKING:
    from canopy.core.config import ConfigError
    from canopy.output.console import ConsoleProtocol


def config_site_error(error: ConfigError) -> SiteError:
    return SiteError(
        kind=ErrorKind.CONFIG_INVALID,
        message=error.message,
        hint=f"Check {error.path}" if error.path else None,
    )


def exit_with_error(error: SiteError, console: ConsoleProtocol) -> NoReturn:
    """Print a fatal error with its causes and exit with its code."""
    print_site_error(error, console)
    raise typer.Exit(code=int(exit_code_for(error)))
