"""Tests for canopy.output.errors module."""

from canopy.core.errors import ErrorKind, Severity, SiteError
from canopy.output.console import MockConsole, Style
from canopy.output.errors import print_site_error


class TestPrintSiteError:
    def test_fatal_error_with_chain_and_hint(self) -> None:
        console = MockConsole()
        inner = SiteError(kind=ErrorKind.SOURCE_UNREACHABLE, message="fetch failed", cause="HTTP 503")
        error = SiteError(
            kind=ErrorKind.COMPONENT_FAILED,
            message="Skipping the changelog component",
            hint="try again later",
            cause=inner,
        )

        print_site_error(error, console)

        assert console.messages == [
            "error: Skipping the changelog component",
            "  caused by: fetch failed",
            "  caused by: HTTP 503",
            "  hint: try again later",
        ]
        assert console.count(Style.DIM) == 3

    def test_warning_is_exactly_one_warning_line(self) -> None:
        """Causes and hints never count as extra warnings."""
        console = MockConsole()
        error = SiteError(
            kind=ErrorKind.SOURCE_UNREACHABLE,
            message="Failed fetching releases",
            severity=Severity.WARNING,
            hint="set a token",
            cause="HTTP 403",
        )

        print_site_error(error, console)

        assert console.count(Style.WARNING) == 1
        assert not console.has_error()
