"""Tests for canopy.output.console module."""

from canopy.output.console import ConsoleProtocol, MockConsole, OutputRecord, Style


class TestMockConsole:
    def test_records_styles_and_prefixes(self) -> None:
        console = MockConsole()

        console.info("fetching")
        console.warning("careful")
        console.error("broken")
        console.success("done")
        console.print("plain")

        assert console.outputs == [
            OutputRecord("info: fetching", Style.INFO),
            OutputRecord("warning: careful", Style.WARNING),
            OutputRecord("error: broken", Style.ERROR),
            OutputRecord("✓ done", Style.SUCCESS),
            OutputRecord("plain", Style.DEFAULT),
        ]

    def test_queries(self) -> None:
        console = MockConsole()
        console.warning("first")
        console.warning("second")
        console.header("Building")

        assert console.warnings() == ["warning: first", "warning: second"]
        assert console.count(Style.WARNING) == 2
        assert not console.has_error()
        assert len(console.find("sec")) == 1
        assert "Building" in console.text

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("ok", Style.DIM)
