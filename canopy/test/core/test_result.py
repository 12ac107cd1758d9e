"""Tests for canopy.core.result module."""

import pytest

from canopy.core.result import Err, Ok, Result


class TestOk:
    """Tests for Ok type."""

    def test_ok_holds_value(self) -> None:
        result = Ok(42)
        assert result.value == 42
        assert isinstance(result, Ok)
        assert not isinstance(result, Err)

    def test_ok_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]

    def test_ok_repr(self) -> None:
        assert repr(Ok("a")) == "Ok('a')"

    def test_equality_by_value(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)


class TestErr:
    """Tests for Err type."""

    def test_err_holds_error(self) -> None:
        result = Err("boom")
        assert result.error == "boom"
        assert isinstance(result, Err)

    def test_err_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


class TestMatching:
    def test_pattern_matching(self) -> None:
        """Results destructure with match."""
        result: Result[int, str] = Err("nope")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "nope"
