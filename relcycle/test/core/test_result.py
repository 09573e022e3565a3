"""Tests for relcycle.core.result."""

from __future__ import annotations

import pytest

from relcycle.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err("odd")
    return Ok(n // 2)


def test_pattern_matching() -> None:
    match _half(10):
        case Ok(value):
            assert value == 5
        case Err(_):
            pytest.fail("expected Ok")


def test_err_carries_error() -> None:
    result = _half(3)
    assert isinstance(result, Err)
    assert result.error == "odd"


def test_equality_and_repr() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    assert repr(Ok("1.0.0")) == "Ok('1.0.0')"
    assert repr(Err("boom")) == "Err('boom')"


def test_frozen() -> None:
    with pytest.raises(AttributeError):
        Ok(1).value = 2  # type: ignore[misc]
