"""Unit tests for the lightweight Result utilities."""

from __future__ import annotations

import pytest

from planboard.core.result import Err, Ok, Result, err, ok


def _half(x: int) -> Result[int, str]:
    return ok(x // 2) if x % 2 == 0 else err(f"{x} is odd")


def test_ok_flat_map_chains() -> None:
    """`Ok` should flat_map and keep values typed."""
    r: Result[int, str] = ok(20)
    r2 = r.flat_map(_half).flat_map(_half)
    assert r2.is_ok() and r2.unwrap() == 5


def test_flat_map_stops_at_first_error() -> None:
    r = ok(6).flat_map(_half).flat_map(_half).flat_map(_half)
    assert r.is_err()
    assert r.unwrap_err() == "3 is odd"

    e: Result[int, str] = err("boom")
    assert isinstance(e.flat_map(_half), Err)


def test_get_or_and_unwrap_failures() -> None:
    assert ok("x").get_or("fallback") == "x"
    assert err("e").get_or("fallback") == "fallback"
    with pytest.raises(RuntimeError):
        err("e").unwrap()
    with pytest.raises(RuntimeError):
        Ok(1).unwrap_err()
