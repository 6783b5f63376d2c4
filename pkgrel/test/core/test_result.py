"""Tests for pkgrel.core.result."""

from __future__ import annotations

from pkgrel.core.result import Err, Ok, Result


def test_map_transforms_ok_value() -> None:
    assert Ok(" v1.2.0\n").map(str.strip) == Ok("v1.2.0")


def test_map_leaves_err_untouched() -> None:
    result: Err[str] = Err("boom")
    assert result.map(str.strip) is result


def test_pattern_matching() -> None:
    def describe(result: Result[int, str]) -> str:
        match result:
            case Ok(value):
                return f"ok {value}"
            case Err(error):
                return f"err {error}"

    assert describe(Ok(3)) == "ok 3"
    assert describe(Err("boom")) == "err boom"
    assert repr(Err("boom")) == "Err('boom')"
