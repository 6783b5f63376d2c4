"""Helpers for untyped payloads (GitHub JSON, pkgrel.toml).

They validate at runtime and narrow statically, so callers never index into
``Any``.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty, stripped string value.

    Returns None if missing, not a str, or blank.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested object (e.g. ``user`` in a pull request payload)."""
    return as_str_dict(table.get(key))
