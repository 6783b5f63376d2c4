from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass


_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
_TAG_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?$")


@dataclass(frozen=True, slots=True, order=True)
class Version:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def to_tag(self) -> str:
        return f"v{self}"


def parse_version(text: str) -> Version | None:
    """Parse ``M.N.P``; anything else (including a ``v`` prefix) is None."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return Version(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def normalize_tag(tag: str) -> Version | None:
    """Parse a tag body with 2 or 3 components, optionally ``v``-prefixed.

    ``1.2`` normalizes to 1.2.0.
    """
    m = _TAG_RE.match(tag.strip())
    if m is None:
        return None
    patch = m.group(3)
    return Version(int(m.group(1)), int(m.group(2)), int(patch) if patch is not None else 0)


def last_release(tags: Iterable[str]) -> Version | None:
    """Highest ``v``-prefixed release tag; None when no tag qualifies."""
    versions = [
        v for tag in tags if tag.startswith("v") and (v := normalize_tag(tag)) is not None
    ]
    if not versions:
        return None
    return sorted(versions, reverse=True)[0]
