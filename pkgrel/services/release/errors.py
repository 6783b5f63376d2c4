from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ReleaseErrorKind = Literal[
    "tool_missing",
    "invalid_input",
    "changelog_missing",
    "changelog_invalid",
    "git_failed",
    "gh_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Fatal release error payload, rendered by the CLI."""

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
