from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ReleaseTask = Literal["create-pullrequest", "upload-to-github-release"]
RELEASE_TASKS: tuple[ReleaseTask, ...] = ("create-pullrequest", "upload-to-github-release")


@dataclass(frozen=True, slots=True)
class PullRequestRecord:
    """A merged pull request as listed in changelogs."""

    number: int
    title: str
    author: str
    url: str

    @property
    def is_nit(self) -> bool:
        return "nit" in self.title.lower()

