from __future__ import annotations

from dataclasses import dataclass

from pkgrel.core.config import Settings
from pkgrel.git.repository import Repository
from pkgrel.output.console import ConsoleProtocol
from pkgrel.platform.http import HttpClient


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Collaborators of a release task, built once per process."""

    settings: Settings
    repo: Repository
    http: HttpClient
    console: ConsoleProtocol

    @property
    def dry_run(self) -> bool:
        return self.settings.dry_run
