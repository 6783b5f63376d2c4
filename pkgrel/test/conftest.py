from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

import pytest

from pkgrel.core.config import Settings
from pkgrel.git.repository import Repository
from pkgrel.output.console import MockConsole
from pkgrel.platform.http import MockHttpClient
from pkgrel.services.release.context import ReleaseContext
from pkgrel.test.fakes import FakeCommands, MakeContext


@pytest.fixture
def commands(monkeypatch: pytest.MonkeyPatch) -> FakeCommands:
    fake = FakeCommands()
    monkeypatch.setattr("pkgrel.git.repository.run_process", fake)
    monkeypatch.setattr("pkgrel.services.release.gh.run_process", fake)
    return fake


@pytest.fixture
def make_ctx(tmp_path: Path) -> MakeContext:
    """Build a ReleaseContext on tmp_path; keyword args override Settings."""

    def _make(**overrides: Any) -> ReleaseContext:
        console = MockConsole()
        settings = replace(
            Settings(root=tmp_path, package_name="mytool", repo_slug="example-org/mytool"),
            **overrides,
        )
        return ReleaseContext(
            settings=settings,
            repo=Repository(tmp_path, console=console, dry_run=settings.dry_run),
            http=MockHttpClient(),
            console=console,
        )

    return _make
