from __future__ import annotations

import pytest

from pkgrel.core.result import Err, Ok
from pkgrel.services.release import gh as gh_mod


def test_ensure_tools_available_ok(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gh_mod.shutil, "which", lambda name: f"/usr/bin/{name}")

    assert gh_mod.ensure_tools_available() == Ok(None)


def test_ensure_tools_available_lists_every_missing_tool(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gh_mod.shutil, "which", lambda name: None)

    result = gh_mod.ensure_tools_available()

    assert isinstance(result, Err)
    assert result.error.kind == "tool_missing"
    assert result.error.message == "git, gh: missing"


def test_ensure_tools_available_only_gh_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        gh_mod.shutil, "which", lambda name: None if name == "gh" else f"/usr/bin/{name}"
    )

    result = gh_mod.ensure_tools_available()

    assert isinstance(result, Err)
    assert result.error.message == "gh: missing"
    assert "cli.github.com" in (result.error.hint or "")
