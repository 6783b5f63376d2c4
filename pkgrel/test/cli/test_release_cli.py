from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from pkgrel import __version__
from pkgrel.cli import app as app_mod
from pkgrel.cli.app import app, release_error_code
from pkgrel.core.errors import ErrorCode
from pkgrel.core.result import Err, Ok
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.errors import ReleaseError

runner = CliRunner()


def _fake_context(**kwargs: object) -> object:
    return kwargs


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_flags() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for flag in ("--task", "--next-version", "--package-name", "--current-branch", "--dry-run"):
        assert flag in result.output


def test_unknown_task() -> None:
    result = runner.invoke(app, ["--task", "deploy"])
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "unknown --task" in result.output


def test_dispatches_pull_request_task(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_create(ctx: ReleaseContext) -> Ok[None]:
        seen["ctx"] = ctx
        return Ok(None)

    monkeypatch.setattr(app_mod, "build_context", _fake_context)
    monkeypatch.setattr(app_mod, "create_pull_request", fake_create)

    result = runner.invoke(
        app,
        ["--task", "create-pullrequest", "--next-version", "1.2.3", "--dry-run"],
    )

    assert result.exit_code == 0
    ctx = seen["ctx"]
    assert isinstance(ctx, dict)
    assert ctx["next_version"] == "1.2.3"
    assert ctx["dry_run"] is True
    assert ctx["root"] == Path.cwd()


def test_fatal_error_sets_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_upload(ctx: object) -> Err[ReleaseError]:
        del ctx
        return Err(ReleaseError(kind="gh_failed", message="upload failed", hint="HTTP 422"))

    monkeypatch.setattr(app_mod, "build_context", _fake_context)
    monkeypatch.setattr(app_mod, "upload_to_release", fake_upload)

    result = runner.invoke(app, ["--task", "upload-to-github-release"])

    assert result.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert "error: upload failed (hint: HTTP 422)" in result.output


def test_release_error_code() -> None:
    assert release_error_code("tool_missing") == ErrorCode.ENV_ERROR
    assert release_error_code("changelog_missing") == ErrorCode.IO_ERROR
    assert release_error_code("git_failed") == ErrorCode.IO_ERROR
    assert release_error_code("gh_failed") == ErrorCode.NETWORK_ERROR
    assert release_error_code("invalid_input") == ErrorCode.USER_ERROR
