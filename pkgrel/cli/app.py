from __future__ import annotations

from pathlib import Path

import typer

from pkgrel import __version__
from pkgrel.cli.context import build_context, exit_with
from pkgrel.core.errors import ErrorCode
from pkgrel.core.result import Err
from pkgrel.services.release.errors import ReleaseErrorKind
from pkgrel.services.release.model import RELEASE_TASKS
from pkgrel.services.release.pull_request import create_pull_request
from pkgrel.services.release.upload import upload_to_release


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Release helper: changelog pull requests and GitHub release uploads.",
)


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind == "tool_missing":
        return ErrorCode.ENV_ERROR
    if kind == "gh_failed":
        return ErrorCode.NETWORK_ERROR
    if kind in {"changelog_missing", "changelog_invalid", "git_failed"}:
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def main(
    task: str = typer.Option(
        ...,
        "--task",
        help=f"Task to run: {'|'.join(RELEASE_TASKS)}",
    ),
    next_version: str | None = typer.Option(
        None, "--next-version", help="Version to release (skips inference)"
    ),
    package_name: str | None = typer.Option(
        None, "--package-name", help="Package name (default: pkgrel.toml or directory name)"
    ),
    current_branch: str | None = typer.Option(
        None, "--current-branch", help="Branch to work on (default: checked-out branch)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Print debug output"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print git/gh commands that change state instead of running them"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run one release task in the current repository."""
    del version
    if task not in RELEASE_TASKS:
        exit_with(
            f"unknown --task '{task}' (expected {' or '.join(RELEASE_TASKS)})",
            code=ErrorCode.USER_ERROR,
        )

    ctx = build_context(
        root=Path.cwd(),
        package_name=package_name,
        next_version=next_version,
        current_branch=current_branch,
        verbose=verbose,
        dry_run=dry_run,
    )

    if task == "create-pullrequest":
        result = create_pull_request(ctx)
    else:
        result = upload_to_release(ctx)

    if isinstance(result, Err):
        exit_with(result.error.pretty(), code=release_error_code(result.error.kind))


def run() -> None:
    app()
