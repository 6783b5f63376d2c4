from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import NoReturn

import typer

from pkgrel.core.config import CONFIG_FILENAME, build_settings, debug_enabled, load_config
from pkgrel.core.errors import ErrorCode
from pkgrel.core.result import Err
from pkgrel.git.repository import Repository
from pkgrel.output.console import ConsoleProtocol, RichConsole
from pkgrel.platform.http import RealHttpClient
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.gh import ensure_tools_available
from pkgrel.services.release.timeouts import HTTP_TIMEOUT_SECONDS


def exit_with(message: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=int(code))


def build_context(
    *,
    root: Path,
    package_name: str | None,
    next_version: str | None,
    current_branch: str | None,
    verbose: bool,
    dry_run: bool,
    env: Mapping[str, str] | None = None,
    console: ConsoleProtocol | None = None,
) -> ReleaseContext:
    """Resolve settings once and wire the task collaborators."""
    environ = os.environ if env is None else env

    tools = ensure_tools_available()
    if isinstance(tools, Err):
        exit_with(tools.error.pretty(), code=ErrorCode.ENV_ERROR)

    file_config = load_config(root / CONFIG_FILENAME)
    if isinstance(file_config, Err):
        exit_with(file_config.error.message, code=ErrorCode.USER_ERROR)

    if console is None:
        console = RichConsole(verbose=verbose or debug_enabled(environ))

    repo = Repository(root, console=console, dry_run=dry_run)
    settings = build_settings(
        root=root,
        file_config=file_config.value,
        env=environ,
        origin_url=repo.config_get("remote.origin.url"),
        package_name=package_name,
        next_version=next_version,
        current_branch=current_branch,
        verbose=verbose,
        dry_run=dry_run,
    )
    console.debug(
        f"package={settings.package_name} repo={settings.repo_slug} "
        f"main={settings.main_branch} dry_run={settings.dry_run}"
    )

    return ReleaseContext(
        settings=settings,
        repo=repo,
        http=RealHttpClient(timeout=HTTP_TIMEOUT_SECONDS, token=settings.token),
        console=console,
    )
