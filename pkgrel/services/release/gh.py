from __future__ import annotations

import shutil
from pathlib import Path

from pkgrel.core.result import Err, Ok, Result
from pkgrel.core.structured import get_str, get_table
from pkgrel.output.console import Style
from pkgrel.platform.http import HttpClient
from pkgrel.platform.process import run as run_process
from pkgrel.services.release.config import GITHUB_API_URL, REQUIRED_COMMANDS
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.errors import ReleaseError
from pkgrel.services.release.model import PullRequestRecord
from pkgrel.services.release.timeouts import GH_TIMEOUT_SECONDS, GH_UPLOAD_TIMEOUT_SECONDS


def ensure_tools_available() -> Result[None, ReleaseError]:
    missing = [name for name in REQUIRED_COMMANDS if shutil.which(name) is None]
    if missing:
        return Err(
            ReleaseError(
                kind="tool_missing",
                message=f"{', '.join(missing)}: missing",
                hint="Install git and the GitHub CLI (https://cli.github.com/)",
            )
        )
    return Ok(None)


def pull_request_url(repo_slug: str, number: int) -> str:
    return f"{GITHUB_API_URL}/repos/{repo_slug}/pulls/{number}?state=closed"


def fetch_pull_request(
    *, http: HttpClient, repo_slug: str, number: int
) -> Result[PullRequestRecord, str]:
    """Fetch one pull request; Err carries a printable reason."""
    result = http.get_json(pull_request_url(repo_slug, number))
    if isinstance(result, Err):
        return Err(str(result.error))

    data = result.value
    title = get_str(data, "title")
    user = get_table(data, "user")
    login = get_str(user, "login") if user is not None else None
    url = get_str(data, "html_url")
    if title is None or login is None or url is None:
        return Err(f"unexpected payload for PR #{number}")

    return Ok(PullRequestRecord(number=number, title=title, author=login, url=url))


def _gh(
    ctx: ReleaseContext,
    args: list[str],
    *,
    timeout: float = GH_TIMEOUT_SECONDS,
) -> Result[str, ReleaseError]:
    """Run a mutating gh command; printed only in dry-run mode."""
    cmd = ["gh", *args]
    if ctx.settings.repo_slug:
        cmd += ["--repo", ctx.settings.repo_slug]

    prefix = "(dry-run) " if ctx.dry_run else ""
    ctx.console.print(f"{prefix}gh {' '.join(args[:3])}", Style.DIM)
    if ctx.dry_run:
        return Ok("")

    result = run_process(cmd, cwd=ctx.settings.root, timeout=timeout)
    if isinstance(result, Err):
        e = result.error
        return Err(
            ReleaseError(
                kind="gh_failed",
                message=f"gh {' '.join(args[:2])} failed (exit {e.returncode})",
                hint=e.stderr.strip() or None,
            )
        )
    return Ok(result.value)


def create_prerelease(ctx: ReleaseContext, *, tag: str) -> Result[None, ReleaseError]:
    result = _gh(ctx, ["release", "create", tag, "--prerelease", "--title", tag, "--notes", ""])
    return result.map(lambda _: None)


def upload_asset(
    ctx: ReleaseContext, *, tag: str, path: Path, name: str
) -> Result[None, ReleaseError]:
    result = _gh(
        ctx,
        ["release", "upload", tag, f"{path}#{name}", "--clobber"],
        timeout=GH_UPLOAD_TIMEOUT_SECONDS,
    )
    return result.map(lambda _: None)


def edit_release_notes(ctx: ReleaseContext, *, tag: str, notes: str) -> Result[None, ReleaseError]:
    return _gh(ctx, ["release", "edit", tag, "--notes", notes]).map(lambda _: None)


def open_pull_request(
    ctx: ReleaseContext,
    *,
    base: str,
    head: str,
    title: str,
    body: str,
) -> Result[str, ReleaseError]:
    """Open a pull request; Ok carries the PR URL printed by gh."""
    result = _gh(
        ctx,
        ["pr", "create", "--base", base, "--head", head, "--title", title, "--body", body],
    )
    return result.map(lambda out: out.strip())
