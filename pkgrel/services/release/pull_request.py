from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from pkgrel.core.result import Err, Ok, Result
from pkgrel.git.repository import GitError
from pkgrel.services.release.changelog import update_changelogs
from pkgrel.services.release.config import CHANGELOG_COMMIT_MESSAGE
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.errors import ReleaseError
from pkgrel.services.release.gh import open_pull_request
from pkgrel.services.release.model import PullRequestRecord
from pkgrel.services.release.prs import merged_prs
from pkgrel.services.release.semver import last_release
from pkgrel.services.release.version import current_branch, next_version


def pull_request_title(version: str) -> str:
    return f"Release version {version}"


def pull_request_body(version: str, records: Sequence[PullRequestRecord]) -> str:
    lines = [pull_request_title(version), ""]
    lines.extend(f"- {r.title} #{r.number}" for r in records)
    return "\n".join(lines) + "\n"


def _git_failed(e: GitError) -> ReleaseError:
    return ReleaseError(kind="git_failed", message=f"git {e.command} failed", hint=e.message)


def _commit_and_push(ctx: ReleaseContext, *, branch: str) -> Result[None, ReleaseError]:
    maintainer = ctx.settings.maintainer
    for key, value in (("user.name", maintainer.name), ("user.email", maintainer.email)):
        if ctx.repo.config_get(key) == value:
            continue
        configured = ctx.repo.config_set(key, value)
        if isinstance(configured, Err):
            return Err(_git_failed(configured.error))

    committed = ctx.repo.commit_all(CHANGELOG_COMMIT_MESSAGE)
    if isinstance(committed, Err):
        return Err(_git_failed(committed.error))

    pushed = ctx.repo.push(ctx.settings.push_url(), branch)
    if isinstance(pushed, Err):
        # Retried before the pull request is opened again.
        ctx.console.warning(f"git push failed: {pushed.error.message}")
    return Ok(None)


def _open_with_retry(
    ctx: ReleaseContext, *, branch: str, version: str, body: str
) -> Result[None, ReleaseError]:
    pulled = ctx.repo.pull(ctx.settings.push_url(), branch)
    if isinstance(pulled, Err):
        ctx.console.warning(f"git pull failed: {pulled.error.message}")

    for attempt in range(2):
        opened = open_pull_request(
            ctx,
            base=ctx.settings.main_branch,
            head=branch,
            title=pull_request_title(version),
            body=body,
        )
        if isinstance(opened, Ok):
            ctx.console.success(f"pull request opened {opened.value}".rstrip())
            return Ok(None)

        ctx.console.debug(opened.error.pretty())
        if attempt == 0:
            pushed = ctx.repo.push(ctx.settings.push_url(), branch)
            if isinstance(pushed, Err):
                ctx.console.warning(f"git push failed: {pushed.error.message}")

    ctx.console.info(f"could not open a pull request for {branch}; it likely already exists")
    return Ok(None)


def create_pull_request(
    ctx: ReleaseContext, *, now: datetime | None = None
) -> Result[None, ReleaseError]:
    """Update changelogs on the current branch and open a release PR.

    Missing release tags or an uninferable version end the task early with
    a warning. Fatal problems (checkout/commit failures, missing changelog
    files) are returned as Err.
    """
    branch = current_branch(ctx)
    if branch is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="cannot determine the current branch",
                hint="pass --current-branch",
            )
        )

    checked_out = ctx.repo.checkout(branch)
    if isinstance(checked_out, Err):
        return Err(_git_failed(checked_out.error))

    tags = ctx.repo.tags()
    if isinstance(tags, Err):
        return Err(_git_failed(tags.error))

    last = last_release(tags.value)
    if last is None:
        ctx.console.warning("no release tag (vX.Y[.Z]) found; cannot list merged PRs")
        return Ok(None)

    version = next_version(ctx, last=last)
    if version is None:
        ctx.console.warning(f"cannot infer the next version from branch {branch}")
        return Ok(None)

    ctx.console.header(f"Release {version} (previous {last.to_tag()})")

    records_r = merged_prs(ctx, since=last)
    if isinstance(records_r, Err):
        return Err(_git_failed(records_r.error))
    records = records_r.value

    changed = False
    if ctx.repo.last_commit_subject() == CHANGELOG_COMMIT_MESSAGE:
        ctx.console.info("changelogs already updated by the last commit")
    else:
        updated = update_changelogs(
            root=ctx.settings.root,
            package=ctx.settings.package_name,
            version=version,
            records=records,
            maintainer=ctx.settings.maintainer,
            now=now or datetime.now().astimezone(),
            console=ctx.console,
            dry_run=ctx.dry_run,
        )
        if isinstance(updated, Err):
            return updated
        changed = updated.value

    dirty = ctx.repo.has_changes()
    if isinstance(dirty, Err):
        return Err(_git_failed(dirty.error))

    if changed or dirty.value:
        committed = _commit_and_push(ctx, branch=branch)
        if isinstance(committed, Err):
            return committed

    body = pull_request_body(version, records)
    ctx.console.debug(f"pull request body:\n{body}")
    return _open_with_retry(ctx, branch=branch, version=version, body=body)
