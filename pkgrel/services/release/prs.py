from __future__ import annotations

import re
from collections.abc import Iterable

from pkgrel.core.result import Err, Ok, Result
from pkgrel.git.repository import GitError
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.gh import fetch_pull_request
from pkgrel.services.release.model import PullRequestRecord
from pkgrel.services.release.semver import Version


_MERGE_PR_RE = re.compile(r"^Merge pull request #(\d+)\b")


def merged_pr_numbers(subjects: Iterable[str]) -> list[int]:
    """Pull request numbers from merge subjects, unique and ascending."""
    numbers: set[int] = set()
    for subject in subjects:
        m = _MERGE_PR_RE.match(subject)
        if m is not None:
            numbers.add(int(m.group(1)))
    return sorted(numbers)


def merged_prs(ctx: ReleaseContext, *, since: Version) -> Result[list[PullRequestRecord], GitError]:
    """Pull requests merged after the ``since`` release tag.

    PRs that cannot be fetched are reported and skipped. Nit PRs are left
    out. Only a failure to read the git history is returned as Err.
    """
    subjects = ctx.repo.merge_subjects(f"{since.to_tag()}..HEAD")
    if isinstance(subjects, Err):
        return subjects

    numbers = merged_pr_numbers(subjects.value)
    if numbers and ctx.settings.repo_slug is None:
        ctx.console.warning("GitHub repository unknown; set 'repo' in pkgrel.toml")
        return Ok([])

    records: list[PullRequestRecord] = []
    for number in numbers:
        fetched = fetch_pull_request(
            http=ctx.http,
            repo_slug=ctx.settings.repo_slug or "",
            number=number,
        )
        if isinstance(fetched, Err):
            ctx.console.warning(f"skipping PR #{number}: {fetched.error}")
            continue

        record = fetched.value
        if record.is_nit:
            ctx.console.debug(f"skipping nit PR #{number}: {record.title}")
            continue
        records.append(record)

    ctx.console.debug(f"{len(records)} PR(s) merged since {since.to_tag()}")
    return Ok(records)
