from __future__ import annotations

import re
from collections.abc import Iterable

from pkgrel.core.result import Err
from pkgrel.services.release.config import BUMP_BRANCH_PREFIX
from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.semver import Version


_BUMP_BRANCH_RE = re.compile(rf"^{re.escape(BUMP_BRANCH_PREFIX)}(\d+(?:\.\d+)+)$")
_BUMP_MERGE_RE = re.compile(rf"{re.escape(BUMP_BRANCH_PREFIX)}(\d+(?:\.\d+)+)\b")


def version_from_branch(branch: str | None) -> str | None:
    """``bump-version-2.5.1`` -> ``2.5.1``."""
    if not branch:
        return None
    m = _BUMP_BRANCH_RE.match(branch.strip())
    return m.group(1) if m else None


def version_from_merges(subjects: Iterable[str]) -> str | None:
    """First bump-version branch named in merge commit subjects."""
    for subject in subjects:
        m = _BUMP_MERGE_RE.search(subject)
        if m is not None:
            return m.group(1)
    return None


def current_branch(ctx: ReleaseContext) -> str | None:
    return ctx.settings.current_branch or ctx.repo.current_branch()


def next_version(ctx: ReleaseContext, *, last: Version | None = None) -> str | None:
    """Infer the version being released.

    Order: ``--next-version`` override, bump-version branch name, then (on
    the main branch only) the newest merge of a bump-version branch since
    ``last``. None means the version cannot be inferred.
    """
    if ctx.settings.next_version:
        return ctx.settings.next_version

    branch = current_branch(ctx)
    from_branch = version_from_branch(branch)
    if from_branch is not None:
        ctx.console.debug(f"next version {from_branch} from branch {branch}")
        return from_branch

    if branch != ctx.settings.main_branch:
        ctx.console.debug(f"branch {branch or '(detached)'} does not name a version")
        return None

    rev_range = f"{last.to_tag()}..HEAD" if last is not None else None
    subjects = ctx.repo.merge_subjects(rev_range)
    if isinstance(subjects, Err):
        ctx.console.warning(f"cannot read merge history: {subjects.error.message}")
        return None

    found = version_from_merges(subjects.value)
    if found is not None:
        ctx.console.debug(f"next version {found} from merge history")
    return found
