"""Changelog reconciliation for the Debian, RPM spec and Markdown files.

Each file receives one entry per version. An entry is never written twice:
a file whose content already has an entry header for the version, or
already contains the rendered entry minus its timestamp, is skipped.
"""

from __future__ import annotations

import locale
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from pkgrel.core.config import Maintainer
from pkgrel.core.result import Err, Ok, Result
from pkgrel.output.console import ConsoleProtocol
from pkgrel.services.release.config import (
    DEBIAN_CHANGELOG,
    MARKDOWN_CHANGELOG,
    MARKDOWN_CHANGELOG_MARKER,
    RPM_CHANGELOG_MARKER,
    rpm_spec_path,
)
from pkgrel.services.release.errors import ReleaseError
from pkgrel.services.release.model import PullRequestRecord


@contextmanager
def time_locale(name: str = "C") -> Iterator[None]:
    """Temporarily switch LC_TIME; the previous value is always restored."""
    previous = locale.setlocale(locale.LC_TIME)
    locale.setlocale(locale.LC_TIME, name)
    try:
        yield
    finally:
        locale.setlocale(locale.LC_TIME, previous)


@dataclass(frozen=True, slots=True)
class Timestamps:
    rfc2822: str  # Mon, 19 Oct 2026 12:00:00 +0000
    rpm: str  # Mon Oct 19 2026
    iso_date: str  # 2026-10-19


def format_timestamps(now: datetime) -> Timestamps:
    with time_locale():
        return Timestamps(
            rfc2822=now.strftime("%a, %d %b %Y %H:%M:%S %z"),
            rpm=now.strftime("%a %b %d %Y"),
            iso_date=now.strftime("%Y-%m-%d"),
        )


@dataclass(frozen=True, slots=True)
class RenderedEntry:
    """A changelog entry ready for insertion.

    Attributes:
        block: Exact text to insert
        stable: Part of ``block`` that does not depend on the clock
        is_present: Version-keyed lookup on existing file content
    """

    block: str
    stable: str
    is_present: Callable[[str], bool]

    def already_in(self, content: str) -> bool:
        return self.is_present(content) or self.stable in content


def _has_line(content: str, predicate: Callable[[str], bool]) -> bool:
    return any(predicate(line.rstrip()) for line in content.splitlines())


def render_debian(
    *,
    package: str,
    version: str,
    records: Sequence[PullRequestRecord],
    maintainer: Maintainer,
    stamp: str,
) -> RenderedEntry:
    header = f"{package} ({version}-1) stable; urgency=low\n\n"
    items = "".join(f"  * {r.title} (by {r.author})\n    <{r.url}>\n" for r in records)
    signature = f"\n -- {maintainer.name} <{maintainer.email}>"
    key = f"{package} ({version}-1) "
    return RenderedEntry(
        block=f"{header}{items}{signature}  {stamp}\n\n",
        stable=f"{header}{items}{signature}",
        is_present=lambda content: _has_line(content, lambda ln: ln.startswith(key)),
    )


def render_rpm(
    *,
    version: str,
    records: Sequence[PullRequestRecord],
    maintainer: Maintainer,
    stamp: str,
) -> RenderedEntry:
    header = f"* {stamp} {maintainer.email} - {version}-1\n"
    items = "".join(f"- {r.title} (by {r.author})\n" for r in records)
    suffix = f" - {version}-1"
    return RenderedEntry(
        block=header + items,
        stable=header + items,
        is_present=lambda content: _has_line(
            content, lambda ln: ln.startswith("* ") and ln.endswith(suffix)
        ),
    )


def render_markdown(
    *,
    version: str,
    records: Sequence[PullRequestRecord],
    date: str,
) -> RenderedEntry:
    header = f"\n\n## {version} ({date})\n\n"
    items = "".join(f"* {r.title} #{r.number} ({r.author})\n" for r in records)
    prefix = f"## {version} ("
    return RenderedEntry(
        block=header + items,
        stable=header + items,
        is_present=lambda content: _has_line(content, lambda ln: ln.startswith(prefix)),
    )


def insert_at_start(content: str, block: str) -> str | None:
    return block + content


def insert_after_rpm_marker(content: str, block: str) -> str | None:
    """Insert right after the ``%changelog`` line; None if there is none."""
    lines = content.splitlines(keepends=True)
    for i, line in enumerate(lines):
        if line.rstrip() == RPM_CHANGELOG_MARKER:
            marker = line if line.endswith("\n") else line + "\n"
            return "".join(lines[:i]) + marker + block + "".join(lines[i + 1 :])
    return None


def insert_after_markdown_heading(content: str, block: str) -> str | None:
    """Insert right after a leading ``# Changelog``; None if the file lacks it."""
    if not content.startswith(MARKDOWN_CHANGELOG_MARKER):
        return None
    n = len(MARKDOWN_CHANGELOG_MARKER)
    return content[:n] + block + content[n:]


@dataclass(frozen=True, slots=True)
class ChangelogTarget:
    label: str
    path: Path
    entry: RenderedEntry
    insert: Callable[[str, str], str | None]


def changelog_targets(
    *,
    root: Path,
    package: str,
    version: str,
    records: Sequence[PullRequestRecord],
    maintainer: Maintainer,
    now: datetime,
) -> list[ChangelogTarget]:
    stamps = format_timestamps(now)
    return [
        ChangelogTarget(
            label="debian",
            path=root / DEBIAN_CHANGELOG,
            entry=render_debian(
                package=package,
                version=version,
                records=records,
                maintainer=maintainer,
                stamp=stamps.rfc2822,
            ),
            insert=insert_at_start,
        ),
        ChangelogTarget(
            label="rpm",
            path=root / rpm_spec_path(package),
            entry=render_rpm(
                version=version,
                records=records,
                maintainer=maintainer,
                stamp=stamps.rpm,
            ),
            insert=insert_after_rpm_marker,
        ),
        ChangelogTarget(
            label="markdown",
            path=root / MARKDOWN_CHANGELOG,
            entry=render_markdown(version=version, records=records, date=stamps.iso_date),
            insert=insert_after_markdown_heading,
        ),
    ]


def update_changelogs(
    *,
    root: Path,
    package: str,
    version: str,
    records: Sequence[PullRequestRecord],
    maintainer: Maintainer,
    now: datetime,
    console: ConsoleProtocol,
    dry_run: bool,
) -> Result[bool, ReleaseError]:
    """Add the ``version`` entry to every changelog that lacks it.

    Returns:
        Ok(True) if at least one file was (or in dry-run, would be) changed.
        Err when a changelog is missing or has no insertion marker.
    """
    targets = changelog_targets(
        root=root,
        package=package,
        version=version,
        records=records,
        maintainer=maintainer,
        now=now,
    )

    missing = [t for t in targets if not t.path.is_file()]
    if missing:
        return Err(
            ReleaseError(
                kind="changelog_missing",
                message=f"changelog not found: {missing[0].path}",
                hint="Create the debian, rpm spec and markdown changelogs first.",
            )
        )

    pending: list[tuple[Path, str]] = []
    for target in targets:
        rel = target.path.relative_to(root)
        try:
            content = target.path.read_text(encoding="utf-8")
        except OSError as e:
            return Err(ReleaseError(kind="changelog_missing", message=f"cannot read {rel}: {e}"))

        if target.entry.already_in(content):
            console.info(f"{rel}: {version} already present, skipping")
            continue

        updated = target.insert(content, target.entry.block)
        if updated is None:
            return Err(
                ReleaseError(
                    kind="changelog_invalid",
                    message=f"{rel}: no insertion point for {target.label} changelog",
                    hint=(
                        f"expected a '{RPM_CHANGELOG_MARKER}' line"
                        if target.label == "rpm"
                        else f"expected the file to start with '{MARKDOWN_CHANGELOG_MARKER}'"
                    ),
                )
            )
        pending.append((rel, updated))

    # Nothing is written until every file has a valid insertion point.
    for rel, updated in pending:
        if dry_run:
            console.info(f"(dry-run) would update {rel}")
            continue
        try:
            (root / rel).write_text(updated, encoding="utf-8")
        except OSError as e:
            return Err(ReleaseError(kind="changelog_invalid", message=f"cannot write {rel}: {e}"))
        console.success(f"updated {rel}")

    return Ok(bool(pending))
