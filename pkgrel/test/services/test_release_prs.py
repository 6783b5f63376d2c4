from __future__ import annotations

from typing import cast

from pkgrel.core.result import Err, Ok
from pkgrel.output.console import MockConsole
from pkgrel.platform.http import HttpError, MockHttpClient
from pkgrel.services.release.gh import pull_request_url
from pkgrel.services.release.model import PullRequestRecord
from pkgrel.services.release.prs import merged_pr_numbers, merged_prs
from pkgrel.services.release.semver import Version
from pkgrel.test.fakes import FakeCommands, MakeContext

SLUG = "example-org/mytool"


def _payload(number: int, title: str, login: str = "alice") -> dict[str, object]:
    return {
        "number": number,
        "title": title,
        "user": {"login": login},
        "html_url": f"https://github.com/{SLUG}/pull/{number}",
    }


def test_merged_pr_numbers_sorted_and_unique() -> None:
    subjects = [
        "Merge pull request #12 from org/b",
        "Merge branch 'master' into feature",
        "Merge pull request #3 from org/a",
        "Merge pull request #12 from org/b",
    ]
    assert merged_pr_numbers(subjects) == [3, 12]


def test_merged_prs_fetches_in_ascending_order(
    make_ctx: MakeContext, commands: FakeCommands
) -> None:
    commands.on(
        "git",
        "log",
        "--merges",
        stdout="Merge pull request #11 from org/y\nMerge pull request #10 from org/x\n",
    )
    ctx = make_ctx()
    http = cast(MockHttpClient, ctx.http)
    http.set_json(pull_request_url(SLUG, 10), _payload(10, "Add X"))
    http.set_json(pull_request_url(SLUG, 11), _payload(11, "Fix Y", login="bob"))

    result = merged_prs(ctx, since=Version(1, 2, 0))

    assert isinstance(result, Ok)
    assert result.value == [
        PullRequestRecord(10, "Add X", "alice", f"https://github.com/{SLUG}/pull/10"),
        PullRequestRecord(11, "Fix Y", "bob", f"https://github.com/{SLUG}/pull/11"),
    ]
    assert http.calls == [pull_request_url(SLUG, 10), pull_request_url(SLUG, 11)]
    assert commands.called("git", "log", "--merges") == [
        ["git", "log", "--merges", "--format=%s", "v1.2.0..HEAD"]
    ]


def test_pull_request_url_requests_closed_state() -> None:
    assert pull_request_url(SLUG, 7) == (
        "https://api.github.com/repos/example-org/mytool/pulls/7?state=closed"
    )


def test_nit_prs_are_excluded(make_ctx: MakeContext, commands: FakeCommands) -> None:
    commands.on(
        "git",
        "log",
        "--merges",
        stdout="Merge pull request #1 from org/a\nMerge pull request #2 from org/b\n",
    )
    ctx = make_ctx()
    http = cast(MockHttpClient, ctx.http)
    http.set_json(pull_request_url(SLUG, 1), _payload(1, "Fix bug [NIT]"))
    http.set_json(pull_request_url(SLUG, 2), _payload(2, "Add feature"))

    result = merged_prs(ctx, since=Version(1, 0, 0))

    assert isinstance(result, Ok)
    assert [r.number for r in result.value] == [2]


def test_failed_fetch_is_skipped_with_warning(
    make_ctx: MakeContext, commands: FakeCommands
) -> None:
    commands.on(
        "git",
        "log",
        "--merges",
        stdout="Merge pull request #1 from org/a\n"
        "Merge pull request #2 from org/b\n"
        "Merge pull request #3 from org/c\n",
    )
    ctx = make_ctx()
    http = cast(MockHttpClient, ctx.http)
    http.set_json(pull_request_url(SLUG, 1), HttpError(url="x", status=0, message="timed out"))
    http.set_json(pull_request_url(SLUG, 2), {"title": "no user"})
    http.set_json(pull_request_url(SLUG, 3), _payload(3, "Works"))

    result = merged_prs(ctx, since=Version(1, 0, 0))

    assert isinstance(result, Ok)
    assert [r.number for r in result.value] == [3]
    console = cast(MockConsole, ctx.console)
    assert console.find("skipping PR #1")
    assert console.find("skipping PR #2")
    assert len(http.calls) == 3


def test_git_failure_is_returned(make_ctx: MakeContext, commands: FakeCommands) -> None:
    commands.on("git", "log", "--merges", returncode=128, stderr="bad revision 'v9.9.9..HEAD'")
    result = merged_prs(make_ctx(), since=Version(9, 9, 9))
    assert isinstance(result, Err)
    assert "bad revision" in result.error.message
