from __future__ import annotations

from pkgrel.services.release.semver import Version
from pkgrel.services.release.version import next_version, version_from_branch, version_from_merges
from pkgrel.test.fakes import FakeCommands, MakeContext


def test_version_from_branch() -> None:
    assert version_from_branch("bump-version-2.5.1") == "2.5.1"
    assert version_from_branch("bump-version-2.5") == "2.5"
    assert version_from_branch("feature-x") is None
    assert version_from_branch("bump-version-") is None
    assert version_from_branch(None) is None


def test_version_from_merges_returns_first_match() -> None:
    subjects = [
        "Merge pull request #12 from org/feature-y",
        "Merge pull request #11 from org/bump-version-1.4.0",
        "Merge pull request #9 from org/bump-version-1.3.0",
    ]
    assert version_from_merges(subjects) == "1.4.0"
    assert version_from_merges(["Merge branch 'bump-version-3.0.1' into master"]) == "3.0.1"
    assert version_from_merges(["Merge pull request #1 from org/docs"]) is None


def test_override_wins(make_ctx: MakeContext, commands: FakeCommands) -> None:
    ctx = make_ctx(next_version="9.9.9", current_branch="bump-version-1.0.0")
    assert next_version(ctx) == "9.9.9"
    assert commands.calls == []


def test_branch_name(make_ctx: MakeContext, commands: FakeCommands) -> None:
    commands.on("git", "symbolic-ref", stdout="bump-version-2.5.1\n")
    assert next_version(make_ctx()) == "2.5.1"


def test_branch_override(make_ctx: MakeContext, commands: FakeCommands) -> None:
    ctx = make_ctx(current_branch="bump-version-2.5.1")
    assert next_version(ctx) == "2.5.1"
    assert commands.called("git", "symbolic-ref") == []


def test_feature_branch_cannot_infer(make_ctx: MakeContext, commands: FakeCommands) -> None:
    ctx = make_ctx(current_branch="feature-x")
    assert next_version(ctx) is None
    assert commands.called("git", "log") == []


def test_main_branch_scans_merges_since_last_release(
    make_ctx: MakeContext, commands: FakeCommands
) -> None:
    commands.on(
        "git",
        "log",
        "--merges",
        stdout="Merge pull request #20 from org/fix-z\n"
        "Merge pull request #19 from org/bump-version-1.3.0\n",
    )
    ctx = make_ctx(current_branch="master")
    assert next_version(ctx, last=Version(1, 2, 0)) == "1.3.0"
    assert commands.called("git", "log", "--merges") == [
        ["git", "log", "--merges", "--format=%s", "v1.2.0..HEAD"]
    ]


def test_main_branch_without_bump_merge(make_ctx: MakeContext, commands: FakeCommands) -> None:
    commands.on("git", "log", "--merges", stdout="Merge pull request #20 from org/fix-z\n")
    ctx = make_ctx(current_branch="master")
    assert next_version(ctx) is None
