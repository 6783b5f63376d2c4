from __future__ import annotations

from pathlib import Path


REQUIRED_COMMANDS: tuple[str, ...] = ("git", "gh")

GITHUB_API_URL = "https://api.github.com"

BUMP_BRANCH_PREFIX = "bump-version-"
CHANGELOG_COMMIT_MESSAGE = "update changelogs"

# Changelog targets, relative to the repository root
DEBIAN_CHANGELOG = Path("debian/changelog")
MARKDOWN_CHANGELOG = Path("CHANGELOG.md")
RPM_CHANGELOG_MARKER = "%changelog"
MARKDOWN_CHANGELOG_MARKER = "# Changelog"


def rpm_spec_path(package_name: str) -> Path:
    return Path(f"{package_name}.spec")


# Artifact globs for the GitHub release, in upload order. Relative patterns
# are resolved against the repository root.
ARTIFACT_GLOBS: tuple[str, ...] = (
    "~/rpmbuild/RPMS/*/*.rpm",
    "packaging/*.deb",
    "snapshot/*.zip",
)
