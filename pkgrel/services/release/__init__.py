"""Release tasks: changelog pull request and GitHub release upload."""

from pkgrel.services.release.context import ReleaseContext
from pkgrel.services.release.errors import ReleaseError
from pkgrel.services.release.pull_request import create_pull_request
from pkgrel.services.release.upload import upload_to_release

__all__ = [
    "ReleaseContext",
    "ReleaseError",
    "create_pull_request",
    "upload_to_release",
]
