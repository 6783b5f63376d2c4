"""Git operations used by release tasks.

Usage:
    from pkgrel.git import Repository

    repo = Repository(Path("."), console=console)
    tags = repo.tags()
"""

from pkgrel.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
