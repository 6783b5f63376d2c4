"""Git repository abstraction.

Repository wraps the git commands a release run needs. Read-only commands
always execute. Mutating commands (checkout, config set, commit, push,
pull) are echoed to the console and skipped in dry-run mode.

Usage:
    repo = Repository(Path("/path/to/repo"), console=console, dry_run=False)

    match repo.tags():
        case Ok(tags):
            print(tags)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pkgrel.core.result import Err, Ok, Result
from pkgrel.output.console import ConsoleProtocol, Style
from pkgrel.platform.process import ProcessError
from pkgrel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_NETWORK_COMMANDS = frozenset({"fetch", "pull", "push"})

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git operations on a single working tree.

    Attributes:
        path: Repository root
        dry_run: When True, mutating commands are printed but not run
    """

    def __init__(
        self,
        path: Path,
        *,
        console: ConsoleProtocol,
        dry_run: bool = False,
    ) -> None:
        self.path = path
        self.console = console
        self.dry_run = dry_run

    # -- reads ---------------------------------------------------------------

    def tags(self) -> Result[list[str], GitError]:
        """List all tags."""
        result = self._read(["tag", "--list"])
        if isinstance(result, Err):
            return result
        return Ok([ln.strip() for ln in result.value.splitlines() if ln.strip()])

    def current_branch(self) -> str | None:
        """Short symbolic ref of HEAD.

        Returns None on a detached HEAD or error.
        """
        result = self._read(["symbolic-ref", "--short", "-q", "HEAD"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def merge_subjects(self, rev_range: str | None = None) -> Result[list[str], GitError]:
        """Subjects of merge commits, newest first.

        Args:
            rev_range: Optional range such as ``v1.2.0..HEAD``
        """
        args = ["log", "--merges", "--format=%s"]
        if rev_range is not None:
            args.append(rev_range)
        result = self._read(args)
        if isinstance(result, Err):
            return result
        return Ok([ln.strip() for ln in result.value.splitlines() if ln.strip()])

    def last_commit_subject(self) -> str | None:
        result = self._read(["log", "-1", "--format=%s"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def has_changes(self) -> Result[bool, GitError]:
        """True if the working tree differs from HEAD (``git diff --exit-code``)."""
        result = self._run(["diff", "--quiet", "--exit-code", "HEAD"])
        match result:
            case Ok(_):
                return Ok(False)
            case Err(e) if e.returncode == 1:
                return Ok(True)
            case Err(e):
                return Err(self._error("diff", e))

    def config_get(self, key: str) -> str | None:
        """Read a git config value; None if unset."""
        result = self._read(["config", "--get", key])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    # -- writes --------------------------------------------------------------

    def config_set(self, key: str, value: str) -> Result[None, GitError]:
        return self._write(["config", key, value]).map(lambda _: None)

    def checkout(self, branch: str) -> Result[None, GitError]:
        return self._write(["checkout", branch]).map(lambda _: None)

    def commit_all(self, message: str) -> Result[None, GitError]:
        """Stage tracked modifications and commit them."""
        return self._write(["commit", "-a", "-m", message]).map(lambda _: None)

    def push(self, remote: str, branch: str) -> Result[None, GitError]:
        """Push HEAD to ``branch`` on ``remote`` (a name or URL)."""
        return self._write(["push", remote, f"HEAD:{branch}"], display=remote).map(
            lambda _: None
        )

    def pull(self, remote: str, branch: str) -> Result[None, GitError]:
        return self._write(["pull", remote, branch], display=remote).map(lambda _: None)

    # -- plumbing ------------------------------------------------------------

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if command in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _read(self, args: list[str]) -> Result[str, GitError]:
        self.console.debug(f"git {' '.join(args)}")
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error(args[0], result.error))
        return result

    def _write(self, args: list[str], *, display: str | None = None) -> Result[str, GitError]:
        shown = list(args)
        if display is not None and display != "origin":
            # Never echo a token-bearing remote URL.
            shown = [a if a != display else "<authenticated remote>" for a in shown]
        prefix = "(dry-run) " if self.dry_run else ""
        self.console.print(f"{prefix}git {' '.join(shown)}", Style.DIM)
        if self.dry_run:
            return Ok("")

        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error(args[0], result.error))
        return result

    def _error(self, command: str, e: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
            returncode=e.returncode,
        )
