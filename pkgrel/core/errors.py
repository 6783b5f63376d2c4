"""Process exit codes.

Every fatal condition is mapped to one of these values by the CLI layer.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the pkgrel command.

    - 1: User error (bad flag, invalid pkgrel.toml)
    - 2: Environment error (git or gh missing)
    - 4: Network error (release upload failed)
    - 5: I/O error (changelog missing, git command failed)
    """

    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
