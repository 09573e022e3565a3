"""Process exit codes for the relcycle CLI.

The numeric values are part of the command-line contract:
- 0: Success
- 1: User error (bad descriptor, malformed version, bad configuration)
- 2: Environment error (no SCM checkout, unsupported SCM operation)
- 3: Command error (an external git/build/deploy command failed)
- 5: I/O error (descriptor cannot be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    COMMAND_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
