"""Error presentation utilities.

Centralized error formatting and exit code mapping for release failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relcycle.core.errors import ErrorCode
from relcycle.output.console import Style
from relcycle.release.errors import (
    CommandFailed,
    ConfigInvalid,
    DescriptorUnreadable,
    MalformedVersion,
    NoScmDetected,
    ReleaseAborted,
    ReleaseError,
    UnrecognizedDeployStrategy,
    UnsupportedScmOperation,
    VersionNotFound,
)

if TYPE_CHECKING:
    from relcycle.output.console import ConsoleProtocol

__all__ = ["describe_release_error", "print_release_error", "release_error_exit_code"]


def describe_release_error(error: ReleaseError) -> str:
    """One-line description of a release error."""
    match error:
        case NoScmDetected(root=root, requested=None, known=known):
            return f"no SCM detected in {root} (known: {', '.join(known)})"
        case NoScmDetected(requested=requested, known=known):
            return f"unknown SCM backend: {requested} (known: {', '.join(known)})"
        case UnsupportedScmOperation(backend=backend, operation=operation):
            return f"SCM backend {backend} does not support {operation}"
        case CommandFailed():
            return str(error)
        case VersionNotFound(path=path, version=None):
            return f"unable to find project version in {path}"
        case VersionNotFound(path=path, version=version):
            return f"unable to find version string {version} in {path}"
        case MalformedVersion(version=version, reason=reason):
            return f"malformed version {version}: {reason}"
        case UnrecognizedDeployStrategy(name=name):
            return f"unrecognized deploy strategy: {name}"
        case ConfigInvalid(key=key, reason=reason):
            return f"invalid config {key}: {reason}"
        case DescriptorUnreadable(path=path, reason=reason):
            return f"cannot access {path}: {reason}"


def print_release_error(aborted: ReleaseAborted, console: ConsoleProtocol) -> None:
    """Print an aborted release with the context needed to diagnose it."""
    error = aborted.cause
    console.error(f"release aborted during {aborted.step}: {describe_release_error(error)}")
    match error:
        case CommandFailed(stdout=stdout, stderr=stderr):
            if stdout.strip():
                console.print(f"stdout:\n{stdout.rstrip()}", Style.DIM)
            if stderr.strip():
                console.print(f"stderr:\n{stderr.rstrip()}", Style.DIM)
        case UnrecognizedDeployStrategy(known=known):
            console.print(f"known strategies: {', '.join(known)}", Style.DIM)
        case NoScmDetected(requested=None):
            console.print("hint: run from the root of a git checkout, or set --scm", Style.DIM)
        case _:
            pass


def release_error_exit_code(error: ReleaseError) -> int:
    """Get exit code for a release error."""
    match error:
        case NoScmDetected() | UnsupportedScmOperation():
            return int(ErrorCode.ENV_ERROR)
        case CommandFailed():
            return int(ErrorCode.COMMAND_ERROR)
        case DescriptorUnreadable():
            return int(ErrorCode.IO_ERROR)
        case (
            VersionNotFound() | MalformedVersion() | UnrecognizedDeployStrategy() | ConfigInvalid()
        ):
            return int(ErrorCode.USER_ERROR)
