"""SCM backends.

A backend turns each abstract ``ScmOperation`` into command words. The set
of backends is closed; git is the only one built in.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from relcycle.core.config import ReleaseConfig
from relcycle.core.result import Err, Ok, Result
from relcycle.release.errors import NoScmDetected

__all__ = [
    "BACKENDS",
    "GitBackend",
    "ScmBackend",
    "ScmOperation",
    "select_backend",
]


class ScmOperation(StrEnum):
    STAGE = "stage"
    COMMIT = "commit"
    TAG = "tag"
    PUSH = "push"
    STATUS = "status"


class ScmBackend(Protocol):
    """Capability set every backend implements."""

    @property
    def name(self) -> str: ...

    @property
    def marker(self) -> str:
        """Entry in the working tree root that identifies a checkout."""
        ...

    def command(self, operation: ScmOperation, args: Sequence[str]) -> tuple[str, ...] | None:
        """Command words for ``operation``, or None if unsupported."""
        ...


class GitBackend:
    """git, detected by a ``.git`` directory (or file, for worktrees)."""

    name = "git"
    marker = ".git"

    _COMMANDS: Mapping[ScmOperation, tuple[str, ...]] = {
        ScmOperation.STAGE: ("git", "add"),
        ScmOperation.COMMIT: ("git", "commit", "-m"),
        ScmOperation.TAG: ("git", "tag"),
        ScmOperation.PUSH: ("git", "push", "--tags", "origin", "HEAD"),
        ScmOperation.STATUS: ("git", "status"),
    }

    def command(self, operation: ScmOperation, args: Sequence[str]) -> tuple[str, ...] | None:
        base = self._COMMANDS.get(operation)
        if base is None:
            return None
        return (*base, *args)


BACKENDS: tuple[ScmBackend, ...] = (GitBackend(),)


def select_backend(
    root: Path,
    config: ReleaseConfig,
    backends: Sequence[ScmBackend] = BACKENDS,
) -> Result[ScmBackend, NoScmDetected]:
    """Pick the backend named in the config, else the first one detected."""
    known = tuple(b.name for b in backends)

    if config.scm is not None:
        for backend in backends:
            if backend.name == config.scm:
                return Ok(backend)
        return Err(NoScmDetected(root=root, requested=config.scm, known=known))

    for backend in backends:
        if (root / backend.marker).exists():
            return Ok(backend)

    return Err(NoScmDetected(root=root, known=known))
