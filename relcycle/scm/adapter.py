"""Run abstract SCM operations against one working tree."""

from __future__ import annotations

from pathlib import Path

from relcycle.core.result import Err, Result
from relcycle.platform.process import CommandFailed, CommandOutput, Runner
from relcycle.platform.process import run as run_process
from relcycle.release.errors import UnsupportedScmOperation
from relcycle.scm.backends import ScmBackend, ScmOperation

ScmError = UnsupportedScmOperation | CommandFailed


class ScmAdapter:
    """SCM operations for the working tree at ``root``.

    All methods return Result types; a failing command comes back as
    CommandFailed with its captured output.
    """

    def __init__(self, backend: ScmBackend, root: Path, runner: Runner = run_process) -> None:
        self.backend = backend
        self.root = root
        self._runner = runner

    def stage(self, path: str) -> Result[CommandOutput, ScmError]:
        return self._invoke(ScmOperation.STAGE, path)

    def commit(self, message: str) -> Result[CommandOutput, ScmError]:
        return self._invoke(ScmOperation.COMMIT, message)

    def tag(self, label: str) -> Result[CommandOutput, ScmError]:
        return self._invoke(ScmOperation.TAG, label)

    def push(self) -> Result[CommandOutput, ScmError]:
        return self._invoke(ScmOperation.PUSH)

    def status(self) -> Result[CommandOutput, ScmError]:
        return self._invoke(ScmOperation.STATUS)

    def _invoke(self, operation: ScmOperation, *args: str) -> Result[CommandOutput, ScmError]:
        cmd = self.backend.command(operation, args)
        if cmd is None:
            return Err(
                UnsupportedScmOperation(backend=self.backend.name, operation=operation.value)
            )
        return self._runner(cmd, self.root)
