"""Tests for relcycle.scm.adapter."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from unittest.mock import MagicMock

from relcycle.core.result import Err, Ok
from relcycle.platform.process import CommandFailed, CommandOutput
from relcycle.release.errors import UnsupportedScmOperation
from relcycle.scm.adapter import ScmAdapter
from relcycle.scm.backends import GitBackend, ScmOperation


class _TagLessBackend:
    name = "tagless"
    marker = ".tagless"

    def command(self, operation: ScmOperation, args: Sequence[str]) -> tuple[str, ...] | None:
        if operation is ScmOperation.TAG:
            return None
        return ("tagless", operation.value, *args)


def _ok(cmd: Sequence[str], cwd: Path) -> Ok[CommandOutput]:
    return Ok(CommandOutput(command=tuple(cmd), stdout="", stderr=""))


class TestScmAdapter:
    def test_operations_run_in_root(self, tmp_path: Path) -> None:
        runner = MagicMock(side_effect=_ok)
        scm = ScmAdapter(GitBackend(), tmp_path, runner=runner)

        scm.stage("project.clj")
        scm.commit("release 1.0.0")
        scm.tag("demo-1.0.0")
        scm.push()
        scm.status()

        assert [c.args for c in runner.call_args_list] == [
            (("git", "add", "project.clj"), tmp_path),
            (("git", "commit", "-m", "release 1.0.0"), tmp_path),
            (("git", "tag", "demo-1.0.0"), tmp_path),
            (("git", "push", "--tags", "origin", "HEAD"), tmp_path),
            (("git", "status"), tmp_path),
        ]

    def test_unsupported_operation(self, tmp_path: Path) -> None:
        runner = MagicMock(side_effect=_ok)
        scm = ScmAdapter(_TagLessBackend(), tmp_path, runner=runner)

        result = scm.tag("demo-1.0.0")

        assert result == Err(UnsupportedScmOperation(backend="tagless", operation="tag"))
        runner.assert_not_called()

    def test_command_failure_propagates(self, tmp_path: Path) -> None:
        failure = CommandFailed(("git", "tag", "x"), 128, "", "fatal: tag 'x' already exists")
        runner = MagicMock(return_value=Err(failure))
        scm = ScmAdapter(GitBackend(), tmp_path, runner=runner)

        assert scm.tag("x") == Err(failure)
