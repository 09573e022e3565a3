"""Tests for relcycle.scm.backends."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relcycle.core.config import ReleaseConfig
from relcycle.core.result import Err, Ok
from relcycle.release.errors import NoScmDetected
from relcycle.scm.backends import GitBackend, ScmOperation, select_backend


class _HgBackend:
    name = "hg"
    marker = ".hg"

    def command(self, operation: ScmOperation, args: Sequence[str]) -> tuple[str, ...] | None:
        return ("hg", operation.value, *args)


class TestGitBackend:
    def test_commands(self) -> None:
        git = GitBackend()
        assert git.command(ScmOperation.STAGE, ["project.clj"]) == ("git", "add", "project.clj")
        assert git.command(ScmOperation.COMMIT, ["msg"]) == ("git", "commit", "-m", "msg")
        assert git.command(ScmOperation.TAG, ["demo-1.0.0"]) == ("git", "tag", "demo-1.0.0")
        assert git.command(ScmOperation.PUSH, []) == ("git", "push", "--tags", "origin", "HEAD")
        assert git.command(ScmOperation.STATUS, []) == ("git", "status")

    def test_covers_every_operation(self) -> None:
        git = GitBackend()
        assert all(git.command(op, []) is not None for op in ScmOperation)


class TestSelectBackend:
    def test_detects_git_directory(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()

        result = select_backend(tmp_path, ReleaseConfig())

        assert isinstance(result, Ok)
        assert result.value.name == "git"

    def test_detects_git_file(self, tmp_path: Path) -> None:
        (tmp_path / ".git").write_text("gitdir: ../main/.git/worktrees/x\n", encoding="utf-8")

        assert isinstance(select_backend(tmp_path, ReleaseConfig()), Ok)

    def test_nothing_detected(self, tmp_path: Path) -> None:
        result = select_backend(tmp_path, ReleaseConfig())

        assert result == Err(NoScmDetected(root=tmp_path, known=("git",)))

    def test_config_override_wins_over_detection(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        backends = (GitBackend(), _HgBackend())

        result = select_backend(tmp_path, ReleaseConfig(scm="hg"), backends)

        assert isinstance(result, Ok)
        assert result.value.name == "hg"

    def test_first_detected_backend_wins(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".hg").mkdir()

        result = select_backend(tmp_path, ReleaseConfig(), (_HgBackend(), GitBackend()))

        assert isinstance(result, Ok)
        assert result.value.name == "hg"

    def test_unknown_override(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()

        result = select_backend(tmp_path, ReleaseConfig(scm="svn"))

        assert isinstance(result, Err)
        assert result.error.requested == "svn"
        assert result.error.known == ("git",)
