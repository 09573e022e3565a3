"""Tests for relcycle.platform.process."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relcycle.core.result import Err, Ok
from relcycle.platform.process import CommandFailed, run


class TestCommandFailed:
    def test_str_includes_command_and_exit_code(self) -> None:
        failure = CommandFailed(
            command=("git", "tag", "demo-1.0.0"),
            returncode=128,
            stdout="",
            stderr="fatal: tag 'demo-1.0.0' already exists",
        )
        assert str(failure) == "command failed: git tag demo-1.0.0 (exit 128)"

    def test_frozen(self) -> None:
        failure = CommandFailed(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            failure.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_output(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path, echo=False)

        assert isinstance(result, Ok)
        assert result.value.stdout.strip() == "hello"
        assert result.value.returncode == 0

    def test_non_zero_exit_is_failure(self, tmp_path: Path) -> None:
        result = run(
            [
                sys.executable,
                "-c",
                "import sys; print('out'); sys.stderr.write('err msg'); sys.exit(42)",
            ],
            cwd=tmp_path,
            echo=False,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 42
        assert "out" in result.error.stdout
        assert "err msg" in result.error.stderr
        assert result.error.command[0] == sys.executable

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "project.clj").write_text("", encoding="utf-8")

        result = run(
            [sys.executable, "-c", "import os; print(os.listdir('.'))"],
            cwd=tmp_path,
            echo=False,
        )

        assert isinstance(result, Ok)
        assert "project.clj" in result.value.stdout

    def test_echoes_captured_output(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run(
            [
                sys.executable,
                "-c",
                "import sys; print('to stdout'); sys.stderr.write('to stderr'); sys.exit(3)",
            ],
            cwd=tmp_path,
        )

        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stderr" in captured.err

    def test_no_echo(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run([sys.executable, "-c", "print('quiet')"], cwd=tmp_path, echo=False)

        assert "quiet" not in capsys.readouterr().out

    def test_undecodable_output_is_replaced(self, tmp_path: Path) -> None:
        result = run(
            [
                sys.executable,
                "-c",
                "import sys; sys.stdout.buffer.write(b'caf\\xe9'); sys.exit(2)",
            ],
            cwd=tmp_path,
            echo=False,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == 2
        assert result.error.stdout == "caf\ufffd"
