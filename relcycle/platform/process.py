"""Subprocess execution with Result-based error handling.

Every external command of a release (git, the build step, the deploy step)
goes through ``run``. The call blocks until the process exits; there is no
timeout. Captured output is echoed to this process's stdout/stderr so the
operator sees it, then a non-zero exit is turned into ``CommandFailed``.

Usage:
    match run(["git", "status"], cwd=root):
        case Ok(output):
            ...
        case Err(failure):
            print(f"{failure} {failure.stderr}")
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from relcycle.core.result import Err, Ok, Result

__all__ = ["CommandFailed", "CommandOutput", "Runner", "run"]


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured output of a successful command."""

    command: tuple[str, ...]
    stdout: str
    stderr: str
    returncode: int = 0


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """A command exited non-zero or could not be started.

    Attributes:
        command: The command that was executed.
        returncode: Exit code of the process (-1 if it never started).
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        return f"command failed: {' '.join(self.command)} (exit {self.returncode})"


Runner = Callable[[Sequence[str], Path], Result[CommandOutput, CommandFailed]]


def _echo(stdout: str, stderr: str) -> None:
    if stdout:
        sys.stdout.write(stdout)
        sys.stdout.flush()
    if stderr:
        sys.stderr.write(stderr)
        sys.stderr.flush()


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    echo: bool = True,
) -> Result[CommandOutput, CommandFailed]:
    """Execute a command and return its captured output or the failure.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        echo: Write captured stdout/stderr to ours once the command ends.

    Returns:
        Ok(CommandOutput) on exit status 0, Err(CommandFailed) otherwise.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            list(command),
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        return Err(CommandFailed(command=command, returncode=-1, stdout="", stderr=str(e)))

    if echo:
        _echo(proc.stdout, proc.stderr)

    if proc.returncode != 0:
        return Err(
            CommandFailed(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(CommandOutput(command=command, stdout=proc.stdout, stderr=proc.stderr))
