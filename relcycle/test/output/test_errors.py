"""Tests for relcycle.output.errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from relcycle.core.errors import ErrorCode
from relcycle.output.console import MockConsole, Style
from relcycle.output.errors import (
    describe_release_error,
    print_release_error,
    release_error_exit_code,
)
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

_FAILED = CommandFailed(("lein", "deploy"), 1, "Retrieving deps\n", "401 Unauthorized\n")


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (NoScmDetected(root=Path("/w")), ErrorCode.ENV_ERROR),
        (UnsupportedScmOperation(backend="git", operation="tag"), ErrorCode.ENV_ERROR),
        (_FAILED, ErrorCode.COMMAND_ERROR),
        (VersionNotFound(path=Path("project.clj")), ErrorCode.USER_ERROR),
        (MalformedVersion(version="1.2.3-rc1", reason="x"), ErrorCode.USER_ERROR),
        (UnrecognizedDeployStrategy(name="ftp", known=()), ErrorCode.USER_ERROR),
        (ConfigInvalid(key="shell", reason="x"), ErrorCode.USER_ERROR),
        (DescriptorUnreadable(path=Path("project.clj"), reason="denied"), ErrorCode.IO_ERROR),
    ],
)
def test_exit_codes(error: ReleaseError, code: ErrorCode) -> None:
    assert release_error_exit_code(error) == int(code)


def test_describe() -> None:
    assert describe_release_error(_FAILED) == "command failed: lein deploy (exit 1)"
    assert describe_release_error(
        VersionNotFound(path=Path("project.clj"), version="1.0.0")
    ) == ("unable to find version string 1.0.0 in project.clj")
    unknown = NoScmDetected(root=Path("/w"), requested="svn", known=("git",))
    assert describe_release_error(unknown) == "unknown SCM backend: svn (known: git)"


def test_print_command_failure_shows_output() -> None:
    console = MockConsole()

    print_release_error(ReleaseAborted(step="deploy", cause=_FAILED), console)

    assert console.messages[0] == (
        "error: release aborted during deploy: command failed: lein deploy (exit 1)"
    )
    assert "stdout:\nRetrieving deps" in console.messages
    assert "stderr:\n401 Unauthorized" in console.messages
    assert console.outputs[1].style == Style.DIM


def test_print_unknown_strategy_lists_known() -> None:
    console = MockConsole()
    cause = UnrecognizedDeployStrategy(name="ftp", known=("local-install", "artifact-copy"))

    print_release_error(ReleaseAborted(step="deploy", cause=cause), console)

    assert console.find("known strategies: local-install, artifact-copy")
