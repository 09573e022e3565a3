from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relcycle.core.config import ReleaseConfig, load_project_config
from relcycle.core.errors import ErrorCode
from relcycle.core.result import Err
from relcycle.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(
    project_dir: Path,
    *,
    scm: str | None = None,
    deploy_via: str | None = None,
    artifact_copy_target: str | None = None,
    shell: str | None = None,
    descriptor: str | None = None,
    push: bool | None = None,
) -> CLIContext:
    try:
        root = project_dir.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --project-dir: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        typer.echo(f"error: project directory not found: {root}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_project_config(root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    try:
        config = config_result.value.with_overrides(
            scm=scm,
            deploy_via=deploy_via,
            artifact_copy_target=artifact_copy_target,
            shell=shell,
            descriptor=descriptor,
            push=push,
        )
    except ValueError as e:
        # shlex rejects unbalanced quotes in --shell
        typer.echo(f"error: invalid --shell: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(root=root, config=config, console=RichConsole())
