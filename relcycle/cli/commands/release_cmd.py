from __future__ import annotations

from pathlib import Path

import typer

from relcycle.cli.context import build_context
from relcycle.core.result import Err
from relcycle.output.errors import print_release_error, release_error_exit_code
from relcycle.release.orchestrator import run_release


def release(
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Project root (holds the descriptor)."
    ),
    scm: str | None = typer.Option(None, "--scm", help="SCM backend (default: detect)."),
    deploy_via: str | None = typer.Option(
        None,
        "--deploy-via",
        help="repository-deploy | local-install | artifact-copy | explicit-shell-command",
    ),
    artifact_copy_target: str | None = typer.Option(
        None, "--artifact-copy-target", help="Destination for artifact-copy."
    ),
    shell: str | None = typer.Option(
        None, "--shell", help="Deploy command for explicit-shell-command."
    ),
    descriptor: str | None = typer.Option(
        None, "--descriptor", help="Descriptor file name (default: project.clj)."
    ),
    push: bool | None = typer.Option(
        None, "--push/--no-push", help="Push commits and tags when done."
    ),
) -> None:
    """Release the current -SNAPSHOT version and start the next one."""
    ctx = build_context(
        project_dir,
        scm=scm,
        deploy_via=deploy_via,
        artifact_copy_target=artifact_copy_target,
        shell=shell,
        descriptor=descriptor,
        push=push,
    )

    result = run_release(root=ctx.root, config=ctx.config, console=ctx.console)
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error.cause))

    typer.echo(str(result.value))
