from __future__ import annotations

import os
from pathlib import Path

import typer

from relcycle.cli.context import build_context
from relcycle.core.errors import ErrorCode
from relcycle.core.result import Err, Ok
from relcycle.output.console import Style
from relcycle.output.errors import describe_release_error, release_error_exit_code
from relcycle.platform.process import run as run_process
from relcycle.release.deploy import select_strategy
from relcycle.release.descriptor import read_project
from relcycle.release.orchestrator import RELEASE_QUALIFIER_ENV
from relcycle.release.version import (
    compute_next_development_version,
    compute_release_version,
    is_development,
    parse,
)
from relcycle.scm import ScmAdapter, select_backend


def status(
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Project root (holds the descriptor)."
    ),
    scm: str | None = typer.Option(None, "--scm", help="SCM backend (default: detect)."),
    deploy_via: str | None = typer.Option(None, "--deploy-via", help="Deploy strategy."),
    descriptor: str | None = typer.Option(None, "--descriptor", help="Descriptor file name."),
) -> None:
    """Show the version, the planned release and the working tree status."""
    ctx = build_context(project_dir, scm=scm, deploy_via=deploy_via, descriptor=descriptor)
    console = ctx.console

    project = read_project(ctx.root / ctx.config.descriptor)
    if isinstance(project, Err):
        console.error(describe_release_error(project.error))
        raise typer.Exit(code=release_error_exit_code(project.error))
    p = project.value

    parts = parse(p.version)
    console.header(f"{p.name} {p.version}")
    console.print(f"format: {parts.format}", Style.DIM)
    if parts.qualifier:
        console.print(f"qualifier: {parts.qualifier}", Style.DIM)

    if is_development(p.version):
        release_version = compute_release_version(
            p.version, os.environ.get(RELEASE_QUALIFIER_ENV, "")
        )
        console.info(f"release version: {release_version}")
    else:
        release_version = p.version
        console.info(f"{p.version} is a release version; the release step will be skipped")

    match compute_next_development_version(release_version):
        case Ok(next_version):
            console.info(f"next development version: {next_version}")
        case Err(e):
            console.warning(describe_release_error(e))

    match select_strategy(ctx.config, p):
        case Ok(strategy):
            console.info(f"deploy strategy: {strategy}")
        case Err(e):
            console.warning(describe_release_error(e))

    backend = select_backend(ctx.root, ctx.config)
    if isinstance(backend, Err):
        console.error(describe_release_error(backend.error))
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    adapter = ScmAdapter(
        backend.value,
        ctx.root,
        runner=lambda cmd, cwd: run_process(cmd, cwd, echo=False),
    )
    match adapter.status():
        case Ok(output):
            console.print(output.stdout.rstrip())
        case Err(e):
            console.error(describe_release_error(e))
            raise typer.Exit(code=release_error_exit_code(e))
