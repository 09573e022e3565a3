"""Release orchestration.

Steps, strictly in this order:

    init -> prepare_release -> ensure_artifact -> deploy
         -> prepare_next_development -> push -> done

``prepare_release`` only runs for a ``-SNAPSHOT`` descriptor,
``ensure_artifact`` only builds when the artifact file is missing and
``prepare_next_development`` only runs when the descriptor on disk is a
release version. Re-running after a failure therefore skips the work that
already completed. The first failing step aborts the run; nothing is
rolled back.

``init`` computes both the release and the next development version, so a
version that cannot be bumped is rejected before anything is changed.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

from relcycle.core.config import ReleaseConfig
from relcycle.core.result import Err, Ok, Result
from relcycle.output.console import ConsoleProtocol, Style
from relcycle.platform.process import CommandFailed, CommandOutput, Runner
from relcycle.platform.process import run as run_process
from relcycle.release.deploy import deploy_command, select_strategy
from relcycle.release.descriptor import Project, read_project, read_version, replace_version
from relcycle.release.errors import ReleaseAborted, ReleaseError
from relcycle.release.fsm import StepOutcome, UnknownStep, advance, finish, run_state_machine
from relcycle.release.version import (
    compute_next_development_version,
    compute_release_version,
    is_development,
)
from relcycle.scm import ScmAdapter, select_backend

__all__ = [
    "RELEASE_QUALIFIER_ENV",
    "ReleaseOrchestrator",
    "ReleaseRun",
    "ReleaseStep",
    "ReleaseSummary",
    "run_release",
]

RELEASE_QUALIFIER_ENV = "RELCYCLE_RELEASE_QUALIFIER"


class ReleaseStep(StrEnum):
    INIT = "init"
    PREPARE_RELEASE = "prepare_release"
    ENSURE_ARTIFACT = "ensure_artifact"
    DEPLOY = "deploy"
    PREPARE_NEXT_DEVELOPMENT = "prepare_next_development"
    PUSH = "push"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class ReleaseRun:
    """State of one release invocation; never persisted."""

    step: ReleaseStep
    project: Project | None = None
    scm: ScmAdapter | None = None
    current_version: str = ""
    release_version: str = ""
    planned_next_version: str = ""
    next_dev_version: str | None = None
    artifact_path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    current_version: str
    release_version: str
    next_dev_version: str | None

    def __str__(self) -> str:
        next_dev = self.next_dev_version or "(unchanged)"
        return f"VERSION: {self.current_version} => {self.release_version} => {next_dev}"


def release_commit_message(release_version: str) -> str:
    return f"relcycle: preparing {release_version} release"


def next_development_commit_message(release_version: str, next_version: str) -> str:
    return (
        f"relcycle: bumped version from {release_version} to {next_version} "
        "for next development cycle"
    )


def release_tag(project_name: str, release_version: str) -> str:
    return f"{project_name}-{release_version}"


type _Outcome = Result[StepOutcome[ReleaseRun], ReleaseAborted]


class ReleaseOrchestrator:
    """Sequences one release of the project rooted at ``root``."""

    def __init__(
        self,
        *,
        root: Path,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        env: Mapping[str, str] | None = None,
        runner: Runner = run_process,
    ) -> None:
        self.root = root
        self.config = config
        self.console = console
        self._env: Mapping[str, str] = os.environ if env is None else env
        self._runner = runner

    @property
    def descriptor_path(self) -> Path:
        return self.root / self.config.descriptor

    def run(self) -> Result[ReleaseSummary, ReleaseAborted]:
        handlers: dict[str, Callable[[ReleaseRun], _Outcome]] = {
            ReleaseStep.INIT: self._init,
            ReleaseStep.PREPARE_RELEASE: self._prepare_release,
            ReleaseStep.ENSURE_ARTIFACT: self._ensure_artifact,
            ReleaseStep.DEPLOY: self._deploy,
            ReleaseStep.PREPARE_NEXT_DEVELOPMENT: self._prepare_next_development,
            ReleaseStep.PUSH: self._push,
            ReleaseStep.DONE: self._done,
        }
        result = run_state_machine(
            initial_state=ReleaseRun(step=ReleaseStep.INIT),
            get_step=lambda run: run.step,
            handlers=handlers,
        )
        if isinstance(result, Err):
            error = result.error
            if isinstance(error, UnknownStep):
                raise AssertionError(f"unexpected release step: {error.step}")
            return Err(error)

        final = result.value
        return Ok(
            ReleaseSummary(
                current_version=final.current_version,
                release_version=final.release_version,
                next_dev_version=final.next_dev_version,
            )
        )

    # -- steps -----------------------------------------------------------

    def _init(self, run: ReleaseRun) -> _Outcome:
        project = read_project(self.descriptor_path)
        if isinstance(project, Err):
            return _abort(run, project.error)

        backend = select_backend(self.root, self.config)
        if isinstance(backend, Err):
            return _abort(run, backend.error)

        current = project.value.version
        if is_development(current):
            release_version = compute_release_version(current, self._release_qualifier())
        else:
            release_version = current

        next_version = compute_next_development_version(release_version)
        if isinstance(next_version, Err):
            return _abort(run, next_version.error)

        self.console.header(f"Releasing {project.value.name} {current}")
        return Ok(
            advance(
                replace(
                    run,
                    step=ReleaseStep.PREPARE_RELEASE,
                    project=project.value,
                    scm=ScmAdapter(backend.value, self.root, runner=self._run_command),
                    current_version=current,
                    release_version=release_version,
                    planned_next_version=next_version.value,
                )
            )
        )

    def _prepare_release(self, run: ReleaseRun) -> _Outcome:
        project, scm = _require(run)
        nxt = replace(run, step=ReleaseStep.ENSURE_ARTIFACT)

        if not is_development(run.current_version):
            self.console.print(
                f"{run.current_version} is already a release version; not tagging",
                Style.DIM,
            )
            return Ok(advance(nxt))

        self.console.info(
            f"setting project version {run.current_version} => {run.release_version}"
        )
        written = replace_version(project.descriptor, run.current_version, run.release_version)
        if isinstance(written, Err):
            return _abort(run, written.error)

        self.console.info(f"adding, committing and tagging {self.config.descriptor}")
        steps = (
            lambda: scm.stage(self.config.descriptor),
            lambda: scm.commit(release_commit_message(run.release_version)),
            lambda: scm.tag(release_tag(project.name, run.release_version)),
        )
        for step in steps:
            done = step()
            if isinstance(done, Err):
                return _abort(run, done.error)

        return Ok(advance(nxt))

    def _ensure_artifact(self, run: ReleaseRun) -> _Outcome:
        project, _ = _require(run)
        artifact = project.artifact_path(self.root, run.release_version)
        nxt = replace(run, step=ReleaseStep.DEPLOY, artifact_path=artifact)

        if artifact.exists():
            self.console.print(f"{artifact.name} already exists; not rebuilding", Style.DIM)
            return Ok(advance(nxt))

        self.console.info(f"building {artifact.name}")
        for cmd in self.config.build:
            built = self._run_command(cmd, self.root)
            if isinstance(built, Err):
                return _abort(run, built.error)

        return Ok(advance(nxt))

    def _deploy(self, run: ReleaseRun) -> _Outcome:
        project, _ = _require(run)
        assert run.artifact_path is not None

        strategy = select_strategy(self.config, project)
        if isinstance(strategy, Err):
            return _abort(run, strategy.error)

        cmd = deploy_command(strategy.value, self.config, run.artifact_path)
        if isinstance(cmd, Err):
            return _abort(run, cmd.error)

        self.console.info(f"deploying via {strategy.value}")
        deployed = self._run_command(cmd.value, self.root)
        if isinstance(deployed, Err):
            return _abort(run, deployed.error)

        return Ok(advance(replace(run, step=ReleaseStep.PREPARE_NEXT_DEVELOPMENT)))

    def _prepare_next_development(self, run: ReleaseRun) -> _Outcome:
        project, scm = _require(run)
        nxt = replace(run, step=ReleaseStep.PUSH)

        on_disk = read_version(project.descriptor)
        if isinstance(on_disk, Err):
            return _abort(run, on_disk.error)
        if is_development(on_disk.value):
            self.console.print(
                f"descriptor already at {on_disk.value}; not bumping", Style.DIM
            )
            return Ok(advance(nxt))

        next_version = run.planned_next_version
        self.console.info(
            f"updating version {run.release_version} => {next_version} "
            "for next development cycle"
        )
        written = replace_version(project.descriptor, run.release_version, next_version)
        if isinstance(written, Err):
            return _abort(run, written.error)

        staged = scm.stage(self.config.descriptor)
        if isinstance(staged, Err):
            return _abort(run, staged.error)
        committed = scm.commit(
            next_development_commit_message(run.release_version, next_version)
        )
        if isinstance(committed, Err):
            return _abort(run, committed.error)

        return Ok(advance(replace(nxt, next_dev_version=next_version)))

    def _push(self, run: ReleaseRun) -> _Outcome:
        _, scm = _require(run)
        nxt = replace(run, step=ReleaseStep.DONE)
        if not self.config.push:
            return Ok(advance(nxt))

        self.console.info("pushing commits and tags")
        pushed = scm.push()
        if isinstance(pushed, Err):
            return _abort(run, pushed.error)
        return Ok(advance(nxt))

    def _done(self, run: ReleaseRun) -> _Outcome:
        return Ok(finish(run))

    # -- helpers ---------------------------------------------------------

    def _release_qualifier(self) -> str:
        return self._env.get(RELEASE_QUALIFIER_ENV, "")

    def _run_command(
        self, cmd: Sequence[str], cwd: Path
    ) -> Result[CommandOutput, CommandFailed]:
        self.console.print(f"$ {' '.join(cmd)}", Style.DIM)
        return self._runner(cmd, cwd)


def _abort(run: ReleaseRun, error: ReleaseError) -> Err[ReleaseAborted]:
    return Err(ReleaseAborted(step=run.step.value, cause=error))


def _require(run: ReleaseRun) -> tuple[Project, ScmAdapter]:
    # Set by the init step before any other step runs.
    assert run.project is not None and run.scm is not None
    return run.project, run.scm


def run_release(
    *,
    root: Path,
    config: ReleaseConfig,
    console: ConsoleProtocol,
    env: Mapping[str, str] | None = None,
    runner: Runner = run_process,
) -> Result[ReleaseSummary, ReleaseAborted]:
    """Run a full release of the project at ``root``."""
    return ReleaseOrchestrator(
        root=root, config=config, console=console, env=env, runner=runner
    ).run()
