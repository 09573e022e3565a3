"""Deploy strategy selection.

Precedence, first match wins:
1. ``deploy_via`` from the config (legacy Leiningen names are accepted)
2. ``repository-deploy`` when the project declares repositories
3. ``local-install``

``artifact-copy`` is only reachable by naming it explicitly.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from relcycle.core.config import ReleaseConfig
from relcycle.core.result import Err, Ok, Result
from relcycle.release.descriptor import Project
from relcycle.release.errors import ConfigInvalid, UnrecognizedDeployStrategy

__all__ = ["DeployStrategy", "deploy_command", "select_strategy"]


class DeployStrategy(StrEnum):
    REPOSITORY_DEPLOY = "repository-deploy"
    LOCAL_INSTALL = "local-install"
    ARTIFACT_COPY = "artifact-copy"
    EXPLICIT_SHELL = "explicit-shell-command"


_ALIASES: dict[str, DeployStrategy] = {
    "lein-deploy": DeployStrategy.REPOSITORY_DEPLOY,
    "lein-install": DeployStrategy.LOCAL_INSTALL,
    "clojars": DeployStrategy.ARTIFACT_COPY,
    "shell": DeployStrategy.EXPLICIT_SHELL,
}


def _lookup(name: str) -> DeployStrategy | None:
    key = name.strip().lstrip(":").lower()
    try:
        return DeployStrategy(key)
    except ValueError:
        return _ALIASES.get(key)


def select_strategy(
    config: ReleaseConfig, project: Project
) -> Result[DeployStrategy, UnrecognizedDeployStrategy]:
    if config.deploy_via is not None:
        strategy = _lookup(config.deploy_via)
        if strategy is None:
            return Err(
                UnrecognizedDeployStrategy(
                    name=config.deploy_via,
                    known=tuple(s.value for s in DeployStrategy),
                )
            )
        return Ok(strategy)

    if project.has_repositories:
        return Ok(DeployStrategy.REPOSITORY_DEPLOY)

    return Ok(DeployStrategy.LOCAL_INSTALL)


def deploy_command(
    strategy: DeployStrategy, config: ReleaseConfig, artifact: Path
) -> Result[list[str], ConfigInvalid]:
    """Map a strategy to the one command that performs it."""
    match strategy:
        case DeployStrategy.REPOSITORY_DEPLOY:
            return Ok(["lein", "deploy"])
        case DeployStrategy.LOCAL_INSTALL:
            return Ok(["lein", "install"])
        case DeployStrategy.ARTIFACT_COPY:
            return Ok(["scp", "pom.xml", str(artifact), config.artifact_copy_target])
        case DeployStrategy.EXPLICIT_SHELL:
            if not config.shell:
                return Err(
                    ConfigInvalid(
                        key="shell",
                        reason="deploy-via explicit-shell-command needs a shell command",
                    )
                )
            return Ok(list(config.shell))
