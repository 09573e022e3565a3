"""Typed release configuration.

A ``ReleaseConfig`` is built once per invocation from built-in defaults,
the optional ``release.toml`` file in the project root and command-line
flags (in that order of precedence, last wins), then passed explicitly to
every component that needs it.

Example ``release.toml``:

    [release]
    scm = "git"
    deploy-via = "artifact-copy"
    artifact-copy-target = "deploy@example.org:/srv/jars"
    build = [["lein", "jar"], ["lein", "pom"]]
    push = true
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_ARTIFACT_COPY_TARGET",
    "DEFAULT_BUILD_COMMANDS",
    "DEFAULT_DESCRIPTOR",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_project_config",
]

CONFIG_FILE_NAME = "release.toml"
DEFAULT_DESCRIPTOR = "project.clj"
DEFAULT_ARTIFACT_COPY_TARGET = "clojars@clojars.org:"
DEFAULT_BUILD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("lein", "jar"),
    ("lein", "pom"),
)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Options recognized by a release run.

    Attributes:
        scm: SCM backend name; None means detect from the working tree.
        deploy_via: Deploy strategy name; None means infer from the project.
        artifact_copy_target: Destination for the artifact-copy strategy.
        shell: Command words for the explicit-shell-command strategy.
        descriptor: Descriptor file name, relative to the project root.
        build: Commands that produce the artifact, run in order.
        push: Push commits and tags once the release is complete.
    """

    scm: str | None = None
    deploy_via: str | None = None
    artifact_copy_target: str = DEFAULT_ARTIFACT_COPY_TARGET
    shell: tuple[str, ...] = ()
    descriptor: str = DEFAULT_DESCRIPTOR
    build: tuple[tuple[str, ...], ...] = DEFAULT_BUILD_COMMANDS
    push: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from parsed TOML; raises ValueError on bad types."""
        table: StrDict = get_table(data, "release") or {}
        defaults = cls()

        push = table.get("push")
        if push is not None and get_bool(table, "push") is None:
            raise ValueError("release.push must be a boolean")

        return cls(
            scm=get_str(table, "scm"),
            deploy_via=get_str(table, "deploy-via"),
            artifact_copy_target=(
                get_str(table, "artifact-copy-target") or defaults.artifact_copy_target
            ),
            shell=_parse_shell(table.get("shell")),
            descriptor=get_str(table, "descriptor") or defaults.descriptor,
            build=_parse_build(table.get("build")) or defaults.build,
            push=bool(push),
        )

    def with_overrides(
        self,
        *,
        scm: str | None = None,
        deploy_via: str | None = None,
        artifact_copy_target: str | None = None,
        shell: str | None = None,
        descriptor: str | None = None,
        push: bool | None = None,
    ) -> ReleaseConfig:
        """Return a copy with every non-None override applied."""
        changes: dict[str, object] = {}
        if scm is not None:
            changes["scm"] = scm
        if deploy_via is not None:
            changes["deploy_via"] = deploy_via
        if artifact_copy_target is not None:
            changes["artifact_copy_target"] = artifact_copy_target
        if shell is not None:
            changes["shell"] = tuple(shlex.split(shell))
        if descriptor is not None:
            changes["descriptor"] = descriptor
        if push is not None:
            changes["push"] = push
        return replace(self, **changes)


def _parse_shell(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(shlex.split(value))
    words = get_str_list({"shell": value}, "shell")
    if words is None:
        raise ValueError("release.shell must be a string or a list of strings")
    return tuple(words)


def _parse_build(value: object) -> tuple[tuple[str, ...], ...] | None:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError("release.build must be a list of commands")
    commands: list[tuple[str, ...]] = []
    for item in value:
        words = get_str_list({"cmd": item}, "cmd")
        if not words:
            raise ValueError("each release.build command must be a non-empty list of strings")
        commands.append(tuple(words))
    return tuple(commands)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to release.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_project_config(root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``release.toml`` from the project root, or defaults when absent."""
    path = root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
