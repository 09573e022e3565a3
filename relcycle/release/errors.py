"""Error types for a release run.

Each failure is a frozen dataclass returned inside ``Err``; none of them is
raised. ``ReleaseAborted`` wraps the first failure with the step it
happened in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relcycle.platform.process import CommandFailed

__all__ = [
    "CommandFailed",
    "ConfigInvalid",
    "DescriptorUnreadable",
    "MalformedVersion",
    "NoScmDetected",
    "ReleaseAborted",
    "ReleaseError",
    "UnrecognizedDeployStrategy",
    "UnsupportedScmOperation",
    "VersionNotFound",
]


@dataclass(frozen=True, slots=True)
class NoScmDetected:
    root: Path
    requested: str | None = None
    known: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class UnsupportedScmOperation:
    backend: str
    operation: str


@dataclass(frozen=True, slots=True)
class VersionNotFound:
    path: Path
    version: str | None = None


@dataclass(frozen=True, slots=True)
class MalformedVersion:
    version: str
    reason: str


@dataclass(frozen=True, slots=True)
class UnrecognizedDeployStrategy:
    name: str
    known: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ConfigInvalid:
    key: str
    reason: str


@dataclass(frozen=True, slots=True)
class DescriptorUnreadable:
    path: Path
    reason: str


ReleaseError = (
    NoScmDetected
    | UnsupportedScmOperation
    | CommandFailed
    | VersionNotFound
    | MalformedVersion
    | UnrecognizedDeployStrategy
    | ConfigInvalid
    | DescriptorUnreadable
)


@dataclass(frozen=True, slots=True)
class ReleaseAborted:
    """A release stopped at ``step`` because of ``cause``."""

    step: str
    cause: ReleaseError
