"""Version string model.

Versions stay plain strings; ``parse`` derives their parts on demand and
the compute functions always return new strings.

``compute_next_development_version`` works on the dot-split string and
does not go through ``parse``: ``"1.2.3-rc1"`` ends in the segment
``"3-rc1"``, which is not a number, so it is reported as malformed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from relcycle.core.result import Err, Ok, Result
from relcycle.release.errors import MalformedVersion

__all__ = [
    "SNAPSHOT_SUFFIX",
    "VersionFormat",
    "VersionParts",
    "compute_next_development_version",
    "compute_release_version",
    "is_development",
    "parse",
]

SNAPSHOT_SUFFIX = "-SNAPSHOT"

_MAJOR_MINOR_INCREMENTAL_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)(?:-(.+))?", re.DOTALL)
_MAJOR_MINOR_RE = re.compile(r"([0-9]+)\.([0-9]+)(?:-(.+))?", re.DOTALL)
_MAJOR_RE = re.compile(r"([0-9]+)(?:-(.+))?", re.DOTALL)
_NUMBER_RE = re.compile(r"[0-9]+")


class VersionFormat(Enum):
    MAJOR_ONLY = "major-only"
    MAJOR_MINOR = "major-and-minor"
    MAJOR_MINOR_INCREMENTAL = "major-minor-and-incremental"
    NOT_RECOGNIZED = "not-recognized"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VersionParts:
    """Parts of a version string.

    For ``NOT_RECOGNIZED`` versions ``major`` holds the raw string.
    """

    format: VersionFormat
    major: str
    minor: str | None = None
    incremental: str | None = None
    qualifier: str | None = None

    @property
    def is_recognized(self) -> bool:
        return self.format is not VersionFormat.NOT_RECOGNIZED


def parse(version: str) -> VersionParts:
    """Split a version into major/minor/incremental/qualifier.

    The most specific numeric shape that matches the whole string wins.
    """
    m = _MAJOR_MINOR_INCREMENTAL_RE.fullmatch(version)
    if m is not None:
        return VersionParts(
            format=VersionFormat.MAJOR_MINOR_INCREMENTAL,
            major=m.group(1),
            minor=m.group(2),
            incremental=m.group(3),
            qualifier=m.group(4),
        )

    m = _MAJOR_MINOR_RE.fullmatch(version)
    if m is not None:
        return VersionParts(
            format=VersionFormat.MAJOR_MINOR,
            major=m.group(1),
            minor=m.group(2),
            qualifier=m.group(3),
        )

    m = _MAJOR_RE.fullmatch(version)
    if m is not None:
        return VersionParts(format=VersionFormat.MAJOR_ONLY, major=m.group(1), qualifier=m.group(2))

    return VersionParts(format=VersionFormat.NOT_RECOGNIZED, major=version)


def is_development(version: str) -> bool:
    """True iff the version ends with ``-SNAPSHOT`` (case-sensitive)."""
    return version.endswith(SNAPSHOT_SUFFIX)


def compute_release_version(current: str, qualifier: str = "") -> str:
    """Drop ``-SNAPSHOT`` and append ``qualifier`` verbatim.

    >>> compute_release_version("1.0.116-SNAPSHOT", "-v2")
    '1.0.116-v2'
    """
    return current.replace(SNAPSHOT_SUFFIX, "", 1) + qualifier


def compute_next_development_version(version: str) -> Result[str, MalformedVersion]:
    """Increment the last dot-separated segment and mark it ``-SNAPSHOT``.

    >>> compute_next_development_version("1.0.116")
    Ok('1.0.117-SNAPSHOT')
    """
    *head, last = version.split(".")
    if _NUMBER_RE.fullmatch(last) is None:
        return Err(
            MalformedVersion(
                version=version,
                reason=f"last segment {last!r} is not an integer",
            )
        )
    bumped = f"{int(last) + 1}{SNAPSHOT_SUFFIX}"
    return Ok(".".join([*head, bumped]))
