"""Project descriptor access.

The descriptor is a Leiningen-style ``project.clj``. Only one shape is
relied upon:

    (defproject <name> "<version>" ...)

The version is located with a regular expression and replaced in place;
every other byte of the file is written back untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from relcycle.core.result import Err, Ok, Result
from relcycle.platform.files import atomic_write_text, read_text_exact
from relcycle.release.errors import DescriptorUnreadable, VersionNotFound

__all__ = [
    "DescriptorError",
    "Project",
    "read_project",
    "read_version",
    "replace_version",
]

_HEADER = r"\(defproject"
_VERSION_RE = re.compile(_HEADER + r"\s+(\S+?)\s+\"([^\"]+?)\"")
_TARGET_RE = re.compile(r":target-(?:path|dir)\s+\"([^\"]+)\"")
_REPOSITORIES_RE = re.compile(r":(?:deploy-)?repositories(?=[\s\])}])")
_PROFILE_PLACEHOLDER = "%s"

DescriptorError = VersionNotFound | DescriptorUnreadable


@dataclass(frozen=True, slots=True)
class Project:
    """Fields of the descriptor that a release needs.

    Attributes:
        name: Artifact name (the part after ``/`` for ``group/artifact``).
        version: Version string as written in the descriptor.
        target_dir: Directory holding built artifacts, relative to the root.
        has_repositories: The descriptor declares deploy repositories.
        descriptor: Path of the descriptor file.
    """

    name: str
    version: str
    target_dir: str
    has_repositories: bool
    descriptor: Path

    def artifact_path(self, root: Path, release_version: str) -> Path:
        return root / self.target_dir / f"{self.name}-{release_version}.jar"


def _read(path: Path) -> Result[str, DescriptorUnreadable]:
    try:
        return Ok(read_text_exact(path))
    except OSError as e:
        return Err(DescriptorUnreadable(path=path, reason=e.strerror or str(e)))
    except UnicodeDecodeError as e:
        return Err(DescriptorUnreadable(path=path, reason=f"not valid UTF-8: {e}"))


def read_version(path: Path) -> Result[str, DescriptorError]:
    """Return the version declared right after ``(defproject <name>``."""
    text = _read(path)
    if isinstance(text, Err):
        return text

    m = _VERSION_RE.search(text.value)
    if m is None:
        return Err(VersionNotFound(path=path))
    return Ok(m.group(2))


def replace_version(path: Path, old: str, new: str) -> Result[None, DescriptorError]:
    """Replace the declared version ``old`` with ``new``.

    Only the first quoted ``old`` directly following the declaration header
    and name is rewritten. Fails with VersionNotFound when ``old`` is not
    the declared version.
    """
    text = _read(path)
    if isinstance(text, Err):
        return text

    pattern = re.compile(r"(" + _HEADER + r"\s+\S+?\s+)\"" + re.escape(old) + "\"")
    m = pattern.search(text.value)
    if m is None:
        return Err(VersionNotFound(path=path, version=old))

    content = text.value
    updated = content[: m.end(1)] + f'"{new}"' + content[m.end() :]
    try:
        atomic_write_text(path, updated)
    except OSError as e:
        return Err(DescriptorUnreadable(path=path, reason=e.strerror or str(e)))
    return Ok(None)


def read_project(path: Path) -> Result[Project, DescriptorError]:
    """Read name, version, target directory and repository presence."""
    text = _read(path)
    if isinstance(text, Err):
        return text

    content = text.value
    m = _VERSION_RE.search(content)
    if m is None:
        return Err(VersionNotFound(path=path))

    name = m.group(1).rsplit("/", 1)[-1]
    target = _TARGET_RE.search(content)
    target_dir = _resolve_target_dir(target.group(1)) if target else "."

    return Ok(
        Project(
            name=name,
            version=m.group(2),
            target_dir=target_dir,
            has_repositories=_REPOSITORIES_RE.search(content) is not None,
            descriptor=path,
        )
    )


def _resolve_target_dir(raw: str) -> str:
    # Leiningen fills %s with the active profiles; a release jar is built
    # with only the default ones, which leave no path segment.
    return str(Path(raw.replace(_PROFILE_PLACEHOLDER, "")))
