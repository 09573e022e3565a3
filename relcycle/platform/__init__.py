"""Process execution and filesystem helpers."""

from .files import atomic_write_text
from .process import CommandFailed, CommandOutput, Runner, run

__all__ = [
    "CommandFailed",
    "CommandOutput",
    "Runner",
    "atomic_write_text",
    "run",
]
