"""Result type for explicit error handling.

Every fallible step of a release returns either ``Ok(value)`` or
``Err(error)`` instead of raising. Callers branch with ``isinstance`` or
pattern matching:

    match read_version(path):
        case Ok(version):
            console.print(version)
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
