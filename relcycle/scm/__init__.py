"""Source control operations.

Usage:
    from relcycle.scm import ScmAdapter, select_backend

    match select_backend(root, config):
        case Ok(backend):
            scm = ScmAdapter(backend, root)
            scm.stage("project.clj")
        case Err(e):
            ...
"""

from relcycle.scm.adapter import ScmAdapter, ScmError
from relcycle.scm.backends import (
    BACKENDS,
    GitBackend,
    ScmBackend,
    ScmOperation,
    select_backend,
)

__all__ = [
    "BACKENDS",
    "GitBackend",
    "ScmAdapter",
    "ScmBackend",
    "ScmError",
    "ScmOperation",
    "select_backend",
]
