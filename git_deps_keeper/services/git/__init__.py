"""Git-related services for git-deps-keeper."""

from .runner import GitRunner, GitResult
from .inspector import RepoInspector

__all__ = [
    "GitRunner",
    "GitResult",
    "RepoInspector",
]
