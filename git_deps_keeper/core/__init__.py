"""Core orchestration for git-deps-keeper."""

from .dependency_keeper import DependencyKeeper

__all__ = ["DependencyKeeper"]
