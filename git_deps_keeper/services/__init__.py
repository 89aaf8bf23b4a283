"""Service layer for git-deps-keeper."""
