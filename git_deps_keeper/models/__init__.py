"""Data models for git-deps-keeper."""
