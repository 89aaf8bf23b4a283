"""Utility functions for git-deps-keeper.

This package provides utility modules:
- paths: Library root, manifest location and folder naming
"""

from .paths import (
    guess_folder_from_url,
    target_path_for,
    is_git_repo,
    is_directory_empty,
    get_lib_root,
    get_existing_lib_root,
    get_manifest_path,
)

__all__ = [
    "guess_folder_from_url",
    "target_path_for",
    "is_git_repo",
    "is_directory_empty",
    "get_lib_root",
    "get_existing_lib_root",
    "get_manifest_path",
]
