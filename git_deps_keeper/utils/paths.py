"""Path helpers for the external library layout."""

import os
from typing import Optional

from git_deps_keeper.constants import GIT_DIR_NAME, LIB_ROOT_RELATIVE, MANIFEST_FILE_NAME


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def guess_folder_from_url(url: Optional[str]) -> str:
    """Folder name a dependency is installed under.

    Last path segment of the URL with a trailing ``.git`` removed;
    a trailing slash is tolerated.

    Example:
        "https://example.com/org/repo.git" -> "repo"
    """
    if not url or not url.strip():
        return ""
    last = url.strip().rstrip("/").split("/")[-1]
    if last.lower().endswith(".git"):
        last = last[:-4]
    return last


def target_path_for(url: str, root: str) -> str:
    """Install location of url under root."""
    return _normalize(os.path.join(root, guess_folder_from_url(url)))


def is_git_repo(path: str) -> bool:
    """Whether path holds a repository marker."""
    return os.path.exists(os.path.join(path, GIT_DIR_NAME))


def is_directory_empty(path: str) -> bool:
    with os.scandir(path) as entries:
        return next(entries, None) is None


def get_lib_root(project_root: str) -> str:
    """Preferred external library root, whether or not it exists."""
    return _normalize(os.path.join(project_root, LIB_ROOT_RELATIVE))


def get_existing_lib_root(project_root: str) -> Optional[str]:
    root = get_lib_root(project_root)
    return root if os.path.isdir(root) else None


def get_manifest_path(project_root: str) -> str:
    return _normalize(os.path.join(get_lib_root(project_root), MANIFEST_FILE_NAME))
