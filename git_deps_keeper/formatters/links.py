"""URL formatting utilities."""

from typing import List, Optional

from git_deps_keeper.models.remote_project import RemoteProject


def normalize_repo_url(url: Optional[str]) -> Optional[str]:
    """
    Normalize a repository URL for display and comparison.

    Trailing slashes and a ``.git`` suffix are dropped.

    Example:
        "https://github.com/org/repo.git" -> "https://github.com/org/repo"
    """
    if not url or not url.strip():
        return None
    normalized = url.strip().rstrip("/")
    if normalized.lower().endswith(".git"):
        normalized = normalized[:-4]
    return normalized


def format_project_urls(project: RemoteProject) -> List[str]:
    """Web and clone URLs of a project without case-insensitive duplicates."""
    urls: List[str] = []
    for candidate in (project.web_url, project.clone_url):
        normalized = normalize_repo_url(candidate)
        if normalized and not any(u.lower() == normalized.lower() for u in urls):
            urls.append(normalized)
    return urls


def format_date(value: Optional[str]) -> str:
    """Date part of an ISO timestamp."""
    if not value:
        return ""
    return value.split("T", 1)[0]
