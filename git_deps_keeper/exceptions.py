"""Custom exceptions for git-deps-keeper"""

from typing import Optional


class GitDepsKeeperError(Exception):
    """Base exception for all git-deps-keeper errors."""
    pass


class GitHubAPIError(GitDepsKeeperError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ManifestError(GitDepsKeeperError):
    """Exception raised when the dependency manifest cannot be written."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Cannot write manifest '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class DependencyNotFoundError(GitDepsKeeperError):
    """Exception raised when a name or URL matches no manifest entry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Dependency '{name}' is not listed in the manifest")
