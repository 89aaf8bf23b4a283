"""Configuration handling for git-deps-keeper"""

import os
from dataclasses import dataclass, field
from typing import Optional

from git_deps_keeper.constants import (
    DEFAULT_GIT_EXECUTABLE,
    DEFAULT_GIT_TIMEOUT,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_PER_PAGE,
)


@dataclass
class Config:
    """Configuration for git-deps-keeper with validation."""

    # Project layout
    project_root: str = field(default_factory=os.getcwd)

    # Git invocation
    git_executable: str = DEFAULT_GIT_EXECUTABLE
    git_timeout: float = DEFAULT_GIT_TIMEOUT

    # Execution modes
    verbose: bool = False
    debug: bool = False

    # Repository browser
    github_token: Optional[str] = None
    github_api_url: str = DEFAULT_GITHUB_API_URL
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    per_page: int = DEFAULT_PER_PAGE
    orgs_only: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_project_root()
        self._validate_git_executable()
        self._validate_git_timeout()
        self._validate_http_timeout()
        self._validate_per_page()
        self._validate_github_api_url()
        if not self.github_token:
            self.github_token = os.environ.get("GITHUB_TOKEN") or None

    def _validate_project_root(self):
        """Validate project_root is set and normalize it."""
        if not self.project_root or not str(self.project_root).strip():
            raise ValueError("project_root cannot be empty")
        self.project_root = os.path.abspath(str(self.project_root).strip())

    def _validate_git_executable(self):
        """Validate git_executable is not empty."""
        if not self.git_executable or not self.git_executable.strip():
            raise ValueError("git_executable cannot be empty")
        self.git_executable = self.git_executable.strip()

    def _validate_git_timeout(self):
        """Validate git_timeout is positive."""
        if self.git_timeout <= 0:
            raise ValueError(f"git_timeout must be positive, got {self.git_timeout}")

    def _validate_http_timeout(self):
        """Validate http_timeout is positive."""
        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be positive, got {self.http_timeout}")

    def _validate_per_page(self):
        """Validate per_page fits the API limits."""
        if not 1 <= self.per_page <= 100:
            raise ValueError(f"per_page must be between 1 and 100, got {self.per_page}")

    def _validate_github_api_url(self):
        """Strip trailing slashes from the API base URL."""
        self.github_api_url = (self.github_api_url or "").strip().rstrip("/")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "project_root": self.project_root,
            "git_executable": self.git_executable,
            "git_timeout": self.git_timeout,
            "verbose": self.verbose,
            "debug": self.debug,
            "github_token": self.github_token,
            "github_api_url": self.github_api_url,
            "http_timeout": self.http_timeout,
            "per_page": self.per_page,
            "orgs_only": self.orgs_only,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "project_root",
            "git_executable",
            "git_timeout",
            "verbose",
            "debug",
            "github_token",
            "github_api_url",
            "http_timeout",
            "per_page",
            "orgs_only",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
