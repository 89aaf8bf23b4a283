"""Shared constants for git-deps-keeper."""

from dataclasses import dataclass
from typing import List


# Layout of a project's external libraries
LIB_ROOT_RELATIVE = "Assets/External/Lib"
MANIFEST_FILE_NAME = "required_gits.json"
GIT_DIR_NAME = ".git"

# Git invocation
DEFAULT_GIT_EXECUTABLE = "git"
DEFAULT_GIT_TIMEOUT = 10 * 60  # seconds
TIMEOUT_OUTPUT = "[Git] Timeout"
EXCEPTION_PREFIX = "[Git] Exception: "

# Upstream fallback when a branch has no tracking ref configured
DEFAULT_UPSTREAM_REMOTE = "origin"
DETACHED_HEAD = "HEAD"

# Repository browser
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_HTTP_TIMEOUT = 15  # seconds
DEFAULT_PER_PAGE = 25
SEARCH_RESULT_CAP = 1000
USER_AGENT = "git-deps-keeper"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Unified column definitions for both CLI and TUI
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "Dependency", 24),
    ColumnDefinition("state", "State", 22),
    ColumnDefinition("branch", "Branch", 18),
    ColumnDefinition("changes", "Changes", 8),
    ColumnDefinition("branches", "Branches", 10),
    ColumnDefinition("url", "URL", 0),
]

BROWSER_COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "Repository", 30),
    ColumnDefinition("updated", "Updated", 12),
    ColumnDefinition("installed", "Local", 6),
    ColumnDefinition("url", "URL", 0),
]


# Symbol constants
SYMBOL_CLEAN = "✓"
SYMBOL_DIRTY = "M"
SYMBOL_INSTALLED = "✓"
SYMBOL_NOT_INSTALLED = " "


class DependencyStyleType:
    """Style types for dependency rows."""

    OK = "ok"
    OUTDATED = "outdated"
    LOCAL = "local"
    MISSING = "missing"
    UNKNOWN = "unknown"


# CLI colors (Rich color names)
CLI_COLORS = {
    DependencyStyleType.OK: None,
    DependencyStyleType.OUTDATED: "yellow",
    DependencyStyleType.LOCAL: "cyan",
    DependencyStyleType.MISSING: "red",
    DependencyStyleType.UNKNOWN: "dim",
}

# TUI colors (color names for Textual)
TUI_COLORS = {
    DependencyStyleType.OK: "green",
    DependencyStyleType.OUTDATED: "yellow",
    DependencyStyleType.LOCAL: "cyan",
    DependencyStyleType.MISSING: "red",
    DependencyStyleType.UNKNOWN: "grey50",
}


LEGEND_TEXT = """
Legend:
✓ = No local changes      M = Uncommitted local changes
+a/-b = commits only on local branch / only on upstream

Colors:
Yellow = Updates available (fast-forward with 'update')
Cyan = Local commits not pushed
Red = Not installed or not a git repository
"""
