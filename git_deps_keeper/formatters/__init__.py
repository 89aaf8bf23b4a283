"""Shared formatting utilities for CLI and TUI display.

This package provides consistent formatting functions used by both
the CLI (Rich tables) and TUI (Textual DataTable) interfaces.
"""

from .status import (
    STATE_LABELS,
    format_update_state,
    format_record_state,
    format_changes,
    format_branch_counts,
    get_record_style_type,
)
from .links import (
    normalize_repo_url,
    format_project_urls,
    format_date,
)

__all__ = [
    "STATE_LABELS",
    "format_update_state",
    "format_record_state",
    "format_changes",
    "format_branch_counts",
    "get_record_style_type",
    "normalize_repo_url",
    "format_project_urls",
    "format_date",
]
