"""Update state formatting utilities."""

from typing import Optional

from git_deps_keeper.constants import (
    SYMBOL_CLEAN,
    SYMBOL_DIRTY,
    DependencyStyleType,
)
from git_deps_keeper.models.dependency import DependencyRecord, UpdateState

STATE_LABELS = {
    UpdateState.UP_TO_DATE: "up to date",
    UpdateState.BEHIND: "updates available",
    UpdateState.AHEAD: "local commits",
    UpdateState.DIVERGED: "diverged",
    UpdateState.UNKNOWN: "unknown",
}


def format_update_state(state: UpdateState, details: Optional[str] = None) -> str:
    """
    Format an update state with optional ahead/behind counts.

    Example:
        format_update_state(UpdateState.BEHIND, "+0/-3") -> "updates available (+0/-3)"
    """
    label = STATE_LABELS.get(state, state.value)
    return f"{label} ({details})" if details else label


def format_record_state(record: DependencyRecord) -> str:
    """State column text, covering missing and foreign folders."""
    if not record.exists:
        return "not installed"
    if not record.is_repository:
        return "not a git repository"
    return format_update_state(record.update_state, record.details)


def format_changes(record: DependencyRecord) -> str:
    if not record.is_repository:
        return ""
    return SYMBOL_DIRTY if record.has_local_changes else SYMBOL_CLEAN


def format_branch_counts(record: DependencyRecord) -> str:
    if not record.is_repository:
        return ""
    return f"{len(record.local_branches)}/{len(record.remote_branches)}"


def get_record_style_type(record: DependencyRecord) -> str:
    """Determine the style type for a dependency row."""
    if not record.is_repository:
        return DependencyStyleType.MISSING
    if record.update_state.is_outdated:
        return DependencyStyleType.OUTDATED
    if record.update_state == UpdateState.AHEAD:
        return DependencyStyleType.LOCAL
    if record.update_state == UpdateState.UP_TO_DATE:
        return DependencyStyleType.OK
    return DependencyStyleType.UNKNOWN
