"""Dependency model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional


class UpdateState(Enum):
    """Position of a dependency's HEAD relative to its upstream."""
    UP_TO_DATE = "up-to-date"
    BEHIND = "behind"
    AHEAD = "ahead"
    DIVERGED = "diverged"
    UNKNOWN = "unknown"

    @property
    def is_outdated(self) -> bool:
        """Whether a fast-forward update may bring in upstream commits."""
        return self in (UpdateState.BEHIND, UpdateState.DIVERGED)


@dataclass
class DependencyRecord:
    """State of one manifest entry, rebuilt on every reconciliation pass."""
    url: str
    target_path: str
    exists: bool = False
    is_repository: bool = False
    update_state: UpdateState = UpdateState.UNKNOWN
    details: Optional[str] = None  # e.g. "+2/-1"
    current_branch: Optional[str] = None
    local_branches: List[str] = field(default_factory=list)
    remote_branches: List[str] = field(default_factory=list)
    has_local_changes: bool = False

    @property
    def name(self) -> str:
        """Folder name of the dependency."""
        return self.target_path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def is_outdated(self) -> bool:
        return self.is_repository and self.update_state.is_outdated


@dataclass
class DependencyReport:
    """Result of a full reconciliation pass."""
    records: Dict[str, DependencyRecord] = field(default_factory=dict)
    any_outdated: bool = False

    def outdated(self) -> List[DependencyRecord]:
        return [record for record in self.records.values() if record.is_outdated]


@dataclass
class InstallSummary:
    """Counters for a bulk install; every URL lands in exactly one."""
    installed: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.installed + self.skipped + self.errors


@dataclass
class UpdateSummary:
    """Counters for a bulk fast-forward update."""
    succeeded: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.failed
