"""Repository listing models for the server browser."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RemoteProject:
    """A repository offered by the hosting API."""

    id: int
    name: str
    full_name: Optional[str] = None
    clone_url: Optional[str] = None
    web_url: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def title(self) -> str:
        return self.full_name or self.name or f"#{self.id}"


@dataclass
class RepositoryPage:
    """One page of browse results."""

    projects: List[RemoteProject] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1

    @property
    def status(self) -> str:
        return f"Found: {len(self.projects)} (page {self.page}/{self.total_pages})"
