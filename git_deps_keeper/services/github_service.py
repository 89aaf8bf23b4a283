"""Repository discovery through a GitHub-compatible API"""
import math
import os
from typing import List, Optional, TYPE_CHECKING, Union

from github import Auth, Github, GithubException

from git_deps_keeper.constants import SEARCH_RESULT_CAP, USER_AGENT
from git_deps_keeper.exceptions import GitHubAPIError
from git_deps_keeper.models.remote_project import RemoteProject, RepositoryPage
from git_deps_keeper.utils.paths import is_directory_empty, target_path_for
from git_deps_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from github.Repository import Repository
    from git_deps_keeper.config import Config

logger = get_logger(__name__)


def to_remote_project(repo: "Repository") -> RemoteProject:
    """Map a PyGithub repository onto the browser model."""
    updated_at = repo.updated_at.isoformat() if repo.updated_at else None
    return RemoteProject(
        id=repo.id,
        name=repo.name,
        full_name=repo.full_name,
        clone_url=repo.clone_url,
        web_url=repo.html_url,
        updated_at=updated_at,
    )


class GitHubService:
    """Lists and searches repositories that can be added as dependencies."""

    def __init__(self, config: Union['Config', dict]):
        """Initialize the service."""
        self.config = config
        self.github_token = config.get("github_token") or os.environ.get("GITHUB_TOKEN")
        self.base_url = (config.get("github_api_url") or "").rstrip("/")
        self.per_page = config.get("per_page", 25)
        self.timeout = config.get("http_timeout", 15)
        self.github: Optional[Github] = None

    def _client(self) -> Github:
        """Create the API client on first use."""
        if not self.base_url:
            raise GitHubAPIError("connect", "No API base URL configured")
        if not self.github_token:
            raise GitHubAPIError("connect", "No token configured (set GITHUB_TOKEN or pass --token)")
        if self.github is None:
            self.github = Github(
                auth=Auth.Token(self.github_token),
                base_url=self.base_url,
                timeout=self.timeout,
                user_agent=USER_AGENT,
                per_page=self.per_page,
            )
            logger.debug(f"[GitHub] Client created for {self.base_url}")
        return self.github

    def close(self) -> None:
        if self.github is not None:
            self.github.close()
            self.github = None

    def list_organizations(self) -> List[str]:
        """Organizations of the authenticated user; empty on any error."""
        if not self.github_token or not self.base_url:
            return []
        try:
            return [org.login for org in self._client().get_user().get_orgs() if org.login]
        except Exception as e:
            logger.debug(f"[GitHub] Failed to load organizations: {e}")
            return []

    def browse(self, search: str = "", org: str = "", page: int = 1, orgs_only: bool = False) -> RepositoryPage:
        """Fetch one page of repositories.

        Args:
            search: Free-text search; empty lists repositories instead
            org: Restrict to this organization
            page: 1-based page number
            orgs_only: When listing the user's repositories, only organization ones

        Returns:
            RepositoryPage with the projects and the total page count
        """
        client = self._client()
        page = max(1, page)
        search = (search or "").strip()
        org = (org or "").strip()

        try:
            if search:
                query = f"org:{org} {search}" if org else search
                listing = client.search_repositories(query=query, sort="updated", order="desc")
                total = min(max(0, listing.totalCount), SEARCH_RESULT_CAP)
            elif org:
                listing = client.get_organization(org).get_repos(type="all", sort="updated", direction="desc")
                total = listing.totalCount
            else:
                affiliation = "organization_member" if orgs_only else "owner,collaborator,organization_member"
                listing = client.get_user().get_repos(
                    visibility="all", affiliation=affiliation, sort="updated", direction="desc"
                )
                total = listing.totalCount

            total_pages = max(1, math.ceil(total / self.per_page))
            projects = [to_remote_project(repo) for repo in listing.get_page(page - 1)]
        except GithubException as e:
            message = e.data.get("message") if isinstance(e.data, dict) else None
            raise GitHubAPIError("browse", f"{e.status}: {message or e}") from e

        logger.debug(f"[GitHub] Page {page}/{total_pages}: {len(projects)} repositories")
        return RepositoryPage(projects=projects, page=page, total_pages=total_pages)


def is_installed(project: RemoteProject, root: str) -> bool:
    """Whether the project's folder already holds something."""
    if not project.clone_url:
        return False
    target = target_path_for(project.clone_url, root)
    try:
        return os.path.isdir(target) and not is_directory_empty(target)
    except OSError:
        return False
