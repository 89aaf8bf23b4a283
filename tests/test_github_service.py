"""Tests for GitHubService"""
from datetime import datetime, timezone
from unittest.mock import MagicMock, Mock, patch

import pytest
from github import GithubException

from git_deps_keeper.exceptions import GitHubAPIError
from git_deps_keeper.models.remote_project import RemoteProject
from git_deps_keeper.services.github_service import GitHubService, is_installed, to_remote_project


def make_repo(repo_id=1, name="lib", owner="org"):
    repo = Mock()
    repo.id = repo_id
    repo.name = name
    repo.full_name = f"{owner}/{name}"
    repo.clone_url = f"https://github.com/{owner}/{name}.git"
    repo.html_url = f"https://github.com/{owner}/{name}"
    repo.updated_at = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    return repo


def make_listing(repos, total):
    listing = MagicMock()
    listing.totalCount = total
    listing.get_page.return_value = repos
    return listing


class TestGitHubServiceInit:
    """Test GitHubService initialization."""

    def test_init_with_token_from_config(self, mock_config):
        service = GitHubService(mock_config)
        assert service.github_token == "test_token_for_testing"
        assert service.base_url == "https://api.github.com"

    @patch.dict('os.environ', {'GITHUB_TOKEN': 'env_token'})
    def test_init_with_token_from_env(self, mock_config):
        mock_config['github_token'] = None
        service = GitHubService(mock_config)
        assert service.github_token == "env_token"

    def test_browse_without_token(self, mock_config, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        mock_config['github_token'] = None
        service = GitHubService(mock_config)

        with pytest.raises(GitHubAPIError):
            service.browse()
        assert service.list_organizations() == []

    def test_browse_without_base_url(self, mock_config):
        mock_config['github_api_url'] = ""
        with pytest.raises(GitHubAPIError):
            GitHubService(mock_config).browse()

    def test_client_created_once(self, mock_config):
        service = GitHubService(mock_config)
        with patch('git_deps_keeper.services.github_service.Github') as mock_github_class:
            assert service._client() is service._client()
            assert mock_github_class.call_count == 1
            _, kwargs = mock_github_class.call_args
            assert kwargs["base_url"] == "https://api.github.com"
            assert kwargs["per_page"] == 25

            service.close()
            mock_github_class.return_value.close.assert_called_once()
            assert service.github is None


class TestGitHubServiceBrowse:
    """Test repository listing and search."""

    @pytest.fixture
    def client(self):
        with patch('git_deps_keeper.services.github_service.Github') as mock_github_class:
            yield mock_github_class.return_value

    def test_search_with_org(self, mock_config, client):
        client.search_repositories.return_value = make_listing([make_repo()], total=60)

        page = GitHubService(mock_config).browse(search="tools", org="acme", page=2)

        client.search_repositories.assert_called_once_with(query="org:acme tools", sort="updated", order="desc")
        client.search_repositories.return_value.get_page.assert_called_once_with(1)
        assert page.page == 2
        assert page.total_pages == 3
        assert page.status == "Found: 1 (page 2/3)"

    def test_search_total_is_capped(self, mock_config, client):
        client.search_repositories.return_value = make_listing([], total=50000)

        page = GitHubService(mock_config).browse(search="lib")

        assert page.total_pages == 40
        assert page.projects == []

    def test_org_listing(self, mock_config, client):
        org = client.get_organization.return_value
        org.get_repos.return_value = make_listing([make_repo(1, "a"), make_repo(2, "b")], total=2)

        page = GitHubService(mock_config).browse(org="acme")

        client.get_organization.assert_called_once_with("acme")
        assert [p.name for p in page.projects] == ["a", "b"]
        assert page.total_pages == 1

    def test_user_listing_orgs_only(self, mock_config, client):
        user = client.get_user.return_value
        user.get_repos.return_value = make_listing([], total=0)

        page = GitHubService(mock_config).browse(orgs_only=True)

        _, kwargs = user.get_repos.call_args
        assert kwargs["affiliation"] == "organization_member"
        assert page.total_pages == 1

    def test_page_clamped_to_one(self, mock_config, client):
        client.get_user.return_value.get_repos.return_value = make_listing([], total=0)

        page = GitHubService(mock_config).browse(page=0)

        assert page.page == 1

    def test_api_error(self, mock_config, client):
        client.search_repositories.side_effect = GithubException(403, {"message": "rate limited"}, None)

        with pytest.raises(GitHubAPIError) as exc_info:
            GitHubService(mock_config).browse(search="x")
        assert "403" in str(exc_info.value)
        assert "rate limited" in str(exc_info.value)

    def test_list_organizations(self, mock_config, client):
        orgs = [Mock(login="acme"), Mock(login="tools")]
        client.get_user.return_value.get_orgs.return_value = orgs

        assert GitHubService(mock_config).list_organizations() == ["acme", "tools"]

    def test_list_organizations_error(self, mock_config, client):
        client.get_user.side_effect = GithubException(500, {"message": "boom"}, None)

        assert GitHubService(mock_config).list_organizations() == []


class TestProjectMapping:
    """Test mapping API repositories onto RemoteProject."""

    def test_to_remote_project(self):
        project = to_remote_project(make_repo(7, "lib", "acme"))

        assert project.id == 7
        assert project.title == "acme/lib"
        assert project.web_url == "https://github.com/acme/lib"
        assert project.updated_at.startswith("2024-05-01")

    def test_is_installed(self, temp_dir):
        project = RemoteProject(id=1, name="lib", clone_url="https://github.com/acme/lib.git")
        assert is_installed(project, str(temp_dir)) is False

        (temp_dir / "lib").mkdir()
        assert is_installed(project, str(temp_dir)) is False

        (temp_dir / "lib" / "README.md").write_text("x")
        assert is_installed(project, str(temp_dir)) is True

    def test_is_installed_without_clone_url(self, temp_dir):
        assert is_installed(RemoteProject(id=1, name="lib"), str(temp_dir)) is False
