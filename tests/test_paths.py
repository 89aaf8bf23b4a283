"""Tests for path helpers"""
import pytest

from git_deps_keeper.utils.paths import (
    get_existing_lib_root,
    get_lib_root,
    get_manifest_path,
    guess_folder_from_url,
    is_directory_empty,
    is_git_repo,
    target_path_for,
)


class TestGuessFolderFromUrl:
    """Test folder name derivation."""

    @pytest.mark.parametrize("url, expected", [
        ("https://example.com/org/repo.git", "repo"),
        ("https://example.com/org/repo", "repo"),
        ("https://example.com/org/repo.git/", "repo"),
        ("git@github.com:org/My.Lib.GIT", "My.Lib"),
        ("  https://example.com/org/spaced.git  ", "spaced"),
        ("/srv/git/local-lib.git", "local-lib"),
    ])
    def test_last_segment_without_suffix(self, url, expected):
        assert guess_folder_from_url(url) == expected

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_blank_url(self, url):
        assert guess_folder_from_url(url) == ""

    def test_only_trailing_suffix_removed(self):
        assert guess_folder_from_url("https://example.com/org/repo.github") == "repo.github"


class TestLayout:
    """Test library root and target paths."""

    def test_target_path_for(self):
        assert target_path_for("https://example.com/org/repo.git", "/project/libs") == "/project/libs/repo"

    def test_lib_root_and_manifest(self, project_root):
        root = get_lib_root(str(project_root))
        assert root.endswith("Assets/External/Lib")
        assert get_manifest_path(str(project_root)) == f"{root}/required_gits.json"

    def test_existing_lib_root(self, project_root):
        assert get_existing_lib_root(str(project_root)) is None
        (project_root / "Assets" / "External" / "Lib").mkdir(parents=True)
        assert get_existing_lib_root(str(project_root)) == get_lib_root(str(project_root))


class TestDirectoryChecks:
    """Test repository and emptiness checks."""

    def test_is_git_repo(self, make_clone, temp_dir):
        repo = make_clone("checked")
        assert is_git_repo(repo.working_dir) is True
        assert is_git_repo(str(temp_dir)) is False

    def test_git_file_counts_as_repository(self, temp_dir):
        """Test worktree-style .git files."""
        (temp_dir / ".git").write_text("gitdir: /elsewhere\n")
        assert is_git_repo(str(temp_dir)) is True

    def test_is_directory_empty(self, temp_dir):
        assert is_directory_empty(str(temp_dir)) is True
        (temp_dir / "file.txt").write_text("x")
        assert is_directory_empty(str(temp_dir)) is False
