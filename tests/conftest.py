"""Pytest fixtures for git-deps-keeper tests"""
import tempfile
from pathlib import Path

import pytest
import git

from git_deps_keeper.services.git import GitRunner, RepoInspector
from git_deps_keeper.utils.paths import get_lib_root


def configure_user(repo: git.Repo) -> git.Repo:
    """Give a repository a committer identity."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
    return repo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def commit_file():
    """Return a helper that writes a file and commits it."""
    def _commit(repo: git.Repo, filename: str, content: str, message: str = None) -> str:
        path = Path(repo.working_dir) / filename
        path.write_text(content)
        repo.index.add([filename])
        commit = repo.index.commit(message or f"Update {filename}")
        return commit.hexsha
    return _commit


@pytest.fixture
def origin_repo(temp_dir, commit_file):
    """Create a bare repository with one commit on main.

    Returns:
        Path of the bare repository; usable as a clone URL
    """
    seed_path = temp_dir / "seed"
    seed_path.mkdir()
    seed = configure_user(git.Repo.init(seed_path))
    commit_file(seed, "README.md", "# Sample library\n", "Initial commit")
    seed.git.branch("-M", "main")

    bare_path = temp_dir / "sample-lib.git"
    seed.clone(str(bare_path), bare=True)
    seed.close()
    return str(bare_path)


@pytest.fixture
def make_clone(origin_repo, temp_dir):
    """Return a helper that clones the origin into temp_dir/<name>."""
    clones = []

    def _clone(name: str) -> git.Repo:
        repo = configure_user(git.Repo.clone_from(origin_repo, temp_dir / name))
        clones.append(repo)
        return repo

    yield _clone

    for repo in clones:
        repo.close()


@pytest.fixture
def push_commits(make_clone, commit_file):
    """Return a helper that publishes `count` new commits on main."""
    state = {"pusher": None, "n": 0}

    def _push(count: int = 1, branch: str = "main") -> git.Repo:
        if state["pusher"] is None:
            state["pusher"] = make_clone("pusher")
        pusher = state["pusher"]
        if pusher.active_branch.name != branch:
            if branch in [h.name for h in pusher.heads]:
                pusher.git.checkout(branch)
            else:
                pusher.git.checkout("-b", branch)
        for _ in range(count):
            state["n"] += 1
            commit_file(pusher, f"upstream_{state['n']}.txt", f"upstream {state['n']}\n")
        pusher.git.push("origin", branch)
        return pusher

    return _push


@pytest.fixture
def standalone_repo(temp_dir, commit_file):
    """Create a repository with one commit and no remotes."""
    repo = configure_user(git.Repo.init(temp_dir / "standalone"))
    commit_file(repo, "file.txt", "content\n", "Initial commit")
    yield repo
    repo.close()


@pytest.fixture
def inspector():
    """Inspector backed by the real git executable."""
    return RepoInspector(GitRunner(timeout=120))


@pytest.fixture
def project_root(temp_dir):
    """An empty project directory."""
    root = temp_dir / "project"
    root.mkdir()
    return root


@pytest.fixture
def lib_root(project_root):
    """Library root of project_root (not created)."""
    return get_lib_root(str(project_root))


@pytest.fixture
def mock_config(project_root):
    """Create a configuration dictionary."""
    return {
        "project_root": str(project_root),
        "verbose": False,
        "debug": False,
        "git_timeout": 120,
        "github_token": "test_token_for_testing",
        "github_api_url": "https://api.github.com",
        "per_page": 25,
    }
