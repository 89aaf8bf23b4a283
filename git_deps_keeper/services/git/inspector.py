"""Repository state inspection built on git's text output"""

import os
from typing import Iterable, List, Optional, Tuple

from git_deps_keeper.constants import DEFAULT_UPSTREAM_REMOTE, DETACHED_HEAD
from git_deps_keeper.models.dependency import UpdateState
from git_deps_keeper.services.git.runner import GitResult, GitRunner, first_non_empty_line
from git_deps_keeper.logging_config import get_logger

logger = get_logger(__name__)

REF_FORMAT = "--format=%(refname:short)"


def _clean_ref_lines(output: Optional[str]) -> List[str]:
    """Split ref listing output into trimmed, non-empty names."""
    names = []
    for line in (output or "").split("\n"):
        name = line.strip().strip("\r").strip('"')
        if name:
            names.append(name)
    return names


def _distinct_sorted(names: Iterable[str]) -> List[str]:
    """Ordinal de-duplication, then a stable case-insensitive sort."""
    return sorted(dict.fromkeys(names), key=str.lower)


def _parse_left_right(line: Optional[str]) -> Tuple[int, int]:
    """Parse ``rev-list --left-right --count`` output; bad input reads as 0."""
    parts = (line or "").split()
    if len(parts) < 2:
        return 0, 0
    try:
        ahead = int(parts[0])
    except ValueError:
        ahead = 0
    try:
        behind = int(parts[1])
    except ValueError:
        behind = 0
    return ahead, behind


class RepoInspector:
    """Answers questions about a working copy by running git in it."""

    def __init__(self, runner: Optional[GitRunner] = None):
        self.runner = runner or GitRunner()

    def _run(self, repo_dir: str, *args: str) -> GitResult:
        return self.runner.run(list(args), repo_dir)

    def has_local_changes(self, repo_dir: str) -> bool:
        """Check for uncommitted changes.

        Fails closed: if the status query itself fails the repository is
        reported as dirty so nothing destructive runs against it.
        """
        success, output = self._run(repo_dir, "status", "--porcelain")
        if not success:
            logger.debug(f"Status check failed in {repo_dir}, assuming local changes")
            return True
        return first_non_empty_line(output) is not None

    def get_update_state(self, repo_dir: str, fetch_first: bool = True) -> Tuple[UpdateState, Optional[str]]:
        """Compare HEAD with its upstream.

        Args:
            repo_dir: Working copy to inspect
            fetch_first: Fetch all remotes (with prune) before comparing

        Returns:
            Tuple of (state, details) where details looks like "+2/-1"
        """
        if fetch_first:
            # Fetch failures (offline, auth) still allow a local comparison
            self.fetch_all(repo_dir)

        success, output = self._run(repo_dir, "rev-parse", "HEAD")
        head = first_non_empty_line(output) if success else None
        if not head:
            return UpdateState.UNKNOWN, None

        upstream_ref = self._resolve_upstream_ref(repo_dir)
        if not upstream_ref:
            return UpdateState.UNKNOWN, None

        success, output = self._run(repo_dir, "rev-parse", upstream_ref)
        upstream = first_non_empty_line(output) if success else None
        if not upstream:
            return UpdateState.UNKNOWN, None

        if head.lower() == upstream.lower():
            return UpdateState.UP_TO_DATE, None

        success, output = self._run(repo_dir, "rev-list", "--left-right", "--count", f"HEAD...{upstream_ref}")
        if not success:
            return UpdateState.UNKNOWN, None

        ahead, behind = _parse_left_right(first_non_empty_line(output))
        details = f"+{ahead}/-{behind}"
        if ahead > 0 and behind > 0:
            return UpdateState.DIVERGED, details
        if behind > 0:
            return UpdateState.BEHIND, details
        if ahead > 0:
            return UpdateState.AHEAD, details
        return UpdateState.UNKNOWN, details

    def _resolve_upstream_ref(self, repo_dir: str) -> Optional[str]:
        """Configured tracking ref, else origin/<current branch>."""
        success, output = self._run(repo_dir, "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")
        upstream_ref = first_non_empty_line(output) if success else None
        if upstream_ref:
            return upstream_ref

        success, output = self._run(repo_dir, "rev-parse", "--abbrev-ref", "HEAD")
        if not success:
            return None
        branch = first_non_empty_line(output)
        if not branch or branch == DETACHED_HEAD:
            return None
        return f"{DEFAULT_UPSTREAM_REMOTE}/{branch}"

    def get_current_branch(self, repo_dir: str) -> Optional[str]:
        """Current branch name; "HEAD" when detached, None if unresolvable."""
        success, output = self._run(repo_dir, "symbolic-ref", "--short", "HEAD")
        if not success:
            success, output = self._run(repo_dir, "rev-parse", "--abbrev-ref", "HEAD")
            if not success:
                return None
        return first_non_empty_line(output)

    def get_local_branches(self, repo_dir: str) -> Tuple[List[str], Optional[str]]:
        """Local branch names sorted case-insensitively, plus the current branch."""
        current = self.get_current_branch(repo_dir)
        success, output = self._run(repo_dir, "for-each-ref", REF_FORMAT, "refs/heads")
        if not success:
            return [], current
        return _distinct_sorted(_clean_ref_lines(output)), current

    def get_remotes(self, repo_dir: str) -> List[str]:
        """Names of the configured remotes."""
        success, output = self._run(repo_dir, "remote")
        if not success:
            return []
        return list(dict.fromkeys(_clean_ref_lines(output)))

    def get_remote_branches(self, repo_dir: str) -> List[str]:
        """Remote-tracking branches under configured remotes.

        Does not fetch. Refs left behind by removed remotes and symbolic
        ``<remote>/HEAD`` pointers are excluded.
        """
        remotes = set(self.get_remotes(repo_dir))
        if not remotes:
            return []

        success, output = self._run(repo_dir, "for-each-ref", REF_FORMAT, "refs/remotes")
        if not success:
            return []

        branches = []
        for name in _clean_ref_lines(output):
            if name.lower().endswith("/head"):
                continue
            idx = name.find("/")
            if idx <= 0 or name[:idx] not in remotes:
                continue
            branches.append(name)
        return _distinct_sorted(branches)

    def switch_branch(self, repo_dir: str, branch: str) -> bool:
        """Check out an existing local branch; refused with local changes."""
        if self.has_local_changes(repo_dir):
            logger.info(f"Not switching {repo_dir} to {branch}: local changes present")
            return False
        return self._run(repo_dir, "checkout", branch).success

    def create_tracking_branch(self, repo_dir: str, local_branch: str, remote_branch: str) -> bool:
        """Create local_branch tracking remote_branch and check it out."""
        if self.has_local_changes(repo_dir):
            logger.info(f"Not creating {local_branch} in {repo_dir}: local changes present")
            return False
        return self._run(repo_dir, "checkout", "-b", local_branch, "--track", remote_branch).success

    def delete_local_branch(self, repo_dir: str, branch: str, force: bool = False) -> bool:
        """Delete a local branch other than the checked-out one."""
        _, current = self.get_local_branches(repo_dir)
        if current == branch:
            logger.info(f"Cannot delete current branch {branch} in {repo_dir}")
            return False
        return self._run(repo_dir, "branch", "-D" if force else "-d", branch).success

    def delete_remote_branch(self, repo_dir: str, remote_branch: str) -> bool:
        """Delete a branch on its remote, given as "remote/branch"."""
        remote, sep, name = (remote_branch or "").partition("/")
        if not sep or not remote or not name:
            return False
        return self._run(repo_dir, "push", remote, "--delete", name).success

    def fetch_all(self, repo_dir: str) -> GitResult:
        """Fetch every remote and prune deleted branches."""
        return self._run(repo_dir, "fetch", "--all", "--prune")

    def prune_remotes(self, repo_dir: str) -> bool:
        """Fetch with prune remote by remote; falls back to --all."""
        remotes = self.get_remotes(repo_dir)
        if not remotes:
            return self.fetch_all(repo_dir).success

        ok = True
        for remote in remotes:
            if not self._run(repo_dir, "fetch", remote, "--prune").success:
                ok = False
        return ok

    def pull_fast_forward(self, repo_dir: str) -> GitResult:
        """Fast-forward the current branch; fails rather than merging."""
        return self._run(repo_dir, "pull", "--ff-only")

    def clone(self, url: str, target: str) -> GitResult:
        """Clone url into target.

        An existing (empty) target is cloned into in place, otherwise the
        clone runs from the parent directory and creates target.
        """
        if os.path.isdir(target):
            return self._run(target, "clone", url, ".")
        parent = os.path.dirname(os.path.abspath(target))
        return self._run(parent, "clone", url, target)
