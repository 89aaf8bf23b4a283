"""Reconciliation of the manifest against installed working copies."""
import os
import shutil
import sys
from typing import Iterable, List, Optional, Tuple

from git_deps_keeper.models.dependency import (
    DependencyRecord,
    DependencyReport,
    InstallSummary,
    UpdateSummary,
)
from git_deps_keeper.services.git import GitResult, RepoInspector
from git_deps_keeper.services.manifest_service import ManifestService
from git_deps_keeper.utils.paths import (
    guess_folder_from_url,
    is_directory_empty,
    is_git_repo,
    target_path_for,
)
from git_deps_keeper.logging_config import get_logger

logger = get_logger(__name__)


class DependencyService:
    """Builds per-dependency state and runs bulk install/update operations.

    Every pass is a full rebuild; per-item git failures are logged and
    counted, never raised.
    """

    def __init__(self, inspector: Optional[RepoInspector] = None):
        self.inspector = inspector or RepoInspector()

    def inspect(self, url: str, root: str, lightweight: bool = True) -> DependencyRecord:
        """Build the record of a single dependency."""
        target = target_path_for(url, root)
        record = DependencyRecord(url=url, target_path=target, exists=os.path.isdir(target))
        record.is_repository = record.exists and is_git_repo(target)
        if not record.is_repository:
            return record

        # lightweight passes skip the network fetch
        record.update_state, record.details = self.inspector.get_update_state(target, fetch_first=not lightweight)
        record.local_branches, record.current_branch = self.inspector.get_local_branches(target)
        record.has_local_changes = self.inspector.has_local_changes(target)
        record.remote_branches = self.inspector.get_remote_branches(target)
        return record

    def recompute_all(self, urls: Iterable[str], root: str, lightweight: bool = True) -> DependencyReport:
        """Rebuild the state of every manifest entry, sequentially."""
        report = DependencyReport()
        for url in urls:
            record = self.inspect(url, root, lightweight)
            report.records[url] = record
            if record.is_outdated:
                report.any_outdated = True
        logger.debug(
            f"Recomputed {len(report.records)} dependencies "
            f"({'lightweight' if lightweight else 'full'}), outdated={report.any_outdated}"
        )
        return report

    def update_one(self, target_path: str) -> GitResult:
        """Fast-forward one dependency; never merges."""
        result = self.inspector.pull_fast_forward(target_path)
        if result.success:
            logger.info(f"[Git] Updated dependency: {target_path}\n{result.output}")
        else:
            logger.warning(f"[Git] Failed to update dependency: {target_path}\n{result.output}")
        return result

    def update_all_outdated(self, records: Iterable[DependencyRecord]) -> UpdateSummary:
        """Fast-forward every behind or diverged repository, best effort."""
        targets = list(dict.fromkeys(r.target_path for r in records if r.is_outdated))
        summary = UpdateSummary()
        for target in targets:
            if self.update_one(target).success:
                summary.succeeded += 1
            else:
                summary.failed += 1
        return summary

    def install_all(self, urls: Iterable[str], root: str) -> InstallSummary:
        """Clone every missing dependency without touching foreign content."""
        os.makedirs(root, exist_ok=True)
        summary = InstallSummary()
        for url in urls:
            target = target_path_for(url, root)
            try:
                if os.path.isdir(target):
                    if is_git_repo(target):
                        summary.skipped += 1
                        continue
                    if not is_directory_empty(target):
                        logger.warning(f"[Git] Skipping {target}: exists, not empty and not a git repository")
                        summary.errors += 1
                        continue

                result = self.inspector.clone(url, target)
                if result.success:
                    logger.info(f"[Git] Cloned {url} into {target}\n{result.output}")
                    summary.installed += 1
                else:
                    logger.error(f"[Git] Clone of {url} into {target} failed\n{result.output}")
                    summary.errors += 1
            except OSError as e:
                logger.error(f"[Git] Error installing {url}: {e}")
                summary.errors += 1
        return summary

    def install_one(self, url: str, root: str) -> Tuple[bool, str]:
        """Install a single dependency into its (possibly new) folder."""
        target = target_path_for(url, root)
        try:
            os.makedirs(target, exist_ok=True)
            if not is_directory_empty(target):
                return False, f"Folder is not empty, cannot clone: {target}"
        except OSError as e:
            logger.error(f"[Git] Error installing {url}: {e}")
            return False, str(e)

        result = self.inspector.clone(url, target)
        if not result.success:
            logger.error(f"[Git] Clone of {url} failed\n{result.output}")
            return False, f"Clone failed:\n{result.output}"
        logger.info(f"[Git] {result.output}")
        return True, f"Installed into {target}"

    def import_repository(self, url: str, root: str, manifest: ManifestService) -> Tuple[bool, str]:
        """Clone a new repository and add it to the manifest."""
        if not url or not url.strip():
            return False, "URL is empty"
        url = url.strip()
        if not guess_folder_from_url(url):
            return False, f"Cannot derive a folder name from {url}"

        os.makedirs(root, exist_ok=True)
        target = target_path_for(url, root)
        if os.path.isdir(target) and not is_directory_empty(target):
            return False, f"Target folder already exists and is not empty:\n{target}"

        result = self.inspector.clone(url, target)
        logger.info(f"[Git] {result.output}")
        if not result.success:
            return False, f"Clone failed:\n{result.output}"

        manifest.add_url(url)
        return True, f"Repository cloned:\n{target}"

    def remove_dependency(self, url: str, record: DependencyRecord, manifest: ManifestService) -> bool:
        """Delete the dependency folder and drop it from the manifest."""
        path = record.target_path
        try:
            if os.path.isdir(path):
                _remove_tree(path)
            meta = f"{path}.meta"
            if os.path.isfile(meta):
                os.remove(meta)
        except OSError as e:
            logger.error(f"[Git] Error deleting {path}: {e}")
            return False

        manifest.remove_url(url)
        return True

    def prune_all(self, records: Iterable[DependencyRecord]) -> int:
        """Fetch with prune in every installed repository.

        Returns:
            Number of repositories where every fetch succeeded
        """
        pruned = 0
        for record in records:
            if record.is_repository and self.inspector.prune_remotes(record.target_path):
                pruned += 1
        return pruned

    def select_branch(self, record: DependencyRecord, selection: str) -> Tuple[bool, str]:
        """Switch a dependency to a local branch or a remote one.

        Remote selections create a local tracking branch named after the
        part following the remote name.
        """
        if record.has_local_changes:
            return False, "Cannot switch branch: local changes present"

        if selection in record.remote_branches:
            local_name = selection.split("/", 1)[1]
            if self.inspector.create_tracking_branch(record.target_path, local_name, selection):
                logger.info(f"[Git] Created tracking branch {local_name} for {selection} in {record.target_path}")
                return True, f"Created tracking branch {local_name}"
            return False, f"Could not create a local branch for {selection}"

        if self.inspector.switch_branch(record.target_path, selection):
            logger.info(f"[Git] Switched {record.target_path} to {selection}")
            return True, f"Switched to {selection}"
        return False, "Could not switch branch. Make sure there are no local changes."

    def find_missing(self, urls: Iterable[str], root: str) -> List[str]:
        """URLs whose folder is absent or not a repository."""
        missing = []
        for url in urls:
            if not guess_folder_from_url(url):
                continue
            target = target_path_for(url, root)
            if not (os.path.isdir(target) and is_git_repo(target)):
                missing.append(url)
        return missing


def _make_writable_and_retry(func, path, _exc_info):
    """rmtree error hook: git object files are read-only on Windows."""
    os.chmod(path, 0o700)
    func(path)


def _remove_tree(path: str) -> None:
    # onerror is deprecated from 3.12 in favour of onexc
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_make_writable_and_retry)
    else:
        shutil.rmtree(path, onerror=_make_writable_and_retry)
