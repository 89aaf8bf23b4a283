"""Core functionality for git-deps-keeper"""

import os
from threading import RLock
from typing import List, Optional, Tuple, Union

from git_deps_keeper.config import Config
from git_deps_keeper.exceptions import DependencyNotFoundError
from git_deps_keeper.models.dependency import (
    DependencyRecord,
    DependencyReport,
    InstallSummary,
    UpdateSummary,
)
from git_deps_keeper.services.git import GitRunner, RepoInspector
from git_deps_keeper.services.dependency_service import DependencyService
from git_deps_keeper.services.display_service import DisplayService
from git_deps_keeper.services.github_service import GitHubService
from git_deps_keeper.services.manifest_service import ManifestService
from git_deps_keeper.utils.paths import (
    get_existing_lib_root,
    get_lib_root,
    get_manifest_path,
    guess_folder_from_url,
    target_path_for,
)
from git_deps_keeper.logging_config import get_logger

logger = get_logger(__name__)


class DependencyKeeper:
    """Main class for managing a project's external git dependencies.

    Operations that run git hold a re-entrant lock, so passes started from
    several threads (the TUI workers) run one after another and never
    issue concurrent git commands in the same working copy.
    """

    def __init__(self, config: Union[Config, dict], tui_mode: bool = False):
        """Initialize DependencyKeeper.

        Args:
            config: Configuration dict or Config object
            tui_mode: True when driven by the interactive TUI
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.tui_mode = tui_mode
        self.verbose = self.config.get("verbose", False)
        self.debug_mode = self.config.get("debug", False)
        self.project_root = self.config.project_root

        self.runner = GitRunner(self.config.git_executable, self.config.git_timeout)
        self.inspector = RepoInspector(self.runner)
        self.manifest = ManifestService(get_manifest_path(self.project_root))
        self.dependency_service = DependencyService(self.inspector)
        self.github_service = GitHubService(self.config)
        self.display_service = DisplayService(verbose=self.verbose, debug=self.debug_mode)

        self.report = DependencyReport()
        self._lock = RLock()
        logger.info(f"Managing dependencies of {self.project_root}")

    @property
    def lib_root(self) -> str:
        """Existing library root, else where it will be created."""
        return get_existing_lib_root(self.project_root) or get_lib_root(self.project_root)

    def urls(self) -> List[str]:
        return self.manifest.load_urls()

    def refresh(self, lightweight: bool = True) -> DependencyReport:
        """Recompute all dependency states; full passes fetch first."""
        with self._lock:
            self.report = self.dependency_service.recompute_all(self.urls(), self.lib_root, lightweight)
            return self.report

    def resolve(self, name_or_url: str) -> Tuple[str, DependencyRecord]:
        """Find a manifest entry by URL or folder name (case-insensitive)."""
        urls = self.urls()
        if name_or_url in urls:
            url = name_or_url
        else:
            matches = [u for u in urls if guess_folder_from_url(u).lower() == name_or_url.lower()]
            if not matches:
                raise DependencyNotFoundError(name_or_url)
            url = matches[0]

        with self._lock:
            record = self.report.records.get(url)
            if record is None or record.target_path != target_path_for(url, self.lib_root):
                record = self.dependency_service.inspect(url, self.lib_root, lightweight=True)
        return url, record

    def install_all(self) -> InstallSummary:
        with self._lock:
            summary = self.dependency_service.install_all(self.urls(), self.lib_root)
            logger.info(f"Install: {summary.installed} installed, {summary.skipped} skipped, {summary.errors} errors")
            self.refresh(lightweight=True)
        return summary

    def update_all_outdated(self) -> UpdateSummary:
        """Fetch, then fast-forward every outdated dependency."""
        with self._lock:
            self.refresh(lightweight=False)
            summary = self.dependency_service.update_all_outdated(self.report.records.values())
            logger.info(f"Update: {summary.succeeded} updated, {summary.failed} failed")
            self.refresh(lightweight=False)
        return summary

    def update(self, name_or_url: str) -> Tuple[bool, str]:
        with self._lock:
            _, record = self.resolve(name_or_url)
            if not record.is_repository:
                return False, f"{record.name} is not installed"
            success, output = self.dependency_service.update_one(record.target_path)
        return success, output.strip()

    def add(self, url: str) -> Tuple[bool, str]:
        with self._lock:
            return self.dependency_service.import_repository(url, self.lib_root, self.manifest)

    def install(self, name_or_url: str) -> Tuple[bool, str]:
        with self._lock:
            url, _ = self.resolve(name_or_url)
            return self.dependency_service.install_one(url, self.lib_root)

    def remove(self, name_or_url: str) -> bool:
        with self._lock:
            url, record = self.resolve(name_or_url)
            removed = self.dependency_service.remove_dependency(url, record, self.manifest)
            if removed:
                self.report.records.pop(url, None)
        return removed

    def prune(self) -> int:
        """Fetch with prune so deleted remote branches disappear."""
        with self._lock:
            self.refresh(lightweight=True)
            pruned = self.dependency_service.prune_all(self.report.records.values())
            self.refresh(lightweight=True)
        return pruned

    def branches(self, name_or_url: str) -> DependencyRecord:
        _, record = self.resolve(name_or_url)
        return record

    def switch(self, name_or_url: str, branch: str) -> Tuple[bool, str]:
        with self._lock:
            _, record = self.resolve(name_or_url)
            if not record.is_repository:
                return False, f"{record.name} is not installed"
            return self.dependency_service.select_branch(record, branch)

    def delete_branch(self, name_or_url: str, branch: str, force: bool = False, remote: bool = False) -> bool:
        with self._lock:
            _, record = self.resolve(name_or_url)
            if not record.is_repository:
                return False
            if remote:
                return self.inspector.delete_remote_branch(record.target_path, branch)
            return self.inspector.delete_local_branch(record.target_path, branch, force=force)

    def missing(self) -> List[str]:
        return self.dependency_service.find_missing(self.urls(), self.lib_root)

    def open_folder_path(self, name_or_url: Optional[str] = None) -> str:
        """Folder to reveal: a dependency's path or the library root."""
        if name_or_url:
            _, record = self.resolve(name_or_url)
            return record.target_path
        os.makedirs(self.lib_root, exist_ok=True)
        return self.lib_root

    def close(self) -> None:
        self.github_service.close()
