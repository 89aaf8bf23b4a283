"""Integration tests for the DependencyKeeper facade and the CLI"""
import json
import threading
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from git_deps_keeper import DependencyKeeper
from git_deps_keeper.cli.main import main
from git_deps_keeper.exceptions import DependencyNotFoundError
from git_deps_keeper.models.dependency import DependencyReport, UpdateState


@pytest.fixture
def keeper(mock_config):
    keeper = DependencyKeeper(mock_config)
    yield keeper
    keeper.close()


def write_manifest(lib_root, urls):
    path = Path(lib_root) / "required_gits.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"urls": urls}))
    return path


class TestDependencyKeeper:
    """Test the facade against a real library root."""

    def test_empty_project(self, keeper, lib_root):
        assert keeper.urls() == []
        assert keeper.refresh().records == {}
        assert keeper.lib_root == lib_root

    def test_install_and_refresh(self, keeper, origin_repo, lib_root):
        write_manifest(lib_root, [origin_repo])

        summary = keeper.install_all()

        assert summary.installed == 1
        record = keeper.report.records[origin_repo]
        assert record.is_repository is True
        assert record.update_state == UpdateState.UP_TO_DATE

    def test_resolve_by_name_or_url(self, keeper, origin_repo, lib_root):
        write_manifest(lib_root, [origin_repo])

        url, record = keeper.resolve("SAMPLE-LIB")
        assert url == origin_repo
        assert record.target_path == f"{lib_root}/sample-lib"
        assert keeper.resolve(origin_repo)[0] == origin_repo

        with pytest.raises(DependencyNotFoundError):
            keeper.resolve("unknown")

    def test_update_all_outdated(self, keeper, origin_repo, push_commits, lib_root):
        write_manifest(lib_root, [origin_repo])
        keeper.install_all()
        push_commits(1)

        summary = keeper.update_all_outdated()

        assert (summary.succeeded, summary.failed) == (1, 0)
        assert keeper.report.any_outdated is False

    def test_add_and_remove(self, keeper, origin_repo, lib_root):
        success, _ = keeper.add(origin_repo)
        assert success is True
        assert keeper.urls() == [origin_repo]

        assert keeper.remove("sample-lib") is True
        assert keeper.urls() == []
        assert not Path(f"{lib_root}/sample-lib").exists()

    def test_switch_and_delete_branch(self, keeper, origin_repo, push_commits, lib_root):
        push_commits(1, branch="feature")
        keeper.add(origin_repo)
        keeper.refresh()

        assert keeper.switch("sample-lib", "origin/feature") == (True, "Created tracking branch feature")
        keeper.refresh()
        assert keeper.branches("sample-lib").current_branch == "feature"
        assert keeper.delete_branch("sample-lib", "feature") is False
        assert keeper.delete_branch("sample-lib", "main") is True

    def test_passes_from_several_threads_run_one_at_a_time(self, keeper):
        counters = {"active": 0, "max_active": 0}
        counter_lock = threading.Lock()

        def slow_recompute(urls, root, lightweight=True):
            with counter_lock:
                counters["active"] += 1
                counters["max_active"] = max(counters["max_active"], counters["active"])
            time.sleep(0.05)
            with counter_lock:
                counters["active"] -= 1
            return DependencyReport()

        with patch.object(keeper.dependency_service, "recompute_all", side_effect=slow_recompute):
            threads = [
                threading.Thread(target=operation)
                for operation in (keeper.refresh, keeper.update_all_outdated, keeper.prune, keeper.install_all)
            ]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=10)

        assert counters["max_active"] == 1

    def test_missing_and_folder_path(self, keeper, origin_repo, lib_root):
        write_manifest(lib_root, [origin_repo])

        assert keeper.missing() == [origin_repo]
        assert keeper.open_folder_path() == lib_root
        assert keeper.open_folder_path("sample-lib") == f"{lib_root}/sample-lib"


class TestCli:
    """Test running subcommands through main()."""

    def test_status_empty_project(self, project_root):
        assert main(["--project-root", str(project_root), "status"]) == 0

    def test_check_reports_missing(self, project_root, lib_root, origin_repo):
        write_manifest(lib_root, [origin_repo])

        assert main(["--project-root", str(project_root), "check"]) == 1
        assert main(["--project-root", str(project_root), "install"]) == 0
        assert main(["--project-root", str(project_root), "check"]) == 0

    def test_add_then_status(self, project_root, lib_root, origin_repo):
        assert main(["--project-root", str(project_root), "add", origin_repo]) == 0
        assert main(["--project-root", str(project_root), "status", "--fetch", "--summary"]) == 0
        assert json.loads((Path(lib_root) / "required_gits.json").read_text()) == {"urls": [origin_repo]}

    def test_update_unknown_dependency(self, project_root):
        assert main(["--project-root", str(project_root), "update", "nothing"]) == 1

    def test_remove_requires_confirmation(self, project_root, lib_root, origin_repo):
        main(["--project-root", str(project_root), "add", origin_repo])

        with patch("rich.prompt.Confirm.ask", return_value=False):
            assert main(["--project-root", str(project_root), "remove", "sample-lib"]) == 1
        assert Path(f"{lib_root}/sample-lib").exists()

        assert main(["--project-root", str(project_root), "remove", "sample-lib", "--force"]) == 0
        assert not Path(f"{lib_root}/sample-lib").exists()

    def test_browse_uses_github_service(self, project_root):
        with patch("git_deps_keeper.services.github_service.GitHubService.browse") as mock_browse:
            mock_browse.side_effect = RuntimeError("offline")
            result = main(["--project-root", str(project_root), "browse", "lib", "--token", "t"])

        assert result == 1
        mock_browse.assert_called_once_with(search="lib", org="", page=1, orgs_only=False)
