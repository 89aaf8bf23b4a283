"""Command-line argument parsing for git-deps-keeper."""

import argparse
from typing import List, Optional

from git_deps_keeper.__version__ import __version__
from git_deps_keeper.constants import DEFAULT_GIT_TIMEOUT, LIB_ROOT_RELATIVE, MANIFEST_FILE_NAME


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-deps-keeper",
        description="Manage external git library dependencies of a project",
        epilog=f"Dependencies are listed in {LIB_ROOT_RELATIVE}/{MANIFEST_FILE_NAME} "
        f"and cloned into {LIB_ROOT_RELATIVE}/<name>. Browsing requires a GITHUB_TOKEN.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-deps-keeper {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--project-root", metavar="DIR", default=None, help="Project directory (default: current directory)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_GIT_TIMEOUT,
        metavar="SECONDS",
        help=f"Kill git commands running longer than this (default: {DEFAULT_GIT_TIMEOUT})",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    status = sub.add_parser("status", help="Show the state of every dependency")
    status.add_argument("--fetch", action="store_true", help="Fetch remotes before comparing")
    status.add_argument("--summary", action="store_true", help="Print legend and totals")

    sub.add_parser("install", help="Clone every missing dependency")

    update = sub.add_parser("update", help="Fast-forward outdated dependencies")
    update.add_argument("deps", nargs="*", metavar="DEP", help="Names or URLs (default: all outdated)")

    add = sub.add_parser("add", help="Clone a repository and add it to the manifest")
    add.add_argument("url")

    remove = sub.add_parser("remove", help="Delete a dependency folder and drop it from the manifest")
    remove.add_argument("dep", metavar="DEP")
    remove.add_argument("--force", action="store_true", help="Skip confirmation")

    sub.add_parser("prune", help="Fetch with prune to drop deleted remote branches")

    branches = sub.add_parser("branches", help="List branches of a dependency")
    branches.add_argument("dep", metavar="DEP")

    switch = sub.add_parser("switch", help="Switch a dependency to a local or remote branch")
    switch.add_argument("dep", metavar="DEP")
    switch.add_argument("branch")

    delete = sub.add_parser("delete-branch", help="Delete a branch of a dependency")
    delete.add_argument("dep", metavar="DEP")
    delete.add_argument("branch", help="Local name, or remote/name with --remote")
    delete.add_argument("--force", action="store_true", help="Delete even if not merged")
    delete.add_argument("--remote", action="store_true", help="Delete the branch on its remote")

    path = sub.add_parser("path", help="Print the folder of a dependency or the library root")
    path.add_argument("dep", nargs="?", metavar="DEP")

    sub.add_parser("check", help="Exit with status 1 if any dependency is missing")

    browse = sub.add_parser("browse", help="List or search repositories on the git server")
    browse.add_argument("query", nargs="?", default="", help="Search text")
    browse.add_argument("--org", default="", help="Limit to an organization")
    browse.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    browse.add_argument("--orgs-only", action="store_true", help="Only repositories of your organizations")
    browse.add_argument("--list-orgs", action="store_true", help="Show your organizations")
    browse.add_argument("--api-url", default=None, help="API base URL (default: https://api.github.com)")
    browse.add_argument("--token", default=None, help="API token (default: $GITHUB_TOKEN)")
    browse.add_argument("--clone", metavar="URL", default=None, help="Clone URL and add it to the manifest")

    sub.add_parser("tui", help="Launch the interactive interface")

    return parser


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
