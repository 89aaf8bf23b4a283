"""Command-line entry point for git-deps-keeper"""

import sys
from typing import List, Optional

from rich.console import Console
from rich.prompt import Confirm

from git_deps_keeper.cli.args import parse_args
from git_deps_keeper.config import Config
from git_deps_keeper.core import DependencyKeeper
from git_deps_keeper.logging_config import setup_logging

console = Console()


def _run_command(keeper: DependencyKeeper, args) -> int:
    """Dispatch a parsed subcommand; returns the exit code."""
    display = keeper.display_service
    command = args.command

    if command == "status":
        report = keeper.refresh(lightweight=not args.fetch)
        display.display_dependency_table(report, show_summary=args.summary)
        return 0

    if command == "install":
        summary = keeper.install_all()
        display.display_install_summary(summary)
        return 0 if summary.errors == 0 else 1

    if command == "update":
        if not args.deps:
            summary = keeper.update_all_outdated()
            display.display_update_summary(summary)
            return 0 if summary.failed == 0 else 1
        ok = True
        for dep in args.deps:
            success, output = keeper.update(dep)
            display.print_message(f"{dep}: {output or ('updated' if success else 'failed')}", success)
            ok = ok and success
        return 0 if ok else 1

    if command == "add":
        success, message = keeper.add(args.url)
        display.print_message(message, success)
        return 0 if success else 1

    if command == "remove":
        _, record = keeper.resolve(args.dep)
        if not args.force:
            warning = (
                "This dependency has local changes. Delete it anyway?"
                if record.has_local_changes
                else "Are you sure you want to delete this dependency?"
            )
            if not Confirm.ask(f"{warning} ({record.target_path})", default=False):
                return 1
        removed = keeper.remove(args.dep)
        display.print_message(
            f"Removed {record.name}" if removed else f"Could not remove {record.name}", removed
        )
        return 0 if removed else 1

    if command == "prune":
        pruned = keeper.prune()
        display.print_message(f"Pruned remotes of {pruned} dependencies")
        return 0

    if command == "branches":
        display.display_branches(keeper.branches(args.dep))
        return 0

    if command == "switch":
        success, message = keeper.switch(args.dep, args.branch)
        display.print_message(message, success)
        return 0 if success else 1

    if command == "delete-branch":
        success = keeper.delete_branch(args.dep, args.branch, force=args.force, remote=args.remote)
        display.print_message(
            f"Deleted {args.branch}" if success else f"Could not delete {args.branch}", success
        )
        return 0 if success else 1

    if command == "path":
        console.print(keeper.open_folder_path(args.dep))
        return 0

    if command == "check":
        missing = keeper.missing()
        display.display_missing(missing)
        return 1 if missing else 0

    if command == "browse":
        if args.clone:
            success, message = keeper.add(args.clone)
            display.print_message(message, success)
            return 0 if success else 1
        github = keeper.github_service
        organizations = github.list_organizations() if args.list_orgs else None
        page = github.browse(search=args.query, org=args.org, page=args.page, orgs_only=args.orgs_only)
        display.display_repository_page(page, keeper.lib_root, organizations)
        return 0

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        use_tui = parsed_args.command == "tui" or (parsed_args.command is None and sys.stdin.isatty())
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_tui)

        config_values = {
            "verbose": parsed_args.verbose,
            "debug": parsed_args.debug,
            "git_timeout": parsed_args.timeout,
        }
        if parsed_args.project_root:
            config_values["project_root"] = parsed_args.project_root
        if parsed_args.command == "browse":
            if parsed_args.api_url:
                config_values["github_api_url"] = parsed_args.api_url
            if parsed_args.token:
                config_values["github_token"] = parsed_args.token
            config_values["orgs_only"] = parsed_args.orgs_only
        config = Config.from_dict(config_values)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}")

        keeper = DependencyKeeper(config, tui_mode=use_tui)
        try:
            if use_tui:
                from git_deps_keeper.tui import DependencyKeeperApp
                DependencyKeeperApp(keeper).run()
                return 0

            if parsed_args.command is None:
                parsed_args.command = "status"
                parsed_args.fetch = False
                parsed_args.summary = False
            return _run_command(keeper, parsed_args)
        finally:
            keeper.close()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
