"""Display and formatting service for dependency information"""
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from git_deps_keeper.constants import BROWSER_COLUMNS, CLI_COLORS, COLUMNS, LEGEND_TEXT, SYMBOL_INSTALLED, SYMBOL_NOT_INSTALLED
from git_deps_keeper.formatters import (
    format_branch_counts,
    format_changes,
    format_date,
    format_project_urls,
    format_record_state,
    get_record_style_type,
)
from git_deps_keeper.models.dependency import DependencyRecord, DependencyReport, InstallSummary, UpdateSummary
from git_deps_keeper.models.remote_project import RepositoryPage
from git_deps_keeper.services.github_service import is_installed

console = Console()


class DisplayService:
    def __init__(self, verbose: bool = False, debug: bool = False):
        self.verbose = verbose
        self.debug_mode = debug

    def display_dependency_table(self, report: DependencyReport, show_summary: bool = False) -> None:
        """Display a table of dependency states."""
        if not report.records:
            console.print("[dim]No dependencies declared. Add one with 'git-deps-keeper add <url>'.[/dim]")
            return

        table = Table()
        for col in COLUMNS:
            table.add_column(col.label)

        for url, record in report.records.items():
            row_style = CLI_COLORS.get(get_record_style_type(record))
            table.add_row(
                record.name,
                format_record_state(record),
                record.current_branch or "",
                format_changes(record),
                format_branch_counts(record),
                url,
                style=row_style,
            )

        console.print(table)

        if report.any_outdated:
            console.print(
                "[yellow]Some dependencies are behind their upstream. "
                "Run 'git-deps-keeper update' to fast-forward them.[/yellow]"
            )

        if show_summary:
            console.print(LEGEND_TEXT)
            records = list(report.records.values())
            console.print("Summary:")
            console.print(f"Total dependencies: {len(records)}")
            console.print(f"Installed: {sum(1 for r in records if r.is_repository)}")
            console.print(f"Outdated: {sum(1 for r in records if r.is_outdated)}")
            console.print(f"With local changes: {sum(1 for r in records if r.has_local_changes)}")

    def display_branches(self, record: DependencyRecord) -> None:
        """List local and remote branches of one dependency."""
        console.print(f"[bold]{record.name}[/bold] ({record.target_path})")
        if not record.is_repository:
            console.print("[red]Not installed as a git repository[/red]")
            return

        for branch in record.local_branches:
            marker = "*" if branch == record.current_branch else " "
            console.print(f" {marker} {branch}")
        if record.local_branches and record.remote_branches:
            console.print("[dim]  -- remotes --[/dim]")
        for branch in record.remote_branches:
            console.print(f"   [cyan]{branch}[/cyan]")
        if record.has_local_changes:
            console.print("[yellow]Local changes present: branch switching is disabled[/yellow]")

    def display_install_summary(self, summary: InstallSummary) -> None:
        console.print(
            f"Installed: {summary.installed}\nSkipped: {summary.skipped}\nErrors: {summary.errors}"
        )

    def display_update_summary(self, summary: UpdateSummary) -> None:
        console.print(f"Updated: {summary.succeeded}\nFailed: {summary.failed}")

    def display_missing(self, missing: List[str]) -> None:
        if not missing:
            console.print("[green]All dependencies are installed[/green]")
            return
        console.print("[yellow]Missing dependencies:[/yellow]")
        for url in missing:
            console.print(f"  • {url}")

    def display_repository_page(self, page: RepositoryPage, lib_root: str, organizations: Optional[List[str]] = None) -> None:
        """Display one page of browsed repositories."""
        if organizations:
            console.print(f"[dim]Organizations: {', '.join(organizations)}[/dim]")

        if not page.projects:
            console.print("[dim]No repositories found[/dim]")
            return

        table = Table()
        for col in BROWSER_COLUMNS:
            table.add_column(col.label)

        for project in page.projects:
            installed = is_installed(project, lib_root)
            table.add_row(
                project.title,
                format_date(project.updated_at),
                SYMBOL_INSTALLED if installed else SYMBOL_NOT_INSTALLED,
                "\n".join(format_project_urls(project)),
                style="dim" if installed else None,
            )

        console.print(table)
        console.print(page.status)

    def print_message(self, message: str, ok: bool = True) -> None:
        console.print(f"[green]{message}[/green]" if ok else f"[red]{message}[/red]")
