"""Interactive TUI for git-deps-keeper using Textual."""

import asyncio
from typing import List, Optional

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Static

from .constants import COLUMNS, LEGEND_TEXT, TUI_COLORS
from .formatters import (
    format_branch_counts,
    format_changes,
    format_record_state,
    get_record_style_type,
)
from .models.dependency import DependencyRecord
from .logging_config import get_logger

logger = get_logger(__name__)


class ConfirmScreen(ModalScreen[bool]):
    """Modal confirmation dialog."""

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #confirm-message {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }

    Button {
        margin: 0 1;
    }
    """

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Static(self.message, id="confirm-message")
            with Container(id="button-container"):
                yield Button("Yes", variant="error", id="yes")
                yield Button("No", variant="primary", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")


class InfoScreen(ModalScreen):
    """Modal dialog for summaries, branch lists and errors."""

    DEFAULT_CSS = """
    InfoScreen {
        align: center middle;
    }

    #info-dialog {
        width: 80%;
        height: auto;
        border: thick $background 80%;
        background: $surface;
        padding: 1 2;
    }

    #info-content {
        width: 100%;
        height: auto;
        padding: 1 0;
    }

    #info-button-container {
        width: 100%;
        height: auto;
        align: center middle;
        padding: 1 0;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, info: str):
        super().__init__()
        self.info = info

    def compose(self) -> ComposeResult:
        with Vertical(id="info-dialog"):
            yield Static(self.info, id="info-content")
            with Container(id="info-button-container"):
                yield Button("Close", variant="primary", id="close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss()

    def action_close(self) -> None:
        self.dismiss()


def format_branch_info(record: DependencyRecord) -> str:
    """Markup listing the branches of a dependency."""
    lines = [f"[bold]{record.name}[/bold]", record.target_path, ""]
    for branch in record.local_branches:
        marker = "*" if branch == record.current_branch else " "
        lines.append(f"{marker} {branch}")
    if record.local_branches and record.remote_branches:
        lines.append("[dim]-- remotes --[/dim]")
    lines.extend(f"  [cyan]{branch}[/cyan]" for branch in record.remote_branches)
    if record.has_local_changes:
        lines.extend(["", "[yellow]Local changes present: branch switching is disabled[/yellow]"])
    return "\n".join(lines)


class DependencyKeeperApp(App):
    """Full-screen view of the project's dependencies."""

    TITLE = "git-deps-keeper"

    CSS = """
    #dependency-table {
        height: 1fr;
    }

    #status-bar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Fetch & Refresh"),
        Binding("u", "update_outdated", "Update Outdated"),
        Binding("i", "install_all", "Install All"),
        Binding("p", "prune", "Prune Remotes"),
        Binding("b", "show_branches", "Branches"),
        Binding("d", "remove", "Remove"),
        Binding("l", "show_legend", "Legend"),
    ]

    def __init__(self, keeper):
        super().__init__()
        self.keeper = keeper
        self.records: List[DependencyRecord] = []
        # Set while a keeper pass runs in a worker thread
        self.pass_running = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield DataTable(id="dependency-table", cursor_type="row", zebra_stripes=True)
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        for col in COLUMNS:
            table.add_column(col.label, width=None, key=col.key)

        # Render first, inspect repositories afterwards
        table.loading = True
        self._start_pass()
        self.recompute(lightweight=True)

    def _populate_table(self) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for record in self.records:
            color = TUI_COLORS.get(get_record_style_type(record))
            table.add_row(
                Text(record.name, style=color),
                Text(format_record_state(record), style=color),
                record.current_branch or "",
                Text(format_changes(record), justify="center"),
                format_branch_counts(record),
                record.url,
                key=record.url,
            )

    def _update_status(self) -> None:
        status = self.query_one("#status-bar", Static)
        if not self.records:
            status.update("No dependencies declared. Add one with 'git-deps-keeper add <url>'.")
            return
        outdated = sum(1 for r in self.records if r.is_outdated)
        missing = sum(1 for r in self.records if not r.is_repository)
        text = f"{len(self.records)} dependencies | {outdated} outdated | {missing} not installed"
        if self.keeper.report.any_outdated:
            text += " | press 'u' to update"
        status.update(text)

    def _selected_record(self) -> Optional[DependencyRecord]:
        table = self.query_one(DataTable)
        if table.cursor_row is None or table.cursor_row >= len(self.records):
            return None
        return self.records[table.cursor_row]

    def _start_pass(self) -> bool:
        """Claim the single pass slot; False (with a notice) if it is taken."""
        if self.pass_running:
            self.notify("Another operation is still running", severity="warning")
            return False
        self.pass_running = True
        return True

    def _show_report(self) -> None:
        self.records = list(self.keeper.report.records.values())
        self._populate_table()
        self._update_status()

    @work(exclusive=True, thread=False)
    async def recompute(self, lightweight: bool) -> None:
        """Rebuild dependency states in a background thread."""
        table = self.query_one(DataTable)
        table.loading = True
        try:
            await asyncio.to_thread(self.keeper.refresh, lightweight)
            self._show_report()
            if not lightweight:
                self.notify("✓ Dependency states refreshed", severity="information")
        except Exception as e:
            logger.error(f"Error computing dependency states: {e}", exc_info=True)
            self.push_screen(InfoScreen(f"Error computing dependency states:\n\n{e}"))
        finally:
            table.loading = False
            self.pass_running = False

    @work(exclusive=True, thread=False)
    async def run_bulk(self, operation: str) -> None:
        """Run install/update/prune off the UI thread and show the outcome."""
        table = self.query_one(DataTable)
        table.loading = True
        try:
            if operation == "install":
                summary = await asyncio.to_thread(self.keeper.install_all)
                message = (
                    f"Installed: {summary.installed}\nSkipped: {summary.skipped}\nErrors: {summary.errors}"
                )
            elif operation == "update":
                summary = await asyncio.to_thread(self.keeper.update_all_outdated)
                message = f"Updated: {summary.succeeded}\nFailed: {summary.failed}"
            else:
                pruned = await asyncio.to_thread(self.keeper.prune)
                message = f"Pruned remotes of {pruned} dependencies"
            self._show_report()
            self.push_screen(InfoScreen(message))
        except Exception as e:
            logger.error(f"Error during {operation}: {e}", exc_info=True)
            self.push_screen(InfoScreen(f"Error during {operation}:\n\n{e}"))
        finally:
            table.loading = False
            self.pass_running = False

    def action_refresh(self) -> None:
        if self._start_pass():
            self.recompute(lightweight=False)

    def action_update_outdated(self) -> None:
        if self._start_pass():
            self.run_bulk("update")

    def action_install_all(self) -> None:
        if self._start_pass():
            self.run_bulk("install")

    def action_prune(self) -> None:
        if self._start_pass():
            self.run_bulk("prune")

    def action_show_legend(self) -> None:
        self.push_screen(InfoScreen(LEGEND_TEXT))

    def action_show_branches(self) -> None:
        record = self._selected_record()
        if record is None:
            return
        if not record.is_repository:
            self.notify(f"{record.name} is not installed", severity="warning")
            return
        self.push_screen(InfoScreen(format_branch_info(record)))

    def action_remove(self) -> None:
        record = self._selected_record()
        if record is None:
            return
        warning = (
            "This dependency has local changes. Delete it anyway?"
            if record.has_local_changes
            else "Are you sure you want to delete this dependency?"
        )
        message = f"{warning}\n\n{record.target_path}"

        def handle(confirmed: Optional[bool]) -> None:
            if not confirmed:
                return
            if self.pass_running:
                self.notify("Another operation is still running", severity="warning")
                return
            if self.keeper.remove(record.url):
                self.notify(f"Removed {record.name}")
                self._show_report()
            else:
                self.push_screen(InfoScreen(f"Could not delete {record.target_path}"))

        self.push_screen(ConfirmScreen(message), handle)

    async def action_quit(self) -> None:
        """Cancel workers and release resources before exiting."""
        try:
            self.workers.cancel_all()
            self.keeper.close()
        finally:
            self.exit()
