"""
Log Viewer View Module - Log screen composition

Handles:
- Layout of title, filter bar, stats and the list/details panels
- Drawing a BrowserSnapshot (collapsed list or expanded entry)
"""
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Label, Static

from lambda_logs.core import BrowserSnapshot

from .components import LogEntryDetailsPanel, LogFilterBar, LogListPanel, LogStatsPanel


class LogViewerView(Vertical):
    """
    Log browsing screen

    Features:
    - Live keyword filter
    - Color-coded log levels
    - Expanded view with pretty-printed JSON messages
    """

    def compose(self) -> ComposeResult:
        yield Label("", id="log-title", classes="section-title")
        with Horizontal(id="log-toolbar"):
            yield LogFilterBar("", id="log-filter-bar")
            yield LogStatsPanel(id="log-stats-panel")
        yield LogListPanel("", id="log-list-panel")
        yield LogEntryDetailsPanel("", id="log-entry-details-panel")
        yield Static(
            "[dim]↑/↓ select or scroll · PgUp/PgDn page · Enter: expand/collapse · "
            "Esc: back[/dim]",
            id="log-help",
        )

    def show(self, snapshot: Optional[BrowserSnapshot]) -> None:
        """Redraw from a snapshot"""
        if snapshot is None:
            return

        self.query_one("#log-title", Label).update(
            Text.assemble((snapshot.function_name, "bold"), f"  {snapshot.time_range}")
        )
        self.query_one("#log-filter-bar", LogFilterBar).show_filter(
            snapshot.filter_text, snapshot.expanded
        )

        stats_panel = self.query_one("#log-stats-panel", LogStatsPanel)
        stats_panel.total_entries = snapshot.total_entries
        stats_panel.visible_entries = snapshot.visible_entries
        stats_panel.error_count = snapshot.error_count
        stats_panel.warning_count = snapshot.warning_count

        list_panel = self.query_one("#log-list-panel", LogListPanel)
        details_panel = self.query_one("#log-entry-details-panel", LogEntryDetailsPanel)
        list_panel.display = not snapshot.expanded
        details_panel.display = snapshot.expanded

        if snapshot.expanded:
            details_panel.show_entry(
                snapshot.selected_entry, snapshot.content_lines, snapshot.content_offset
            )
        else:
            list_panel.show_rows(
                snapshot.rows, snapshot.list_window[0], snapshot.selected_index
            )
