"""
Log Viewer Components Module - Panels of the log screen

Handles:
- Filter bar
- Log statistics panel
- Collapsed list of log entries with color-coded levels
- Expanded single-entry panel
"""
from datetime import datetime
from typing import Optional, Tuple

from rich.text import Text
from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Static

from lambda_logs.core import LogEntry, LogLevel


class LogFilterBar(Static):
    """Shows the live filter text"""

    def show_filter(self, filter_text: str, expanded: bool) -> None:
        text = Text("Filter: ", style="bold")
        if filter_text:
            text.append(filter_text)
            if not expanded:
                text.append("▏", style="blink")
        elif expanded:
            text.append("(collapse with Enter to edit)", style="dim italic")
        else:
            text.append("type keywords, all must match", style="dim italic")
        self.update(text)


class LogStatsPanel(Static):
    """Display log statistics"""

    total_entries: reactive[int] = reactive(0)
    visible_entries: reactive[int] = reactive(0)
    error_count: reactive[int] = reactive(0)
    warning_count: reactive[int] = reactive(0)

    def compose(self) -> ComposeResult:
        yield Static(self._format_stats(), id="stats-content")

    def _format_stats(self) -> str:
        return (
            f"Visible: {self.visible_entries}/{self.total_entries}  "
            f"[red]Errors: {self.error_count}[/red]  "
            f"[yellow]Warnings: {self.warning_count}[/yellow]"
        )

    def watch_total_entries(self, value: int) -> None:
        self._update_display()

    def watch_visible_entries(self, value: int) -> None:
        self._update_display()

    def watch_error_count(self, value: int) -> None:
        self._update_display()

    def watch_warning_count(self, value: int) -> None:
        self._update_display()

    def _update_display(self) -> None:
        try:
            self.query_one("#stats-content", Static).update(self._format_stats())
        except NoMatches:
            # Not composed yet; compose renders the current values
            pass


class LogListPanel(Static):
    """Collapsed view: one row per log entry"""

    max_message_length = 160

    def show_rows(self, rows: Tuple[LogEntry, ...], first_index: int,
                  selected_index: Optional[int]) -> None:
        """
        Render a window of entries

        Args:
            rows: Entries inside the window
            first_index: Filtered-view index of rows[0]
            selected_index: Filtered-view index of the cursor
        """
        if not rows:
            self.update(Text("No log entries match", style="dim"))
            return

        text = Text()
        for offset, entry in enumerate(rows):
            if offset:
                text.append("\n")
            text.append_text(self._format_entry(entry, first_index + offset == selected_index))
        self.update(text)

    def _format_entry(self, entry: LogEntry, selected: bool) -> Text:
        timestamp = entry.logged_at.strftime('%Y-%m-%d %H:%M:%S')

        message = entry.summary
        if len(message) > self.max_message_length:
            message = message[:self.max_message_length - 3] + "..."

        row = Text()
        row.append("▶ " if selected else "  ")
        row.append(f"{timestamp} ", style="cyan")
        row.append(f"{entry.level.value:<8} ", style=entry.level.color)
        row.append("{} " if entry.is_structured else "   ", style="magenta")
        row.append(message, style="dim" if entry.level is LogLevel.PLATFORM else "")
        if selected:
            row.stylize("reverse")
        return row


class LogEntryDetailsPanel(Static):
    """Expanded view of the selected entry"""

    def show_entry(self, entry: Optional[LogEntry], lines: Tuple[str, ...],
                   content_offset: int) -> None:
        if entry is None:
            self.update(Text("No entry selected", style="dim"))
            return

        timestamp = entry.logged_at.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        ingested = "-"
        if entry.ingestion_time:
            ingested = datetime.fromtimestamp(entry.ingestion_time / 1000).strftime('%H:%M:%S')

        text = Text()
        text.append("Timestamp: ", style="bold")
        text.append(f"{timestamp}  ")
        text.append("Ingested: ", style="bold")
        text.append(f"{ingested}  ")
        text.append("Level: ", style="bold")
        text.append(entry.level.value, style=entry.level.color)
        text.append(f"  Lines {content_offset + 1}-{content_offset + len(lines)}"
                    f" of {entry.line_count}\n", style="dim")

        body_style = "green" if entry.is_structured else ""
        for line in lines:
            text.append("\n")
            text.append(line, style=body_style)
        self.update(text)
