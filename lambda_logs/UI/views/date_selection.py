"""
Date Selection View - Quick and custom time range panels
"""
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Label, Static

from lambda_logs.core import QUICK_RANGES, ActiveColumn, RangeSelector
from lambda_logs.core.range_selector import FIELD_NAMES, FIELDS_PER_ENDPOINT, DateFields

FIELD_FORMATS = {"year": "{:04d}", "month": "{:02d}", "day": "{:02d}", "hour": "{:02d}"}
FIELD_SEPARATORS = {"year": "-", "month": "-", "day": " ", "hour": ":00"}


class DateSelectionView(Vertical):
    """Two-column time range picker"""

    def compose(self) -> ComposeResult:
        yield Label("", id="date-title", classes="section-title")
        with Horizontal(id="date-columns"):
            yield Static("", id="quick-ranges-panel", classes="range-panel")
            yield Static("", id="custom-range-panel", classes="range-panel")
        yield Static(
            "[dim]1/2 or c: switch column · ←/→ move · ↑/↓ change · "
            "Tab: edit custom field · Enter: fetch logs · Esc: back[/dim]",
            id="date-help",
        )

    def show(self, selector: Optional[RangeSelector], function_name: Optional[str]) -> None:
        if selector is None:
            return

        self.query_one("#date-title", Label).update(
            Text.assemble(("Time range for ", "bold"), function_name or "")
        )

        quick_active = selector.active_column is ActiveColumn.QUICK_RANGES
        quick_panel = self.query_one("#quick-ranges-panel", Static)
        custom_panel = self.query_one("#custom-range-panel", Static)
        quick_panel.set_class(quick_active, "active")
        custom_panel.set_class(not quick_active, "active")

        quick = Text("[1] Quick ranges\n\n", style="bold")
        for index, quick_range in enumerate(QUICK_RANGES):
            if index == selector.quick_index:
                style = "reverse bold" if quick_active else "bold"
                quick.append(f"▶ {quick_range.label}", style=style)
            else:
                quick.append(f"  {quick_range.label}")
            quick.append("\n")
        quick_panel.update(quick)

        custom = Text("[2] Custom range\n\n", style="bold")
        custom.append("From: ")
        custom.append_text(self._format_fields(selector, selector.start_fields, 0, not quick_active))
        custom.append("\nTo:   ")
        custom.append_text(self._format_fields(
            selector, selector.end_fields, FIELDS_PER_ENDPOINT, not quick_active))
        custom.append("\n\n")
        if selector.editing:
            custom.append("EDITING", style="bold yellow")
            custom.append(" ↑/↓ adjust field, Tab to stop")
        elif not quick_active:
            custom.append("Tab to edit the highlighted field", style="dim")
        custom_panel.update(custom)

    @staticmethod
    def _format_fields(selector: RangeSelector, fields: DateFields,
                       first_slot: int, focused: bool) -> Text:
        text = Text()
        for position, name in enumerate(FIELD_NAMES):
            value = FIELD_FORMATS[name].format(getattr(fields, name))
            style = ""
            if focused and selector.active_field == first_slot + position:
                style = "bold yellow underline" if selector.editing else "reverse"
            text.append(value, style=style)
            text.append(FIELD_SEPARATORS[name])
        return text
