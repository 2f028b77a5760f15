"""
Selection List View - Profile and function pickers

Renders an EntryModel: filter bar, windowed list with the highlighted row,
and a match counter.
"""
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Label, Static

from lambda_logs.core import EntryModel


class SelectionListView(Vertical):
    """Filterable list screen used for both profiles and functions"""

    def __init__(self, title: str, empty_text: str, **kwargs):
        """
        Initialize the list view

        Args:
            title: Heading shown above the list
            empty_text: Shown when nothing matches the filter
        """
        super().__init__(**kwargs)
        self.heading = title
        self.empty_text = empty_text

    def compose(self) -> ComposeResult:
        yield Label(Text(self.heading, style="bold"), classes="section-title")
        yield Static("", classes="filter-bar")
        yield Static("", classes="selection-list")
        yield Static("", classes="selection-footer")

    def set_title(self, title: str) -> None:
        self.heading = title
        self.query_one(".section-title", Label).update(Text(title, style="bold"))

    def show(self, model: Optional[EntryModel], visible_height: int) -> None:
        """Redraw from the model; nothing here mutates it"""
        if model is None:
            return

        filter_text = Text("Filter: ", style="bold")
        if model.filter_text:
            filter_text.append(model.filter_text)
            filter_text.append("▏", style="blink")
        else:
            filter_text.append("type to filter", style="dim italic")
        self.query_one(".filter-bar", Static).update(filter_text)

        rows = Text()
        if not model.filtered:
            rows.append(self.empty_text, style="dim")
        else:
            start, end = model.visible_range(visible_height)
            for index in range(start, end):
                label = model.label(model.filtered[index])
                if index == model.selected_index:
                    rows.append(f"▶ {label}", style="reverse bold")
                else:
                    rows.append(f"  {label}")
                if index < end - 1:
                    rows.append("\n")
        self.query_one(".selection-list", Static).update(rows)

        self.query_one(".selection-footer", Static).update(
            f"{len(model.filtered)} of {len(model.items)} shown"
        )
