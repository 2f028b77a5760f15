"""
Log Browser Module - Filtering, selection and scrolling over fetched logs

Handles:
- Keyword filtering of the fetched log collection
- Selection cursor over the filtered view
- Collapsed list view with a follow-policy list offset
- Expanded single-entry view with a line-based content offset
- Read-only snapshots for the render layer

The filtered view, cursor and both offsets form one consistency group:
they are always reassigned together, never patched one at a time.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .keyword_filter import filter_items
from .log_entry import LogEntry, LogLevel
from .range_selector import TimeRange
from .viewport import centered_window, follow_offset

logger = logging.getLogger(__name__)

LINE_STEP = 1
PAGE_STEP = 10


@dataclass(frozen=True)
class BrowserSnapshot:
    """Everything a renderer needs to draw the log screen"""
    function_name: str
    time_range: TimeRange
    filter_text: str
    total_entries: int
    visible_entries: int
    selected_index: Optional[int]
    expanded: bool
    list_offset: int
    content_offset: int
    list_window: Tuple[int, int]
    centered_window: Tuple[int, int]
    rows: Tuple[LogEntry, ...]
    selected_entry: Optional[LogEntry]
    content_lines: Tuple[str, ...]
    error_count: int = 0
    warning_count: int = 0


class LogBrowser:
    """Browsing state for the logs of one function over one time range"""

    def __init__(self, function_name: str, time_range: TimeRange,
                 entries: Sequence[LogEntry] = ()):
        """
        Initialize the browser

        Args:
            function_name: Lambda function the logs belong to
            time_range: Interval the logs were fetched for
            entries: Fetched log collection, ordered by timestamp
        """
        self.function_name = function_name
        self.time_range = time_range
        self.entries: Tuple[LogEntry, ...] = tuple(entries)
        self.level_counts = Counter(entry.level for entry in self.entries)
        self.filter_text = ""
        self.filtered: List[LogEntry] = []
        self.selected_index: Optional[int] = None
        self.expanded = False
        self.list_offset = 0
        self.content_offset = 0
        self._recompute()

    # Collection and filter

    def set_entries(self, entries: Sequence[LogEntry]) -> None:
        """Replace the log collection wholesale and re-apply the filter"""
        self.entries = tuple(entries)
        self.level_counts = Counter(entry.level for entry in self.entries)
        self._recompute()

    def set_filter(self, text: str) -> None:
        self.filter_text = text
        self._recompute()

    def append_filter_char(self, char: str) -> None:
        self.set_filter(self.filter_text + char)

    def pop_filter_char(self) -> None:
        if self.filter_text:
            self.set_filter(self.filter_text[:-1])

    def _recompute(self) -> None:
        filtered = filter_items(self.entries, self.filter_text, key=lambda entry: entry.message)
        self.filtered = filtered
        self.selected_index = 0 if filtered else None
        self.expanded = False
        self.list_offset = 0
        self.content_offset = 0
        logger.debug("Filter %r kept %d of %d entries",
                     self.filter_text, len(filtered), len(self.entries))

    # Selection

    def get_selected_entry(self) -> Optional[LogEntry]:
        if self.selected_index is None:
            return None
        return self.filtered[self.selected_index]

    def move_selection(self, direction: int, visible_height: int) -> None:
        """
        Move the cursor one row up (direction < 0) or down (direction > 0)

        The cursor stops at the first and last rows. In collapsed mode the
        list offset follows the cursor only when it leaves the window. In
        expanded mode a new entry is shown from its first line.
        """
        if not self.filtered or self.selected_index is None:
            return

        if direction > 0:
            new_index = min(self.selected_index + 1, len(self.filtered) - 1)
        else:
            new_index = max(self.selected_index - 1, 0)

        if self.expanded:
            if new_index != self.selected_index:
                self.content_offset = 0
        else:
            self.list_offset = follow_offset(new_index, self.list_offset, visible_height)
        self.selected_index = new_index

    def page_selection(self, direction: int, visible_height: int) -> None:
        for _ in range(PAGE_STEP):
            self.move_selection(direction, visible_height)

    # Windows

    def visible_range(self, visible_height: int) -> Tuple[int, int]:
        """Centred [start, end) window around the selection"""
        return centered_window(self.selected_index, len(self.filtered), visible_height)

    def list_window(self, visible_height: int) -> Tuple[int, int]:
        """[start, end) window starting at the follow-policy list offset"""
        start = min(self.list_offset, len(self.filtered))
        return start, min(start + max(visible_height, 0), len(self.filtered))

    def recenter(self, visible_height: int) -> None:
        """Rebuild the list offset from the centred window (e.g. after a resize)"""
        self.list_offset = self.visible_range(visible_height)[0]

    # Expanded view

    def toggle_expand(self) -> None:
        self.expanded = not self.expanded
        self.content_offset = 0

    def _max_content_offset(self) -> Optional[int]:
        entry = self.get_selected_entry()
        if entry is None:
            return None
        return max(entry.line_count - 1, 0)

    def _scroll_forward(self, step: int) -> None:
        if not self.expanded:
            return
        max_offset = self._max_content_offset()
        if max_offset is None:
            return
        self.content_offset = min(self.content_offset + step, max_offset)

    def _scroll_back(self, step: int) -> None:
        if not self.expanded or self.get_selected_entry() is None:
            return
        self.content_offset = max(self.content_offset - step, 0)

    def scroll_up(self) -> None:
        self._scroll_back(LINE_STEP)

    def scroll_down(self) -> None:
        self._scroll_forward(LINE_STEP)

    def page_up(self) -> None:
        self._scroll_back(PAGE_STEP)

    def page_down(self) -> None:
        self._scroll_forward(PAGE_STEP)

    # Rendering

    def snapshot(self, visible_height: int) -> BrowserSnapshot:
        """
        Build a read-only view of the current state

        Args:
            visible_height: Rows available for the list or the entry body

        Returns:
            BrowserSnapshot with the rows or lines to draw
        """
        list_window = self.list_window(visible_height)
        entry = self.get_selected_entry()
        content_lines: Tuple[str, ...] = ()
        if self.expanded and entry is not None:
            end = self.content_offset + max(visible_height, 0)
            content_lines = entry.lines[self.content_offset:end]

        return BrowserSnapshot(
            function_name=self.function_name,
            time_range=self.time_range,
            filter_text=self.filter_text,
            total_entries=len(self.entries),
            visible_entries=len(self.filtered),
            selected_index=self.selected_index,
            expanded=self.expanded,
            list_offset=self.list_offset,
            content_offset=self.content_offset,
            list_window=list_window,
            centered_window=self.visible_range(visible_height),
            rows=tuple(self.filtered[list_window[0]:list_window[1]]),
            selected_entry=entry,
            content_lines=content_lines,
            error_count=self.level_counts[LogLevel.ERROR] + self.level_counts[LogLevel.CRITICAL],
            warning_count=self.level_counts[LogLevel.WARNING],
        )
