"""
Entry Model Module - Filterable selection list

Backs both the profile list and the function list:
- Order-preserving keyword filtering
- Saturating up/down and page navigation
- Centred render window for the highlighted row
"""
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from .keyword_filter import filter_items
from .viewport import centered_window

T = TypeVar("T")

PAGE_SIZE = 10


class EntryModel(Generic[T]):
    """Read-only list of candidates with a highlighted index and a filter"""

    def __init__(self, items: List[T], label: Callable[[T], str] = str):
        """
        Initialize the entry model

        Args:
            items: Candidate items in display order
            label: Function returning the display text of an item
        """
        self._items: Tuple[T, ...] = tuple(items)
        self._label = label
        self.filter_text = ""
        self.filtered: List[T] = list(self._items)
        self.selected_index: Optional[int] = 0 if self.filtered else None

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    def label(self, item: T) -> str:
        return self._label(item)

    def set_filter(self, text: str) -> None:
        """
        Recompute the filtered list and reset the highlight to the first match

        Args:
            text: New filter text
        """
        filtered = filter_items(self._items, text, key=self._label)
        self.filter_text = text
        self.filtered = filtered
        self.selected_index = 0 if filtered else None

    def append_filter_char(self, char: str) -> None:
        self.set_filter(self.filter_text + char)

    def pop_filter_char(self) -> None:
        if self.filter_text:
            self.set_filter(self.filter_text[:-1])

    def next(self) -> None:
        """Highlight the next item, stopping at the last one"""
        if self.selected_index is not None:
            self.selected_index = min(self.selected_index + 1, len(self.filtered) - 1)

    def previous(self) -> None:
        """Highlight the previous item, stopping at the first one"""
        if self.selected_index is not None:
            self.selected_index = max(self.selected_index - 1, 0)

    def page_down(self) -> None:
        for _ in range(PAGE_SIZE):
            self.next()

    def page_up(self) -> None:
        for _ in range(PAGE_SIZE):
            self.previous()

    def selected(self) -> Optional[T]:
        """Return the highlighted item, or None when the list is empty"""
        if self.selected_index is None:
            return None
        return self.filtered[self.selected_index]

    def visible_range(self, visible_height: int) -> Tuple[int, int]:
        return centered_window(self.selected_index, len(self.filtered), visible_height)
