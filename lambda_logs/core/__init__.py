"""
Core Package - Navigation state machine and log browsing engine

Package Structure:
- keyword_filter: Whole-keyword AND filtering shared by every list
- viewport: Follow and centering window policies
- entry_model: Filterable selection list (profiles, functions)
- range_selector: Quick/custom time range selection
- log_entry: Log events, message bodies and level detection
- log_browser: Filtered view, selection and scroll state for logs
- navigation: Screen state machine and fetch request handling
"""

from .entry_model import EntryModel
from .keyword_filter import filter_items, matches, parse_keywords
from .log_browser import BrowserSnapshot, LogBrowser
from .log_entry import LogEntry, LogLevel, PlainMessage, StructuredMessage, format_json, line_count
from .navigation import AppState, ControllerSnapshot, FetchKind, FetchRequest, NavigationController
from .range_selector import QUICK_RANGES, ActiveColumn, DateFields, QuickRange, RangeSelector, TimeRange
from .viewport import centered_window, follow_offset

__all__ = [
    # State machine
    'NavigationController',
    'AppState',
    'FetchKind',
    'FetchRequest',
    'ControllerSnapshot',

    # Components
    'EntryModel',
    'RangeSelector',
    'LogBrowser',
    'BrowserSnapshot',

    # Data models
    'LogEntry',
    'LogLevel',
    'PlainMessage',
    'StructuredMessage',
    'TimeRange',
    'QuickRange',
    'DateFields',
    'ActiveColumn',
    'QUICK_RANGES',

    # Helpers
    'filter_items',
    'matches',
    'parse_keywords',
    'format_json',
    'line_count',
    'centered_window',
    'follow_offset',
]
