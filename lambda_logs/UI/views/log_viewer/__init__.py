"""
Log Viewer Package - Log browsing screen

Package Structure:
- view: Screen composition (LogViewerView)
- components: Panels (LogFilterBar, LogStatsPanel, LogListPanel, LogEntryDetailsPanel)
"""

from .view import LogViewerView

from .components import (
    LogFilterBar,
    LogStatsPanel,
    LogListPanel,
    LogEntryDetailsPanel
)

__all__ = [
    # Main view
    'LogViewerView',

    # UI components
    'LogFilterBar',
    'LogStatsPanel',
    'LogListPanel',
    'LogEntryDetailsPanel',
]
