"""
lambda_logs UI Views Package
"""

from .selection_list import SelectionListView
from .date_selection import DateSelectionView
from .log_viewer import LogViewerView

__all__ = [
    'SelectionListView',
    'DateSelectionView',
    'LogViewerView'
]
