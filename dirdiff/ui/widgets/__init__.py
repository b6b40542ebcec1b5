"""
Reusable UI widgets for the directory comparison window.
"""

from dirdiff.ui.widgets.pane_widget import (
    LineListWidget,
    PaneWidget,
)

__all__ = [
    'LineListWidget',
    'PaneWidget',
]
