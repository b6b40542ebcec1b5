"""
PyQt6 user interface.

Provides the main window and the pane widgets that display the
pane state.
"""

from dirdiff.ui.main_window import MainWindow

__all__ = [
    'MainWindow',
]
