"""
Main application window.

Hosts the left and right panes side by side and wires their
actions to the pane state.
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt, QByteArray
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QSplitter, QWidget, QLabel

from dirdiff import APP_DISPLAY_NAME
from dirdiff.core.models import Line, PaneId
from dirdiff.core.state import PaneState
from dirdiff.services.dialogs import FileDialogService
from dirdiff.services.settings import SettingsManager
from dirdiff.ui.widgets.pane_widget import PaneWidget


class MainWindow(QMainWindow):
    """
    Two-pane comparison window.

    Acts as the presentation sink of the pane state: every publish
    lands in ``set_title``, ``set_lines`` and ``set_diff``.
    """

    def __init__(
        self,
        state: Optional[PaneState] = None,
        settings_manager: Optional[SettingsManager] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self._settings_manager = settings_manager or SettingsManager()
        self._settings = self._settings_manager.settings

        self._state = state or PaneState()
        self._dialogs = FileDialogService(self._settings_manager, self)
        self._state.set_dialogs(self._dialogs)

        self._panes: dict[PaneId, PaneWidget] = {}
        self._splitter: Optional[QSplitter] = None
        self._stats_label: Optional[QLabel] = None

        self._setup_ui()
        self._setup_menus()
        self._setup_statusbar()
        self._setup_connections()
        self._load_settings()

    @property
    def state(self) -> PaneState:
        return self._state

    def pane(self, pane_id: PaneId) -> PaneWidget:
        return self._panes[pane_id]

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def _setup_ui(self) -> None:
        """Set up the main UI layout."""
        self.setWindowTitle(APP_DISPLAY_NAME)
        self.setMinimumSize(600, 400)

        self._splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(self._splitter)

        for pane_id in PaneId:
            pane = PaneWidget(pane_id)
            self._panes[pane_id] = pane
            self._splitter.addWidget(pane)

    def _setup_menus(self) -> None:
        """Set up the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        for pane_id in PaneId:
            open_action = QAction(f"Open {pane_id.label} Folder...", self)
            open_action.triggered.connect(lambda _, p=pane_id: self._state.open(p))
            file_menu.addAction(open_action)

            import_action = QAction(f"Import {pane_id.label} List...", self)
            import_action.triggered.connect(lambda _, p=pane_id: self._state.import_listing(p))
            file_menu.addAction(import_action)

            export_action = QAction(f"Export {pane_id.label} List...", self)
            export_action.triggered.connect(lambda _, p=pane_id: self._state.export(p))
            file_menu.addAction(export_action)

            file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        view_menu = menubar.addMenu("&View")
        refresh_action = QAction("&Reload Both", self)
        refresh_action.setShortcut(QKeySequence.StandardKey.Refresh)
        refresh_action.triggered.connect(self._on_reload_both)
        view_menu.addAction(refresh_action)

    def _setup_statusbar(self) -> None:
        """Set up the status bar."""
        self._stats_label = QLabel()
        self.statusBar().addPermanentWidget(self._stats_label)

    def _setup_connections(self) -> None:
        """Set up signal connections."""
        for pane in self._panes.values():
            pane.open_requested.connect(self._state.open)
            pane.import_requested.connect(self._state.import_listing)
            pane.export_requested.connect(self._state.export)
            pane.reload_requested.connect(self._state.reload)

    def _load_settings(self) -> None:
        """Load application settings."""
        ui = self._settings.ui
        if ui.window_maximized:
            self.showMaximized()
        else:
            self.resize(ui.window_width, ui.window_height)

        if ui.splitter_state:
            self._splitter.restoreState(QByteArray.fromHex(ui.splitter_state.encode()))

    def _save_settings(self) -> None:
        """Save application settings."""
        ui = self._settings.ui
        ui.window_width = self.width()
        ui.window_height = self.height()
        ui.window_maximized = self.isMaximized()
        ui.splitter_state = self._splitter.saveState().toHex().data().decode()

        self._settings_manager.save()

    # -------------------------------------------------------------------------
    # Pane sink
    # -------------------------------------------------------------------------

    def set_title(self, pane_id: PaneId, title: str) -> None:
        self._panes[pane_id].set_title(title)
        self._update_window_title()

    def set_lines(self, pane_id: PaneId, lines: list[Line]) -> None:
        self._panes[pane_id].set_lines(lines)
        self._update_statistics()

    def set_diff(self, pane_id: PaneId, lines: list[Line]) -> None:
        self._panes[pane_id].set_diff(lines)
        self._update_statistics()

    def _update_window_title(self) -> None:
        left = self._panes[PaneId.LEFT].title()
        right = self._panes[PaneId.RIGHT].title()
        if left or right:
            self.setWindowTitle(f"{left or '-'} ↔ {right or '-'} - {APP_DISPLAY_NAME}")
        else:
            self.setWindowTitle(APP_DISPLAY_NAME)

    def _update_statistics(self) -> None:
        if self._stats_label is None:
            return
        self._stats_label.setText(
            f"Left only: {len(self._state.diff(PaneId.LEFT))}  |  "
            f"Right only: {len(self._state.diff(PaneId.RIGHT))}"
        )

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def _on_reload_both(self) -> None:
        for pane_id in PaneId:
            self._state.reload(pane_id)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Save settings and detach from the state before closing."""
        logging.debug("MainWindow - Closing")
        self._state.unbind()
        self._save_settings()
        super().closeEvent(event)
