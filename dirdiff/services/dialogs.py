"""
Non-blocking file dialogs.

Wraps QFileDialog so that a request returns immediately and the
result is delivered to a callback once the user accepts or cancels.
The Qt event loop keeps running while a dialog is open.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QFileDialog, QWidget

from dirdiff.core.state import PathCallback
from dirdiff.services.settings import SettingsManager


class FileDialogService(QObject):
    """
    Window-modal file dialogs delivering their result asynchronously.

    ``QDialog.open()`` returns at once and blocks input to the parent
    window only, so the event loop keeps running while a dialog is up.

    Dialogs start in the last directory the user picked from and the
    directory of every accepted pick is remembered in the settings.
    """

    def __init__(
        self,
        settings_manager: Optional[SettingsManager] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self._settings_manager = settings_manager or SettingsManager()
        self._parent_widget = parent
        self._open_dialogs: list[QFileDialog] = []

    def pick_folder(self, title: str, callback: PathCallback) -> None:
        """Ask for an existing folder."""
        dialog = self._create_dialog(title)
        dialog.setFileMode(QFileDialog.FileMode.Directory)
        dialog.setOption(QFileDialog.Option.ShowDirsOnly, True)
        self._show(dialog, callback)

    def pick_file(
        self,
        title: str,
        extension_filter: tuple[str, list[str]],
        callback: PathCallback
    ) -> None:
        """Ask for an existing file matching ``extension_filter``."""
        dialog = self._create_dialog(title)
        dialog.setFileMode(QFileDialog.FileMode.ExistingFile)
        dialog.setNameFilters([self._name_filter(extension_filter), "All files (*)"])
        self._show(dialog, callback)

    def save_file(
        self,
        title: str,
        extension_filter: tuple[str, list[str]],
        callback: PathCallback
    ) -> None:
        """Ask for a destination to save to."""
        dialog = self._create_dialog(title)
        dialog.setAcceptMode(QFileDialog.AcceptMode.AcceptSave)
        dialog.setFileMode(QFileDialog.FileMode.AnyFile)
        dialog.setNameFilter(self._name_filter(extension_filter))

        _, extensions = extension_filter
        if extensions:
            dialog.setDefaultSuffix(extensions[0])

        self._show(dialog, callback)

    @property
    def pending_count(self) -> int:
        """Number of dialogs currently open."""
        return len(self._open_dialogs)

    def _create_dialog(self, title: str) -> QFileDialog:
        start_dir = self._settings_manager.settings.last_directory or str(Path.home())
        dialog = QFileDialog(self._parent_widget, title, start_dir)
        return dialog

    def _show(self, dialog: QFileDialog, callback: PathCallback) -> None:
        """Open ``dialog`` without blocking and route its result."""

        def on_accepted() -> None:
            self._release(dialog)
            selected = dialog.selectedFiles()
            if not selected:
                callback(None)
                return

            path = Path(selected[0])
            self._settings_manager.remember_directory(path)
            callback(path)

        def on_rejected() -> None:
            self._release(dialog)
            callback(None)

        dialog.accepted.connect(on_accepted)
        dialog.rejected.connect(on_rejected)

        self._open_dialogs.append(dialog)
        logging.debug(f"FileDialogService - Showing dialog {dialog.windowTitle()!r}")
        dialog.open()

    def _release(self, dialog: QFileDialog) -> None:
        if dialog in self._open_dialogs:
            self._open_dialogs.remove(dialog)
        dialog.deleteLater()

    @staticmethod
    def _name_filter(extension_filter: tuple[str, list[str]]) -> str:
        """Build a Qt name filter such as ``JSON (*.json)``."""
        name, extensions = extension_filter
        patterns = ' '.join(f"*.{ext}" for ext in extensions)
        return f"{name} ({patterns})"
