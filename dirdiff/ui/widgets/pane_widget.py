"""
Pane widget for one side of the comparison.

Shows:
- The origin path as title
- Open / Import / Export / Reload actions
- All entries of the pane
- Entries missing from the other pane
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QSplitter,
    QLabel, QListWidget, QListWidgetItem, QPushButton,
    QGroupBox, QStyle, QAbstractItemView,
)

from dirdiff.core.models import Line, PaneId


STRUCK_ROLE = Qt.ItemDataRole.UserRole + 1


class LineListWidget(QListWidget):
    """
    List of entry names.

    Double-clicking a row toggles its strike-through, letting the user
    tick off entries they have already looked at.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.setUniformItemSizes(True)
        self.itemDoubleClicked.connect(self._toggle_struck)

    def set_lines(self, lines: list[Line]) -> None:
        self.clear()
        for line in lines:
            item = QListWidgetItem(line.text)
            self._apply_struck(item, line.struck)
            self.addItem(item)

    def lines(self) -> list[Line]:
        """Current rows including their display flags."""
        return [
            Line(self.item(row).text(), bool(self.item(row).data(STRUCK_ROLE)))
            for row in range(self.count())
        ]

    def _toggle_struck(self, item: QListWidgetItem) -> None:
        self._apply_struck(item, not item.data(STRUCK_ROLE))

    @staticmethod
    def _apply_struck(item: QListWidgetItem, struck: bool) -> None:
        item.setData(STRUCK_ROLE, struck)
        font = item.font()
        font.setStrikeOut(struck)
        item.setFont(font)


class PaneWidget(QWidget):
    """
    One side of the comparison window.

    The widget only displays what it is given; user actions are
    emitted as signals carrying the pane id.
    """

    # Signals
    open_requested = pyqtSignal(object)  # PaneId
    import_requested = pyqtSignal(object)
    export_requested = pyqtSignal(object)
    reload_requested = pyqtSignal(object)

    def __init__(self, pane_id: PaneId, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.pane_id = pane_id
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        # Title
        self._title_label = QLabel()
        self._title_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._title_label.setStyleSheet("font-weight: bold;")
        self._set_title_text("")
        layout.addWidget(self._title_label)

        # Actions
        layout.addLayout(self._create_buttons())

        # Listings
        splitter = QSplitter(Qt.Orientation.Vertical)

        self._lines_group = QGroupBox()
        lines_layout = QVBoxLayout(self._lines_group)
        self._lines_list = LineListWidget()
        lines_layout.addWidget(self._lines_list)
        splitter.addWidget(self._lines_group)

        self._diff_group = QGroupBox()
        diff_layout = QVBoxLayout(self._diff_group)
        self._diff_list = LineListWidget()
        diff_layout.addWidget(self._diff_list)
        splitter.addWidget(self._diff_group)

        layout.addWidget(splitter)

        self._update_group_titles()

    def _create_buttons(self) -> QHBoxLayout:
        """Create the action buttons."""
        buttons = QHBoxLayout()
        buttons.setSpacing(4)

        style = self.style()

        self.open_button = QPushButton(
            style.standardIcon(QStyle.StandardPixmap.SP_DirOpenIcon), "Open"
        )
        self.open_button.setToolTip("Open a folder")
        self.open_button.clicked.connect(lambda: self.open_requested.emit(self.pane_id))
        buttons.addWidget(self.open_button)

        self.import_button = QPushButton(
            style.standardIcon(QStyle.StandardPixmap.SP_FileIcon), "Import"
        )
        self.import_button.setToolTip("Import an exported list")
        self.import_button.clicked.connect(lambda: self.import_requested.emit(self.pane_id))
        buttons.addWidget(self.import_button)

        self.export_button = QPushButton(
            style.standardIcon(QStyle.StandardPixmap.SP_DialogSaveButton), "Export"
        )
        self.export_button.setToolTip("Export this list as JSON")
        self.export_button.clicked.connect(lambda: self.export_requested.emit(self.pane_id))
        buttons.addWidget(self.export_button)

        self.reload_button = QPushButton(
            style.standardIcon(QStyle.StandardPixmap.SP_BrowserReload), "Reload"
        )
        self.reload_button.setToolTip("Read the folder or list again")
        self.reload_button.clicked.connect(lambda: self.reload_requested.emit(self.pane_id))
        buttons.addWidget(self.reload_button)

        buttons.addStretch()
        return buttons

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def title(self) -> str:
        return self._title

    def set_title(self, title: str) -> None:
        self._set_title_text(title)

    def _set_title_text(self, title: str) -> None:
        self._title = title
        self._title_label.setText(title or f"{self.pane_id.label}: nothing loaded")
        self._title_label.setToolTip(title)

    def set_lines(self, lines: list[Line]) -> None:
        self._lines_list.set_lines(lines)
        self._update_group_titles()

    def set_diff(self, lines: list[Line]) -> None:
        self._diff_list.set_lines(lines)
        self._update_group_titles()

    def lines(self) -> list[Line]:
        return self._lines_list.lines()

    def diff(self) -> list[Line]:
        return self._diff_list.lines()

    def _update_group_titles(self) -> None:
        self._lines_group.setTitle(f"All entries ({self._lines_list.count()})")
        self._diff_group.setTitle(
            f"Only in {self.pane_id.label.lower()} ({self._diff_list.count()})"
        )
