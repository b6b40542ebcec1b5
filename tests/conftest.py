"""Shared fixtures."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import pytest

from dirdiff.core.models import Line, PaneId


class FakeDialogs:
    """
    Dialog service that keeps every request pending until the test
    resolves it, like a dialog the user has not answered yet.
    """

    def __init__(self):
        self.requests: list[tuple[str, str, Optional[tuple], object]] = []

    def pick_folder(self, title, callback):
        self.requests.append(("folder", title, None, callback))

    def pick_file(self, title, extension_filter, callback):
        self.requests.append(("file", title, extension_filter, callback))

    def save_file(self, title, extension_filter, callback):
        self.requests.append(("save", title, extension_filter, callback))

    def resolve(self, path: Optional[Path], index: int = 0) -> None:
        """Answer a pending request with ``path`` (None cancels)."""
        _, _, _, callback = self.requests.pop(index)
        callback(path)


class RecordingSink:
    """Presentation sink that records every call."""

    def __init__(self):
        self.calls: list[tuple[str, PaneId, object]] = []
        self.titles: dict[PaneId, str] = {}
        self.lines: dict[PaneId, list[Line]] = {}
        self.diffs: dict[PaneId, list[Line]] = {}

    def set_title(self, pane_id, title):
        self.calls.append(("title", pane_id, title))
        self.titles[pane_id] = title

    def set_lines(self, pane_id, lines):
        self.calls.append(("lines", pane_id, lines))
        self.lines[pane_id] = lines

    def set_diff(self, pane_id, lines):
        self.calls.append(("diff", pane_id, lines))
        self.diffs[pane_id] = lines

    def texts(self, pane_id) -> list[str]:
        return [line.text for line in self.lines[pane_id]]

    def diff_texts(self, pane_id) -> list[str]:
        return [line.text for line in self.diffs[pane_id]]


@pytest.fixture
def dialogs():
    return FakeDialogs()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "config" / "settings.json"


@pytest.fixture(scope="session")
def qapp():
    """Offscreen QApplication for widget tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


@pytest.fixture
def make_dir(tmp_path):
    """Factory creating a directory with one empty file per entry."""

    def factory(name: str, entries) -> Path:
        directory = tmp_path / name
        directory.mkdir()
        for entry in entries:
            (directory / entry).touch()
        return directory

    return factory
