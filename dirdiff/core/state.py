"""
Pane state for the two-sided comparison.

Owns the left and right slots, recomputes the one-way differences
after every change and pushes the result to a presentation sink.
"""

from __future__ import annotations

import logging
import weakref
from pathlib import Path
from typing import Callable, Optional, Protocol

from dirdiff.core.loader import DirectoryLoader, export_entries
from dirdiff.core.models import EntrySet, Line, PaneId, PaneSlot, PaneView, to_lines


LISTING_FILTER = ("JSON", ["json"])

PathCallback = Callable[[Optional[Path]], None]


class FileDialogs(Protocol):
    """
    Non-blocking file dialogs.

    Each method returns immediately; ``callback`` runs later with the
    chosen path, or with None if the user cancelled.
    """

    def pick_folder(self, title: str, callback: PathCallback) -> None: ...

    def pick_file(self, title: str, extension_filter: tuple[str, list[str]], callback: PathCallback) -> None: ...

    def save_file(self, title: str, extension_filter: tuple[str, list[str]], callback: PathCallback) -> None: ...


class PaneSink(Protocol):
    """Receives the published state of each pane."""

    def set_title(self, pane_id: PaneId, title: str) -> None: ...

    def set_lines(self, pane_id: PaneId, lines: list[Line]) -> None: ...

    def set_diff(self, pane_id: PaneId, lines: list[Line]) -> None: ...


class PaneState:
    """
    State of the left and right panes.

    Every load replaces one slot wholesale and republishes both panes,
    since the complement's diff changes too. The sink is held weakly;
    if it is gone by the time a dialog resumes, publishing is skipped.

    Usage:
        state = PaneState(dialogs=FileDialogService(settings_manager))
        state.read_path(PaneId.LEFT, Path("a"))
        state.bind(window)
    """

    def __init__(
        self,
        loader: Optional[DirectoryLoader] = None,
        dialogs: Optional[FileDialogs] = None,
    ):
        self._loader = loader or DirectoryLoader()
        self._dialogs = dialogs
        self._slots: dict[PaneId, PaneSlot] = {
            PaneId.LEFT: PaneSlot(),
            PaneId.RIGHT: PaneSlot(),
        }
        self._sink_ref: Optional[weakref.ReferenceType] = None

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def slot(self, pane_id: PaneId) -> PaneSlot:
        return self._slots[pane_id]

    def diff(self, pane_id: PaneId) -> EntrySet:
        """Entries of ``pane_id`` missing from the other pane."""
        return self._slots[pane_id].difference(self._slots[pane_id.complement])

    def view(self, pane_id: PaneId) -> PaneView:
        slot = self._slots[pane_id]
        return PaneView(
            pane_id=pane_id,
            title=slot.title,
            lines=to_lines(slot.entries),
            diff=to_lines(self.diff(pane_id)),
        )

    def set_dialogs(self, dialogs: FileDialogs) -> None:
        self._dialogs = dialogs

    # -------------------------------------------------------------------------
    # Sink binding
    # -------------------------------------------------------------------------

    def bind(self, sink: PaneSink) -> None:
        """Attach the presentation sink and publish the current state."""
        self._sink_ref = weakref.ref(sink)
        self._publish()

    def unbind(self) -> None:
        self._sink_ref = None

    def _publish(self) -> None:
        """Push title, listing and diff of both panes to the sink."""
        sink = self._sink_ref() if self._sink_ref is not None else None
        if sink is None:
            logging.debug("PaneState - No sink bound, skipping publish")
            return

        for pane_id in PaneId:
            view = self.view(pane_id)
            sink.set_lines(pane_id, view.lines)
            sink.set_diff(pane_id, view.diff)
            sink.set_title(pane_id, view.title)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def read_path(self, pane_id: PaneId, path: Path | str) -> None:
        """Load ``path`` into a pane without prompting."""
        self._replace(pane_id, self._loader.load(path))

    def _replace(self, pane_id: PaneId, slot: PaneSlot) -> None:
        self._slots[pane_id] = slot
        logging.info(
            f"PaneState - {pane_id.label} pane loaded {slot.title!r} ({len(slot.entries)} entries)"
        )
        self._publish()

    def _load_chosen(self, pane_id: PaneId, path: Optional[Path]) -> None:
        if path is None:
            logging.debug(f"PaneState - {pane_id.label} dialog cancelled")
            return
        self.read_path(pane_id, path)

    # -------------------------------------------------------------------------
    # User operations
    # -------------------------------------------------------------------------

    def open(self, pane_id: PaneId) -> None:
        """Prompt for a folder and load it into ``pane_id``."""
        self._require_dialogs().pick_folder(
            "Open folder...",
            lambda path: self._load_chosen(pane_id, path),
        )

    def import_listing(self, pane_id: PaneId) -> None:
        """Prompt for an exported listing and load it into ``pane_id``."""
        self._require_dialogs().pick_file(
            "Import list...",
            LISTING_FILTER,
            lambda path: self._load_chosen(pane_id, path),
        )

    def export(self, pane_id: PaneId) -> None:
        """Prompt for a destination and write the entries of ``pane_id``."""
        self._require_dialogs().save_file(
            "Export list...",
            LISTING_FILTER,
            lambda path: self._export_to(pane_id, path),
        )

    def _export_to(self, pane_id: PaneId, path: Optional[Path]) -> None:
        if path is None:
            logging.debug(f"PaneState - {pane_id.label} export cancelled")
            return
        # Read at resume time so the latest load is written.
        export_entries(path, self._slots[pane_id].entries)

    def reload(self, pane_id: PaneId) -> None:
        """Load the pane again from its current origin."""
        origin = self._slots[pane_id].origin
        if origin is None:
            logging.info(f"PaneState - {pane_id.label} pane has nothing to reload")
            return
        self.read_path(pane_id, origin)

    def _require_dialogs(self) -> FileDialogs:
        if self._dialogs is None:
            raise RuntimeError("PaneState has no file dialog service")
        return self._dialogs
