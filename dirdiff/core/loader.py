"""
Directory loader for pane contents.

Turns a filesystem path into a pane slot using two strategies:
- Directory listing (names of the direct children)
- Imported listing (a JSON array of strings previously exported)

Also provides the matching exporter. Neither side raises: every
failure is logged and degrades to an empty entry set.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Iterable

from dirdiff.core.models import EntrySet, PaneSlot


def _display_name(name: str) -> str:
    """Decode a file name lossily, replacing undecodable bytes."""
    return os.fsencode(name).decode('utf-8', errors='replace')


class ListingFormatError(ValueError):
    """Raised when an imported listing is not a JSON array of strings."""


def parse_listing(data: bytes) -> EntrySet:
    """
    Parse an exported listing.

    Args:
        data: Raw file content

    Returns:
        Entry set with duplicates collapsed

    Raises:
        ValueError: If the content is not a JSON array of strings
    """
    value = json.loads(data)

    if not isinstance(value, list):
        raise ListingFormatError(f"expected a JSON array, got {type(value).__name__}")

    for item in value:
        if not isinstance(item, str):
            raise ListingFormatError(f"expected string entries, got {item!r}")
        try:
            item.encode('utf-8')
        except UnicodeEncodeError:
            raise ListingFormatError(f"entry {item!r} is not valid unicode") from None

    return frozenset(value)


def format_listing(entries: Iterable[str]) -> str:
    """Serialize entries as a pretty-printed JSON array."""
    return json.dumps(sorted(entries), indent=2, ensure_ascii=False)


class DirectoryLoader:
    """
    Loads a directory or an exported listing into a pane slot.

    The directory strategy is tried first. Anything that cannot be
    opened as a directory is read as a file and parsed as a listing.
    """

    def load(self, path: Path | str) -> PaneSlot:
        """
        Load a path.

        Args:
            path: Directory or exported listing file

        Returns:
            PaneSlot whose origin is always ``path``
        """
        path = Path(path)

        try:
            entries = self._list_directory(path)
        except OSError as dir_error:
            logging.debug(f"DirectoryLoader - {path} is not a readable directory: {dir_error}")
            entries = self._read_listing(path)

        return PaneSlot(origin=path, entries=entries)

    def _list_directory(self, path: Path) -> EntrySet:
        """Collect the names of the direct children of ``path``."""
        names: set[str] = set()

        with os.scandir(path) as it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as e:
                    # The iterator is exhausted after a read error
                    logging.warning(f"DirectoryLoader - Failed to get entry in {path}: {e}")
                    break
                names.add(_display_name(entry.name))

        return frozenset(names)

    def _read_listing(self, path: Path) -> EntrySet:
        """Read ``path`` as an exported listing."""
        try:
            data = path.read_bytes()
        except OSError as e:
            logging.error(f"DirectoryLoader - Failed to read directory/file {path}: {e}")
            return frozenset()

        try:
            return parse_listing(data)
        except ValueError as e:
            logging.error(f"DirectoryLoader - Could not parse {path} as a JSON listing: {e}")
            return frozenset()


def export_entries(path: Path | str, entries: Iterable[str]) -> bool:
    """
    Write entries to ``path`` as a JSON listing.

    Returns:
        True if the file was written
    """
    path = Path(path)

    try:
        data = format_listing(entries).encode('utf-8')
    except ValueError as e:
        logging.error(f"export_entries - Cannot encode listing for {path}: {e}")
        return False

    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        logging.error(f"export_entries - Write to {path} failed: {e}")
        return False

    logging.info(f"export_entries - Exported listing to {path}")
    return True
