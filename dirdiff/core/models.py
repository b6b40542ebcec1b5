"""
Core data models for the directory comparison application.

This module defines the structures shared by the loader, the pane
state and the UI:
- Pane identity (left/right) and its complement
- Pane slots (origin path + entry set)
- Display lines and published pane views

All models are UI-agnostic and immutable where practical.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Iterable, Optional


EntrySet = frozenset[str]


# =============================================================================
# Enumerations
# =============================================================================

class PaneId(Enum):
    """Identifies one side of the comparison."""
    LEFT = auto()
    RIGHT = auto()

    @property
    def complement(self) -> 'PaneId':
        """The pane on the other side."""
        if self is PaneId.LEFT:
            return PaneId.RIGHT
        return PaneId.LEFT

    @property
    def label(self) -> str:
        return self.name.capitalize()


# =============================================================================
# Pane Models
# =============================================================================

@dataclass(frozen=True)
class PaneSlot:
    """
    Contents of one pane.

    The origin and the entries always come from the same load; a slot
    is replaced as a whole, never edited in place.
    """
    origin: Optional[Path] = None
    entries: EntrySet = field(default_factory=frozenset)

    @property
    def title(self) -> str:
        """Display text for the origin path."""
        if self.origin is None:
            return ""
        return str(self.origin)

    @property
    def is_loaded(self) -> bool:
        return self.origin is not None

    def difference(self, other: 'PaneSlot') -> EntrySet:
        """Entries present here but not in ``other``."""
        return self.entries - other.entries


@dataclass(frozen=True)
class Line:
    """A single row in a listing."""
    text: str
    struck: bool = False


def to_lines(entries: Iterable[str]) -> list[Line]:
    """Build display lines sorted by text."""
    return [Line(text) for text in sorted(entries)]


@dataclass(frozen=True)
class PaneView:
    """Published state of one pane."""
    pane_id: PaneId
    title: str
    lines: list[Line]
    diff: list[Line]
