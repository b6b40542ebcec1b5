"""
Core comparison logic.

Provides:
- Pane models (PaneId, PaneSlot, Line, PaneView)
- Directory/listing loading and listing export
- The two-pane state with one-way differences

Nothing in this package depends on Qt.
"""

from dirdiff.core.models import (
    EntrySet,
    Line,
    PaneId,
    PaneSlot,
    PaneView,
)
from dirdiff.core.loader import (
    DirectoryLoader,
    export_entries,
    parse_listing,
)
from dirdiff.core.state import (
    FileDialogs,
    PaneSink,
    PaneState,
)

__all__ = [
    # Models
    'EntrySet',
    'Line',
    'PaneId',
    'PaneSlot',
    'PaneView',
    # Loader
    'DirectoryLoader',
    'export_entries',
    'parse_listing',
    # State
    'FileDialogs',
    'PaneSink',
    'PaneState',
]
