"""Tests for the pane models."""

from __future__ import annotations

from pathlib import Path

import pytest

from dirdiff.core.models import Line, PaneId, PaneSlot, to_lines


def test_complement_swaps_sides():
    assert PaneId.LEFT.complement is PaneId.RIGHT
    assert PaneId.RIGHT.complement is PaneId.LEFT


def test_empty_slot():
    slot = PaneSlot()

    assert slot.origin is None
    assert slot.entries == frozenset()
    assert slot.title == ""
    assert not slot.is_loaded


def test_slot_title_is_origin_text():
    origin = Path("some") / "dir"

    assert PaneSlot(origin=origin).title == str(origin)


def test_slot_is_immutable():
    slot = PaneSlot(origin=Path("a"), entries=frozenset({"x"}))

    with pytest.raises(AttributeError):
        slot.entries = frozenset()


def test_difference_is_one_way():
    a = PaneSlot(entries=frozenset({"a", "b", "c"}))
    b = PaneSlot(entries=frozenset({"b", "c", "d"}))

    assert a.difference(b) == {"a"}
    assert b.difference(a) == {"d"}
    assert a.difference(a) == frozenset()


def test_to_lines_sorts_and_defaults_unstruck():
    assert to_lines({"b", "B", "a"}) == [Line("B"), Line("a"), Line("b")]
