"""Tests for the directory loader and listing export."""

from __future__ import annotations

import json
import logging
import os

import pytest

from dirdiff.core import loader as loader_module
from dirdiff.core.loader import (
    DirectoryLoader,
    ListingFormatError,
    _display_name,
    export_entries,
    format_listing,
    parse_listing,
)


@pytest.fixture
def loader():
    return DirectoryLoader()


class TestDirectoryListing:

    def test_collects_child_names(self, loader, make_dir):
        directory = make_dir("left", ["a.txt", "b.txt"])
        (directory / "sub").mkdir()
        (directory / "sub" / "nested.txt").touch()

        slot = loader.load(directory)

        assert slot.origin == directory
        assert slot.entries == {"a.txt", "b.txt", "sub"}

    def test_empty_directory(self, loader, make_dir):
        directory = make_dir("empty", [])

        slot = loader.load(directory)

        assert slot.origin == directory
        assert slot.entries == frozenset()

    def test_accepts_string_path(self, loader, make_dir):
        directory = make_dir("left", ["a"])

        slot = loader.load(str(directory))

        assert slot.origin == directory
        assert slot.entries == {"a"}

    def test_reload_of_unchanged_directory_is_stable(self, loader, make_dir):
        directory = make_dir("left", ["a", "b", "c"])

        assert loader.load(directory).entries == loader.load(directory).entries

    def test_read_error_keeps_collected_names(self, loader, tmp_path, monkeypatch, caplog):
        class FakeEntry:
            def __init__(self, name):
                self.name = name

        class FakeScandir:
            def __init__(self, names):
                self._names = names

            def __enter__(self):
                return self

            def __exit__(self, *args):
                return False

            def __iter__(self):
                return self

            def __next__(self):
                if not self._names:
                    raise PermissionError(13, "Permission denied")
                return FakeEntry(self._names.pop(0))

        monkeypatch.setattr(loader_module.os, "scandir", lambda path: FakeScandir(["a", "b"]))

        with caplog.at_level(logging.WARNING):
            slot = loader.load(tmp_path)

        assert slot.origin == tmp_path
        assert slot.entries == {"a", "b"}
        assert any(
            record.levelno == logging.WARNING and "Permission denied" in record.getMessage()
            for record in caplog.records
        )

    def test_display_name_is_lossy(self):
        assert _display_name(os.fsdecode(b"\xff.txt")) == "\ufffd.txt"
        assert _display_name("résumé") == "résumé"

    @pytest.mark.skipif(os.name != "posix", reason="needs byte file names")
    def test_undecodable_name_is_replaced(self, loader, make_dir):
        directory = make_dir("raw", ["plain"])
        try:
            (directory / os.fsdecode(b"\xff.txt")).touch()
        except (OSError, UnicodeEncodeError):
            pytest.skip("file system rejects non-UTF-8 names")

        assert loader.load(directory).entries == {"plain", "\ufffd.txt"}

    @pytest.mark.skipif(os.name != "posix", reason="needs byte file names")
    def test_entries_need_no_metadata(self, loader, make_dir):
        directory = make_dir("locked", ["a", "b"])
        directory.chmod(0o444)
        try:
            if os.access(directory / "a", os.F_OK):
                pytest.skip("running with search permission regardless of mode")
            assert loader.load(directory).entries == {"a", "b"}
        finally:
            directory.chmod(0o755)


class TestImportedListing:

    def test_duplicates_collapse(self, loader, tmp_path):
        listing = tmp_path / "list.json"
        listing.write_text('["x","y","y"]', encoding="utf-8")

        slot = loader.load(listing)

        assert slot.origin == listing
        assert slot.entries == {"x", "y"}

    def test_non_ascii_names(self, loader, tmp_path):
        listing = tmp_path / "list.json"
        listing.write_text(json.dumps(["résumé.pdf", "日本.txt"], ensure_ascii=False), encoding="utf-8")

        assert loader.load(listing).entries == {"résumé.pdf", "日本.txt"}

    @pytest.mark.parametrize("content", [
        "not json at all",
        '{"a": 1}',
        '["a", 1]',
        '"a"',
        '["ok", "\\ud800"]',
    ])
    def test_invalid_listing_degrades_to_empty(self, loader, tmp_path, caplog, content):
        listing = tmp_path / "list.json"
        listing.write_text(content, encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            slot = loader.load(listing)

        assert slot.origin == listing
        assert slot.entries == frozenset()
        assert any(record.levelno == logging.ERROR for record in caplog.records)

    def test_missing_path_keeps_origin(self, loader, tmp_path, caplog):
        missing = tmp_path / "does-not-exist"

        with caplog.at_level(logging.ERROR):
            slot = loader.load(missing)

        assert slot.origin == missing
        assert slot.entries == frozenset()
        assert any("does-not-exist" in record.getMessage() for record in caplog.records)


class TestParseListing:

    def test_parses_bytes(self):
        assert parse_listing(b'["a", "b"]') == {"a", "b"}

    def test_rejects_non_array(self):
        with pytest.raises(ValueError):
            parse_listing(b'{"a": "b"}')

    def test_rejects_invalid_utf8(self):
        with pytest.raises(ValueError):
            parse_listing(b'["\xff\xfe\xfa"]')

    def test_rejects_lone_surrogate(self):
        with pytest.raises(ListingFormatError):
            parse_listing(b'["ok", "\\udc80"]')


class TestExport:

    def test_writes_sorted_pretty_json(self, tmp_path):
        target = tmp_path / "out.json"

        assert export_entries(target, {"b.txt", "a.txt", "sub"})

        text = target.read_text(encoding="utf-8")
        assert json.loads(text) == ["a.txt", "b.txt", "sub"]
        assert text == '[\n  "a.txt",\n  "b.txt",\n  "sub"\n]'

    def test_empty_set(self):
        assert format_listing(frozenset()) == "[]"

    def test_round_trip(self, loader, make_dir, tmp_path):
        directory = make_dir("left", ["a", "b", "ü"])
        original = loader.load(directory).entries
        target = tmp_path / "out.json"

        export_entries(target, original)

        assert loader.load(target).entries == original

    def test_write_failure_is_logged(self, tmp_path, caplog):
        target = tmp_path / "missing-dir" / "out.json"

        with caplog.at_level(logging.ERROR):
            assert export_entries(target, {"a"}) is False

        assert not target.exists()
        assert any(record.levelno == logging.ERROR for record in caplog.records)

    def test_unencodable_entry_keeps_previous_file(self, tmp_path, caplog):
        target = tmp_path / "out.json"
        target.write_text('["previous"]', encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            assert export_entries(target, {"ok", "\ud800"}) is False

        assert target.read_text(encoding="utf-8") == '["previous"]'
        assert any(record.levelno == logging.ERROR for record in caplog.records)
