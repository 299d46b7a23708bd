"""Tests for infrastructure.persistence.json_file module."""

import json
import threading

import pytest

from infrastructure.persistence import read_json, write_json_locked


@pytest.mark.unit
class TestReadJson:
    def test_reads_document(self, write_json):
        path = write_json("doc.json", {"a": [1, 2]})
        assert read_json(path) == {"a": [1, 2]}

    def test_missing_file(self, tmp_path):
        assert read_json(tmp_path / "missing.json") is None

    @pytest.mark.parametrize("content", ["", "{not json"])
    def test_empty_or_invalid(self, tmp_path, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        assert read_json(path) is None

    def test_directory(self, tmp_path):
        assert read_json(tmp_path) is None


@pytest.mark.unit
class TestWriteJsonLocked:
    def test_writes_pretty_utf8(self, tmp_path):
        path = tmp_path / "out.json"

        assert write_json_locked(path, [{"native_name": "Français"}]) is True

        text = path.read_text(encoding="utf-8")
        assert "Français" in text
        assert text.startswith("[\n    {")
        assert json.loads(text) == [{"native_name": "Français"}]

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "out.json"
        assert write_json_locked(path, {"ok": True})
        assert read_json(path) == {"ok": True}

    def test_shorter_content_truncates_previous(self, tmp_path):
        path = tmp_path / "out.json"
        write_json_locked(path, {"long": "x" * 100})
        write_json_locked(path, {})
        assert read_json(path) == {}

    def test_unserializable_data(self, tmp_path):
        path = tmp_path / "out.json"
        assert write_json_locked(path, {"bad": object()}) is False
        assert not path.exists()

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        assert write_json_locked(blocker / "out.json", {}) is False

    def test_concurrent_writers_leave_valid_document(self, tmp_path):
        path = tmp_path / "out.json"
        payloads = [{"writer": i, "items": list(range(50))} for i in range(8)]
        threads = [
            threading.Thread(target=write_json_locked, args=(path, payload))
            for payload in payloads
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert read_json(path) in payloads
