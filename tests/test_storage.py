"""Tests for snapshot storage."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from timeline_segmenter.storage import (
    FileSnapshotStore,
    MemorySnapshotStore,
    dumps_timers,
    loads_timers,
)


class TestSnapshotFormat:
    """Test snapshot serialization."""

    def test_dumps_matches_timer_shape(self, make_timer):
        """Test that the snapshot is a JSON array of timer objects."""
        timer = make_timer("09:00", ["10:30", "12:00"], name="Morning")
        data = json.loads(dumps_timers([timer]))

        assert data == [{
            "id": "timer_1",
            "name": "Morning",
            "start": "09:00",
            "end": "12:00",
            "segments": [
                {"id": "seg_1", "title": "Segment 1", "color": "#1976d2", "end": "10:30"},
                {"id": "seg_2", "title": "Segment 2", "color": "#1976d2", "end": "12:00"},
            ],
        }]

    def test_loads_preserves_order(self, make_timer):
        timers = [
            make_timer("09:00", ["12:00"], timer_id="b"),
            make_timer("13:00", ["14:00", "15:00"], timer_id="a"),
        ]
        assert loads_timers(dumps_timers(timers)) == timers

    def test_loads_empty_array(self):
        assert loads_timers("[]") == []

    def test_loads_invalid_json(self):
        with pytest.raises(ValueError):
            loads_timers("{not json")

    def test_loads_not_an_array(self):
        with pytest.raises(ValueError) as exc_info:
            loads_timers('{"timers": []}')
        assert "array" in str(exc_info.value)

    def test_loads_broken_invariant(self, make_timer):
        """Test that a snapshot violating the partition is rejected."""
        data = make_timer("09:00", ["10:30", "12:00"]).to_dict()
        data["end"] = "13:00"

        with pytest.raises(ValueError) as exc_info:
            loads_timers(json.dumps([data]))
        assert "Error in timer 1" in str(exc_info.value)

    def test_loads_duplicate_timer_ids(self, make_timer):
        timer = make_timer("09:00", ["12:00"])
        with pytest.raises(ValueError) as exc_info:
            loads_timers(dumps_timers([timer, timer]))
        assert "duplicate" in str(exc_info.value)


class TestMemorySnapshotStore:
    """Test MemorySnapshotStore class."""

    def test_read_empty(self):
        assert MemorySnapshotStore().read() is None

    def test_write_then_read(self):
        store = MemorySnapshotStore()
        store.write("[]")
        assert store.read() == "[]"


class TestFileSnapshotStore:
    """Test FileSnapshotStore class."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir)

    def test_read_missing(self, temp_dir):
        assert FileSnapshotStore(temp_dir).read() is None

    def test_path_uses_key(self, temp_dir):
        store = FileSnapshotStore(temp_dir, key="lessons")
        assert store.path == temp_dir / "lessons.json"

    def test_write_then_read(self, temp_dir):
        """Test writing a snapshot and reading it back."""
        store = FileSnapshotStore(temp_dir / "nested")
        store.write('[{"name": "Café"}]')

        assert store.path.exists()
        assert store.read() == '[{"name": "Café"}]'
        assert [p.name for p in store.directory.iterdir()] == ["timers.json"]

    def test_failed_write_keeps_previous_snapshot(self, temp_dir):
        """Test that an interrupted write leaves the old file and no temp file."""
        store = FileSnapshotStore(temp_dir)
        store.write("[]")

        with patch('timeline_segmenter.storage.os.replace', side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.write('[{"id": "x"}]')

        assert store.read() == "[]"
        assert [p.name for p in temp_dir.iterdir()] == ["timers.json"]

    def test_failed_encoding_removes_temp_file(self, temp_dir):
        """Test that text the file cannot encode leaves no temp file behind."""
        store = FileSnapshotStore(temp_dir)
        store.write("[]")

        with pytest.raises(UnicodeEncodeError):
            store.write('[{"name": "bad\ud800"}]')

        assert store.read() == "[]"
        assert [p.name for p in temp_dir.iterdir()] == ["timers.json"]
