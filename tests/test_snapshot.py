"""SnapshotStore tests."""

import json

import pytest

from garden_stock_monitor.errors import PersistenceError
from garden_stock_monitor.snapshot import SnapshotStore


class TestSnapshotStore:
    """load / save / clear."""

    def test_missing_file_loads_none(self, tmp_path):
        assert SnapshotStore(tmp_path / "stockData.json").load() is None

    def test_invalid_json_loads_none(self, tmp_path):
        path = tmp_path / "stockData.json"
        path.write_text("{not json", encoding="utf-8")
        assert SnapshotStore(path).load() is None

    def test_non_utf8_bytes_load_none(self, tmp_path):
        path = tmp_path / "stockData.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        assert SnapshotStore(path).load() is None

    def test_save_then_load(self, tmp_path):
        store = SnapshotStore(tmp_path / "stockData.json")
        payload = {"data": [{"id": 1, "name": "A", "inStock": True}]}
        store.save(payload)
        assert store.load() == payload

    def test_save_is_deterministic(self, tmp_path):
        path = tmp_path / "stockData.json"
        SnapshotStore(path).save({"b": 1, "a": [1, 2]})
        assert path.read_text(encoding="utf-8") == json.dumps({"a": [1, 2], "b": 1}, indent=2)

    def test_save_overwrites(self, tmp_path):
        store = SnapshotStore(tmp_path / "stockData.json")
        store.save([1])
        store.save(None)
        assert store.load() is None
        assert (tmp_path / "stockData.json").read_text(encoding="utf-8") == "null"

    def test_save_creates_parent_dirs(self, tmp_path):
        store = SnapshotStore(tmp_path / "nested" / "dir" / "stock.json")
        store.save([])
        assert store.load() == []

    def test_unserializable_payload(self, tmp_path):
        with pytest.raises(PersistenceError):
            SnapshotStore(tmp_path / "stock.json").save({"x": object()})

    def test_clear(self, tmp_path):
        store = SnapshotStore(tmp_path / "stock.json")
        store.save([1])
        store.clear()
        store.clear()
        assert store.load() is None
