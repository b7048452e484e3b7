"""Unit tests for the local key-value stores."""

import json
import pytest
import yaml

from diario.data.store import FileStore, MemoryStore
from diario.recovery import CorruptionError


class TestMemoryStore:
    """Test the in-memory store."""

    def test_get_set_remove(self):
        """Test basic key operations."""
        store = MemoryStore()
        assert store.get("k") is None
        assert store.contains("k") is False

        store.set("k", "value")
        assert store.get("k") == "value"
        assert store.contains("k") is True

        store.remove("k")
        store.remove("k")
        assert store.get("k") is None

    def test_list_values_are_copied(self):
        """Test list values cannot be changed behind the store's back."""
        store = MemoryStore()
        items = ["a", "b"]
        store.set("k", items)
        items.append("c")
        store.get("k").append("d")
        assert store.get("k") == ["a", "b"]

    @pytest.mark.parametrize("value", [1, {"a": "b"}, ["a", 2], None])
    def test_rejects_other_values(self, value):
        """Test only text and lists of text are stored."""
        with pytest.raises(TypeError):
            MemoryStore().set("k", value)


class TestFileStore:
    """Test the file-backed store."""

    def test_yaml_round_trip(self, store_path):
        """Test values survive a fresh store instance on the same file."""
        FileStore(store_path).set("projects_data", '[{"name": "Work"}]')
        FileStore(store_path).set("tasks", ["{}", "{\"id\": \"1\"}"])

        store = FileStore(store_path)
        assert store.get("projects_data") == '[{"name": "Work"}]'
        assert store.get("tasks") == ["{}", "{\"id\": \"1\"}"]
        assert yaml.safe_load(store_path.read_text())["tasks"] == ["{}", "{\"id\": \"1\"}"]

    def test_json_document(self, tmp_path):
        """Test a .json path is written as JSON."""
        path = tmp_path / "store.json"
        FileStore(path).set("k", "v")
        assert json.loads(path.read_text()) == {"k": "v"}
        assert FileStore(path).get("k") == "v"

    def test_missing_file(self, tmp_path):
        """Test a store with no file yet is empty."""
        store = FileStore(tmp_path / "nested" / "store.yml")
        assert store.get("k") is None
        store.remove("k")
        assert not (tmp_path / "nested" / "store.yml").exists()

    def test_creates_directories(self, tmp_path):
        """Test the first write creates the data directory."""
        path = tmp_path / "a" / "b" / "store.yml"
        FileStore(path).set("k", "v")
        assert path.exists()

    def test_other_keys_untouched(self, store_path):
        """Test writing or removing one key keeps the others."""
        store = FileStore(store_path)
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_no_temp_files_left(self, store_path):
        """Test atomic writes clean up after themselves."""
        store = FileStore(store_path)
        store.set("k", "v")
        store.set("k", "w")
        assert [p.name for p in store_path.parent.iterdir()] == [store_path.name]

    @pytest.mark.parametrize("content", ["[unclosed", "- just\n- a list\n"])
    def test_corrupt_document(self, store_path, content):
        """Test unreadable documents raise CorruptionError on read."""
        store_path.write_text(content)
        with pytest.raises(CorruptionError):
            FileStore(store_path).get("k")

    @pytest.mark.parametrize("name, content", [
        ("store.yml", b"projects_data: '\xff\xfe garbage'\n"),
        ("store.json", b'{"projects_data": "\xff"}'),
    ])
    def test_invalid_utf8_document(self, tmp_path, name, content):
        """Test bytes that are not UTF-8 raise CorruptionError on read."""
        path = tmp_path / name
        path.write_bytes(content)
        with pytest.raises(CorruptionError):
            FileStore(path).get("projects_data")

    def test_deeply_nested_json_document(self, tmp_path):
        """Test a JSON document nested past the parser limit raises CorruptionError."""
        path = tmp_path / "store.json"
        path.write_text("[" * 200000)
        with pytest.raises(CorruptionError):
            FileStore(path).get("k")

    def test_corrupt_value(self, store_path):
        """Test a value of the wrong type raises CorruptionError."""
        store_path.write_text("k:\n  nested: mapping\n")
        with pytest.raises(CorruptionError):
            FileStore(store_path).get("k")

    def test_write_replaces_corrupt_document(self, store_path):
        """Test writing to an unreadable store starts a fresh document."""
        store_path.write_text("[unclosed")
        store = FileStore(store_path)
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_remove_resets_corrupt_document(self, store_path):
        """Test removing from an unreadable store leaves an empty document."""
        store_path.write_text("[unclosed")
        store = FileStore(store_path)
        store.remove("k")
        assert store.get("k") is None
