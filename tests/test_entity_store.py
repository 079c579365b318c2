"""Tests for key-value backends and JSON-array collections."""

import json

import pytest

from plan_overlay.store import (
    BUILDINGS_KEY,
    EntityStore,
    JsonFileStore,
    MemoryStore,
    replace_or_append,
)


class TestGetAll:
    def test_missing_key(self, store):
        assert store.get_all("nothing") == []

    @pytest.mark.parametrize("raw", ["", "{not json", "[1, 2", '{"a": 1}', "42", "null"])
    def test_corrupt_values_read_as_empty(self, raw):
        store = EntityStore(MemoryStore({BUILDINGS_KEY: raw}))
        assert store.get_all(BUILDINGS_KEY) == []

    def test_round_trip_preserves_order(self, store):
        items = [{"id": "b"}, {"id": "a"}, {"id": "c", "n": [1, 2]}]
        store.save_all(BUILDINGS_KEY, items)
        assert store.get_all(BUILDINGS_KEY) == items

    def test_save_all_replaces(self, store):
        store.save_all(BUILDINGS_KEY, [{"id": "a"}, {"id": "b"}])
        store.save_all(BUILDINGS_KEY, [{"id": "c"}])
        assert store.get_all(BUILDINGS_KEY) == [{"id": "c"}]


class TestReplaceOrAppend:
    def test_append(self):
        assert replace_or_append([1, 2], 3, lambda x: x == 3) == [1, 2, 3]

    def test_replace_keeps_position(self):
        items = [{"id": "a", "v": 1}, {"id": "b", "v": 1}, {"id": "c", "v": 1}]
        result = replace_or_append(items, {"id": "b", "v": 2}, lambda e: e["id"] == "b")
        assert result == [{"id": "a", "v": 1}, {"id": "b", "v": 2}, {"id": "c", "v": 1}]
        assert items[1]["v"] == 1

    def test_only_first_match_replaced(self):
        assert replace_or_append([1, 1], 9, lambda x: x == 1) == [9, 1]

    def test_idempotent(self):
        match = lambda e: e["id"] == "x"  # noqa: E731
        once = replace_or_append([{"id": "a"}], {"id": "x", "v": 1}, match)
        twice = replace_or_append(once, {"id": "x", "v": 2}, match)
        assert len(twice) == len(once) == 2
        assert twice.index({"id": "x", "v": 2}) == once.index({"id": "x", "v": 1})


class TestJsonFileStore:
    def test_missing_file(self, tmp_path):
        assert JsonFileStore(tmp_path / "store.json").get("k") is None

    def test_set_and_get(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        kv = JsonFileStore(path)
        kv.set("a", "[1]")
        kv.set("b", "[2]")
        assert kv.get("a") == "[1]"
        assert json.loads(path.read_text()) == {"a": "[1]", "b": "[2]"}

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("garbage")
        kv = JsonFileStore(path)
        assert kv.get("a") is None
        kv.set("a", "[]")
        assert kv.get("a") == "[]"

    def test_entity_store_over_file(self, tmp_path):
        store = EntityStore(JsonFileStore(tmp_path / "store.json"))
        store.save_all(BUILDINGS_KEY, [{"id": "a"}])
        reopened = EntityStore(JsonFileStore(tmp_path / "store.json"))
        assert reopened.get_all(BUILDINGS_KEY) == [{"id": "a"}]
