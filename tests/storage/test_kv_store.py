from __future__ import annotations

from presetNav.storage.kv_store import JsonFileKeyValueStore, MemoryKeyValueStore


def test_memory_store_roundtrip():
    store = MemoryKeyValueStore({"a": "1"})

    store.set_item("b", "2")
    store.remove_item("a")
    store.remove_item("missing")

    assert store.get_item("a") is None
    assert store.get_item("b") == "2"


def test_json_file_store_shares_state_between_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    first = JsonFileKeyValueStore(path)
    second = JsonFileKeyValueStore(path)

    first.set_item("key", "value")

    assert second.get_item("key") == "value"
    second.remove_item("key")
    assert first.get_item("key") is None


def test_json_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("[not, an, object", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get_item("key") is None

    store.set_item("key", "value")
    assert store.get_item("key") == "value"


def test_json_file_store_skips_non_string_values(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text('{"number": 5, "text": "ok"}', encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get_item("number") is None
    assert store.get_item("text") == "ok"
