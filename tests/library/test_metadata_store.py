"""Tests for the navigator metadata sidecar."""

from __future__ import annotations

import json

from presetNav.config import METADATA_STORAGE_KEY
from presetNav.domain.models import Folder, MetadataState, PresetMetadata, RecordKind
from presetNav.library.metadata_store import MetadataStore
from presetNav.storage.kv_store import MemoryKeyValueStore


def test_load_missing_record_gives_empty_state(store):
    assert store.state.folders == {}
    assert store.state.presets == {}
    assert store.dirty is False


def test_save_then_load_round_trip(storage, clock):
    store = MetadataStore(storage, clock=clock)
    state = MetadataState()
    folder = Folder.create("Work", "root", store.now())
    folder.color = "#ff0000"
    state.folders[folder.id] = folder
    state.presets["Alpha"] = PresetMetadata(
        created_at="2024-01-01T00:00:00.000Z",
        last_modified="2024-01-02T00:00:00.000Z",
        folder_id=folder.id,
        image_url="data:image/png;base64,AAAA",
    )
    store.save(state)

    reloaded = MetadataStore(storage, clock=clock).load()

    assert reloaded.to_dict() == state.to_dict()
    assert reloaded.folders[folder.id].color == "#ff0000"
    assert reloaded.presets["Alpha"].folder_id == folder.id


def test_stored_record_uses_camel_case_keys(storage, store):
    folder = Folder.create("Work", "root", store.now())
    store.state.folders[folder.id] = folder
    store.state.presets["Alpha"] = PresetMetadata.stamped(store.now())
    store.save()

    payload = json.loads(storage.get_item(METADATA_STORAGE_KEY))

    assert set(payload) == {"folders", "presets"}
    assert payload["folders"][folder.id]["parentId"] == "root"
    assert "createdAt" in payload["presets"]["Alpha"]
    assert "folderId" not in payload["presets"]["Alpha"]


def test_malformed_json_resets_to_empty(caplog):
    storage = MemoryKeyValueStore({METADATA_STORAGE_KEY: "{not json"})
    store = MetadataStore(storage)

    state = store.load()

    assert state.folders == {} and state.presets == {}
    assert "Failed to load navigator metadata" in caplog.text


def test_schema_violation_resets_to_empty():
    bad = {"folders": {"f1": {"id": "f1", "name": "No parent"}}, "presets": {}}
    storage = MemoryKeyValueStore({METADATA_STORAGE_KEY: json.dumps(bad)})

    state = MetadataStore(storage).load()

    assert state.folders == {}


def test_missing_maps_are_filled_in():
    storage = MemoryKeyValueStore({METADATA_STORAGE_KEY: json.dumps({"folders": {}})})

    state = MetadataStore(storage).load()

    assert state.presets == {}


def test_touch_updates_last_modified_and_marks_dirty(store):
    store.state.presets["Alpha"] = PresetMetadata.stamped("2020-01-01T00:00:00.000Z")

    assert store.touch("Alpha", RecordKind.PRESET) is True
    assert store.state.presets["Alpha"].last_modified != "2020-01-01T00:00:00.000Z"
    assert store.state.presets["Alpha"].created_at == "2020-01-01T00:00:00.000Z"
    assert store.dirty is True


def test_touch_unknown_id_is_ignored(store):
    assert store.touch("missing", "folder") is False
    assert store.dirty is False


def test_commit_writes_only_when_dirty(storage, store):
    assert store.commit() is False
    assert storage.get_item(METADATA_STORAGE_KEY) is None

    store.state.presets["Alpha"] = PresetMetadata.stamped(store.now())
    store.mark_dirty()

    assert store.commit() is True
    assert store.dirty is False
    assert "Alpha" in json.loads(storage.get_item(METADATA_STORAGE_KEY))["presets"]


def test_timestamps_are_utc_with_millisecond_precision(store):
    stamp = store.now()

    assert stamp.endswith("Z")
    assert len(stamp) == len("2024-01-01T00:00:01.000Z")
