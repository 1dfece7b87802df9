from __future__ import annotations

import json

from presetNav.application.write_back import apply_preset
from presetNav.domain.models import PresetOption
from presetNav.infrastructure.directory_host import DirectoryPresetHost


def make_dir(tmp_path):
    root = tmp_path / "presets"
    root.mkdir()
    (root / "Zeta.json").write_text(json.dumps({"temp": 0.1}), encoding="utf-8")
    (root / "Alpha.json").write_text(json.dumps({"temp": 0.5}), encoding="utf-8")
    (root / ".hidden.json").write_text("{}", encoding="utf-8")
    (root / "notes.txt").write_text("ignored", encoding="utf-8")
    return root


def test_lists_visible_json_files(tmp_path):
    host = DirectoryPresetHost(make_dir(tmp_path))

    assert host.list_options("openai") == [
        PresetOption("Alpha", "Alpha.json"),
        PresetOption("Zeta", "Zeta.json"),
    ]


def test_missing_directory(tmp_path):
    host = DirectoryPresetHost(tmp_path / "absent")

    assert host.list_options("openai") == []
    assert host.find_control("openai") is None


def test_save_and_read_content(tmp_path):
    host = DirectoryPresetHost(make_dir(tmp_path))

    name, key = host.save_preset("New", {"temperature": 0.3})

    assert (name, key) == ("New", "New.json")
    assert host.preset_exists("New")
    assert host.get_preset_content("New.json") == {"temperature": 0.3}


def test_unreadable_content_is_none(tmp_path):
    root = make_dir(tmp_path)
    (root / "Bad.json").write_text("{oops", encoding="utf-8")
    host = DirectoryPresetHost(root)

    assert host.get_preset_content("Bad.json") is None
    assert host.get_preset_content("Missing.json") is None


def test_apply_preset_records_active_value(tmp_path):
    host = DirectoryPresetHost(make_dir(tmp_path))

    apply_preset(host, "openai", PresetOption("Zeta", "Zeta.json"))
    apply_preset(host, "novel", PresetOption("Alpha", "Alpha.json"))

    assert host.active_presets() == {"openai": "Zeta.json", "novel": "Alpha.json"}
