"""Tests for PresetNavigatorViewModel: pure Python, no Qt dependency."""

from __future__ import annotations

import json

import pytest

from conftest import FakeFilePicker, FakeHost
from presetNav.application.commands import CommandStatus
from presetNav.config import ROOT_FOLDER_ID
from presetNav.events.navigator_events import PresetAppliedEvent
from presetNav.gui.viewmodels.navigator_viewmodel import (
    EMPTY_FOLDER_MESSAGE,
    HOME,
    NO_CONTENT_MESSAGE,
    PresetNavigatorViewModel,
)
from presetNav.gui.viewmodels.selection import ClickModifier
from presetNav.library.metadata_store import MetadataStore


@pytest.fixture()
def files() -> FakeFilePicker:
    return FakeFilePicker()


@pytest.fixture()
def make_vm(host, dialogs, store, favorites, bus, files):
    def factory(**overrides):
        target = overrides.pop("host", host)
        kwargs = dict(store=store, favorites=favorites, event_bus=bus, files=files)
        kwargs.update(overrides)
        return PresetNavigatorViewModel("openai", target, dialogs, **kwargs)

    return factory


@pytest.fixture()
def vm(make_vm):
    viewmodel = make_vm()
    viewmodel.open()
    return viewmodel


def names(vm):
    return [item.name for item in vm.items.value]


class TestOpenAndRender:
    def test_open_renders_root(self, vm):
        assert vm.is_open.value is True
        assert names(vm) == ["Alpha", "Beta"]
        assert vm.breadcrumbs.value == (HOME,)
        assert vm.empty_message.value is None

    def test_open_stamps_metadata_once(self, vm, store):
        created = store.state.presets["Alpha"].created_at

        vm.close()
        vm.open()

        assert store.state.presets["Alpha"].created_at == created

    def test_render_when_closed_is_empty(self, make_vm):
        assert make_vm().render() == []

    def test_empty_folder_message(self, vm):
        work = vm.create_folder("Work").value

        vm.navigate_into(work)

        assert vm.items.value == []
        assert vm.empty_message.value == EMPTY_FOLDER_MESSAGE

    def test_search_without_results(self, vm):
        vm.set_search("  zzz ")

        assert vm.items.value == []
        assert vm.empty_message.value == 'No results for "zzz"'

    def test_open_resets_search_and_breadcrumbs(self, vm):
        work = vm.create_folder("Work").value
        vm.navigate_into(work)
        vm.set_search("alp")

        vm.close()
        vm.open()

        assert vm.view.search_text.value == ""
        assert vm.breadcrumbs.value == (HOME,)

    def test_rendered_signal_carries_items(self, vm):
        seen = []
        vm.rendered.connect(seen.append)

        vm.render()

        assert [item.name for item in seen[-1]] == ["Alpha", "Beta"]

    def test_sort_change_re_renders(self, vm):
        vm.set_sort("name-desc")

        assert names(vm) == ["Beta", "Alpha"]


class TestNavigation:
    def test_breadcrumbs_follow_navigation(self, vm):
        work = vm.create_folder("Work").value
        vm.navigate_into(work)
        drafts = vm.create_folder("Drafts").value
        vm.navigate_into(drafts)

        assert vm.breadcrumbs.value == (HOME, (work, "Work"), (drafts, "Drafts"))

        vm.navigate_to(0)
        assert vm.breadcrumbs.value == (HOME,)
        assert names(vm) == ["Work", "Alpha", "Beta"]

    def test_navigate_to_out_of_range(self, vm):
        with pytest.raises(IndexError):
            vm.navigate_to(3)

    def test_navigate_into_unknown_folder(self, vm):
        assert vm.navigate_into("missing") is False
        assert vm.breadcrumbs.value == (HOME,)

    def test_plain_click_on_folder_navigates(self, vm):
        work = vm.create_folder("Work").value

        vm.click(work)

        assert vm.current_folder_id == work

    def test_crumb_follows_rename(self, vm, dialogs):
        work = vm.create_folder("Work").value
        vm.navigate_into(work)
        dialogs.prompt_answers = ["Office"]

        vm.run_action("rename_folder", work)

        assert vm.breadcrumbs.value[-1] == (work, "Office")

    def test_deleting_current_folder_returns_home(self, vm):
        work = vm.create_folder("Work").value
        vm.navigate_into(work)

        result = vm.run_action("delete_folder", work)

        assert result.applied
        assert vm.breadcrumbs.value == (HOME,)
        assert names(vm) == ["Alpha", "Beta"]

    def test_create_folder_uses_current_folder(self, vm, store):
        work = vm.create_folder("Work").value
        vm.navigate_into(work)

        child = vm.create_folder("Child").value

        assert store.state.folders[child].parent_id == work


class TestSelectionAndLoad:
    def test_range_selection_over_rendered_order(self, make_vm):
        host = FakeHost([("A", "a"), ("B", "b"), ("C", "c"), ("D", "d")])
        vm = make_vm(host=host)
        vm.open()

        vm.click("B")
        vm.click("D", ClickModifier.RANGE)

        assert vm.selection.bulk.value == {"B", "C", "D"}
        assert vm.load_button.value.enabled is False
        assert vm.load_button.value.label == "3 items selected"

    def test_load_selected_writes_back_and_closes(self, vm, host, bus):
        applied = []
        closed = []
        bus.subscribe(PresetAppliedEvent, applied.append)
        vm.close_requested.connect(lambda: closed.append(True))
        vm.click("Beta")
        assert vm.load_button.value.enabled is True

        assert vm.load_selected() is True

        assert host.control.value == "b1"
        assert host.control.changes == ["b1"]
        assert applied[0].preset_name == "Beta"
        assert closed == [True]
        assert vm.is_open.value is False

    def test_load_without_control_alerts(self, make_vm, dialogs):
        vm = make_vm(host=FakeHost([("Alpha", "a1")], with_control=False))
        vm.open()
        vm.click("Alpha")

        assert vm.load_selected() is False

        assert dialogs.alerts == [('Could not find the preset dropdown for "openai".', "error")]
        assert vm.is_open.value is True

    def test_load_with_nothing_selected(self, vm, host):
        assert vm.load_selected() is False
        assert host.control.changes == []

    def test_double_click_loads(self, vm, host):
        assert vm.double_click("Alpha") is True
        assert host.control.value == "a1"

    def test_favorite_double_click_loads(self, vm, host):
        vm.toggle_favorite("Beta")

        assert vm.favorite_double_click("Beta") is True
        assert host.control.value == "b1"

    def test_quick_look_shows_indented_json(self, vm, host, dialogs):
        host.contents["a1"] = {"temp": 0.7, "top_p": 1}
        vm.click("Alpha")

        assert vm.quick_look() is True

        assert dialogs.displays == [("Quick Look: Alpha", json.dumps({"temp": 0.7, "top_p": 1}, indent=2))]

    def test_quick_look_without_content(self, vm, dialogs):
        vm.click("Beta")

        vm.quick_look()

        assert dialogs.displays == [("Quick Look: Beta", NO_CONTENT_MESSAGE)]

    def test_quick_look_without_selection(self, vm, dialogs):
        assert vm.quick_look() is False
        assert dialogs.displays == []


class TestDragAndDrop:
    def test_drop_preset_on_folder(self, vm, store):
        work = vm.create_folder("Work").value

        vm.drag_start("Alpha")
        vm.drag_hover(work)
        result = vm.drag_drop()

        assert result.applied
        assert store.state.presets["Alpha"].folder_id == work
        assert names(vm) == ["Work", "Beta"]

    def test_drop_folder_on_itself_is_rejected(self, vm, dialogs):
        work = vm.create_folder("Work").value

        vm.drag_start(work)
        vm.drag_hover(work)
        result = vm.drag_drop()

        assert result.status is CommandStatus.REJECTED
        assert dialogs.alerts[-1][1] == "error"

    def test_drop_outside_folder(self, vm):
        vm.drag_start("Alpha")
        vm.drag_hover("Beta")

        assert vm.drag_drop() is None


class TestContextMenu:
    def test_folder_actions(self, vm):
        work = vm.create_folder("Work").value

        actions = [entry.action for entry in vm.context_actions(work)]

        assert actions == ["rename_folder", "set_folder_color", "delete_folder"]

    def test_preset_actions_reflect_favorite(self, vm):
        assert vm.context_actions("Alpha")[0].label == "Add to Favorites"

        vm.run_action("favorite", "Alpha")

        assert vm.context_actions("Alpha")[0].label == "Remove from Favorites"
        assert [option.name for option in vm.favorites_list.value] == ["Alpha"]

    def test_bulk_actions(self, vm):
        vm.click("Alpha", ClickModifier.TOGGLE)
        vm.click("Beta", ClickModifier.TOGGLE)

        labels = [entry.label for entry in vm.context_actions("Alpha")]

        assert labels == ["Move 2 items...", "Delete 2 items"]

    def test_bulk_delete_clears_selection(self, vm, store):
        work = vm.create_folder("Work").value
        vm.click(work, ClickModifier.TOGGLE)
        vm.click("Alpha", ClickModifier.TOGGLE)

        result = vm.run_action("bulk_delete")

        assert result.applied
        assert work not in store.state.folders
        assert vm.selection.bulk.value == frozenset()
        assert names(vm) == ["Alpha", "Beta"]

    def test_bulk_move_by_name(self, vm, dialogs, store):
        work = vm.create_folder("Work").value
        vm.click("Alpha", ClickModifier.TOGGLE)
        vm.click("Beta", ClickModifier.TOGGLE)
        dialogs.prompt_answers = ["work"]

        result = vm.run_action("bulk_move")

        assert result.applied
        assert store.state.presets["Alpha"].folder_id == work
        assert store.state.presets["Beta"].folder_id == work
        assert names(vm) == ["Work"]

    def test_set_image_through_picker(self, vm, files, tmp_path, store):
        picture = tmp_path / "pic.gif"
        picture.write_bytes(b"GIF89a...")
        files.path = picture

        assert vm.run_action("set_image", "Alpha").applied
        assert vm.item("Alpha").image_url.startswith("data:image/gif;base64,")

    def test_unknown_action(self, vm):
        with pytest.raises(ValueError):
            vm.run_action("explode", "Alpha")

    def test_item_action_without_identity(self, vm):
        with pytest.raises(ValueError):
            vm.run_action("favorite")


class TestSharedState:
    def test_favorite_toggle_reaches_other_navigator(self, make_vm, storage, clock):
        first = make_vm()
        first.open()
        second = make_vm(store=MetadataStore(storage, clock=clock))
        second.open()

        first.toggle_favorite("Beta")

        assert [option.name for option in second.favorites_list.value] == ["Beta"]

    def test_interleaved_folder_creates_survive_separate_stores(self, make_vm, storage, clock):
        first = make_vm()
        first.open()
        second = make_vm(store=MetadataStore(storage, clock=clock))
        second.open()

        first.create_folder("Work")
        second.create_folder("Play")

        reloaded = MetadataStore(storage, clock=clock).load()
        assert sorted(folder.name for folder in reloaded.folders.values()) == ["Play", "Work"]
        assert names(first)[:2] == ["Play", "Work"]

    def test_own_commit_does_not_reload(self, vm, store, monkeypatch):
        loads = []
        monkeypatch.setattr(store, "load", lambda: loads.append(True))

        assert vm.create_folder("Work").applied

        assert loads == []

    def test_closed_navigator_ignores_events(self, make_vm):
        first = make_vm()
        first.open()
        second = make_vm()
        second.open()
        second.close()
        seen = []
        second.rendered.connect(seen.append)

        first.toggle_favorite("Alpha")

        assert seen == []

    def test_favorites_filter(self, vm):
        vm.toggle_favorite("Beta")

        vm.set_filter("favorites")

        assert names(vm) == ["Beta"]

    def test_uncategorized_filter_hides_filed_presets(self, vm):
        work = vm.create_folder("Work").value
        vm.drag_start("Alpha")
        vm.drag_hover(work)
        vm.drag_drop()

        vm.set_filter("uncategorized")

        assert names(vm) == ["Beta"]
        assert vm.current_folder_id == ROOT_FOLDER_ID


class TestImport:
    def test_import_adds_preset_and_refreshes(self, vm, files, tmp_path, host, dialogs):
        path = tmp_path / "Creative.json"
        path.write_text(json.dumps({"temperature": 1.1}), encoding="utf-8")
        files.path = path

        assert vm.import_preset() == "Creative"

        assert host.saved["Creative"] == {"temperature": 1.1}
        assert "Creative" in names(vm)
        assert dialogs.alerts[-1] == ('Preset "Creative" imported.', "success")

    def test_import_cancelled_picker(self, vm, host):
        assert vm.import_preset() is None
        assert host.saved == {}
