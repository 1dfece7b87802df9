"""Tests for search, filter and sort: pure Python, no Qt dependency."""

from __future__ import annotations

import pytest

from presetNav.domain.models import ItemType, OrganizerItem
from presetNav.gui.viewmodels.view_controller import (
    FILTER_OPTIONS,
    SORT_OPTIONS,
    ViewController,
    passes_filter,
    sort_items,
)


def folder(name, modified=None):
    return OrganizerItem(type=ItemType.FOLDER, id=f"id-{name}", name=name, last_modified=modified)


def preset(name, *, folder_id=None, image=None, modified=None, created=None):
    return OrganizerItem(
        type=ItemType.PRESET,
        id=name,
        name=name,
        value=name.lower(),
        folder_id=folder_id,
        image_url=image,
        last_modified=modified,
        created_at=created,
    )


def names(items):
    return [item.name for item in items]


class TestSort:
    def test_name_asc_is_locale_aware(self):
        items = [preset("Beta"), preset("alpha"), preset("Gamma")]

        assert names(sort_items(items, "name-asc")) == ["alpha", "Beta", "Gamma"]

    def test_name_desc(self):
        items = [preset("Beta"), preset("alpha"), preset("Gamma")]

        assert names(sort_items(items, "name-desc")) == ["Gamma", "Beta", "alpha"]

    def test_accents_do_not_dominate(self):
        items = [preset("Zeta"), preset("Éclair"), preset("apple")]

        assert names(sort_items(items, "name-asc")) == ["apple", "Éclair", "Zeta"]

    @pytest.mark.parametrize("mode", ["name-asc", "name-desc", "date-asc", "date-desc"])
    def test_folders_always_first(self, mode):
        items = [preset("Alpha"), folder("Zed"), preset("Beta"), folder("Able")]

        result = sort_items(items, mode)

        assert [item.type for item in result[:2]] == [ItemType.FOLDER, ItemType.FOLDER]
        assert [item.type for item in result[2:]] == [ItemType.PRESET, ItemType.PRESET]

    def test_date_modes_fall_back_to_created_then_epoch(self):
        items = [
            preset("New", modified="2024-03-01T00:00:00.000Z"),
            preset("Created", created="2024-02-01T00:00:00.000Z"),
            preset("Never"),
        ]

        assert names(sort_items(items, "date-asc")) == ["Never", "Created", "New"]
        assert names(sort_items(items, "date-desc")) == ["New", "Created", "Never"]

    def test_sort_is_stable_for_equal_keys(self):
        same = "2024-01-01T00:00:00.000Z"
        items = [preset("First", modified=same), preset("Second", modified=same)]

        assert names(sort_items(items, "date-asc")) == ["First", "Second"]

    def test_sort_is_deterministic(self):
        items = [preset("b"), preset("B"), preset("a"), preset("A")]

        assert names(sort_items(items, "name-asc")) == names(sort_items(list(reversed(items)), "name-asc"))
        assert names(sort_items(items, "name-asc")) == ["a", "A", "b", "B"]

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            sort_items([], "size-asc")


class TestFilter:
    def test_favorites_excludes_folders(self):
        assert not passes_filter(folder("Work"), "favorites", {"Work"})
        assert passes_filter(preset("Alpha"), "favorites", {"Alpha"})
        assert not passes_filter(preset("Beta"), "favorites", {"Alpha"})

    def test_uncategorized_hides_folders(self):
        assert not passes_filter(folder("Work"), "uncategorized", set())
        assert passes_filter(preset("Beta"), "uncategorized", set())
        assert not passes_filter(preset("Alpha", folder_id="f1"), "uncategorized", set())

    def test_has_image_hides_folders(self):
        assert not passes_filter(folder("Work"), "has-image", set())
        assert passes_filter(preset("Alpha", image="data:,"), "has-image", set())
        assert not passes_filter(preset("Beta"), "has-image", set())


class TestViewController:
    def test_search_is_case_insensitive_substring(self):
        view = ViewController(lambda: [])
        view.set_search("  ALP ")

        result = view.apply([preset("Alpha"), preset("Beta"), folder("Alpine")])

        assert names(result) == ["Alpine", "Alpha"]

    def test_blank_search_matches_everything(self):
        view = ViewController(lambda: [])
        view.set_search("   ")

        assert len(view.apply([preset("Alpha"), preset("Beta")])) == 2

    def test_uncategorized_scenario(self):
        view = ViewController(lambda: [], filter_mode="uncategorized")

        result = view.apply([folder("Work"), preset("Alpha", folder_id="id-Work"), preset("Beta")])

        assert names(result) == ["Beta"]

    def test_all_filter_keeps_folders(self):
        view = ViewController(lambda: [])

        assert names(view.apply([preset("Beta"), folder("Work")])) == ["Work", "Beta"]

    def test_search_matches_shown_name_only(self):
        view = ViewController(lambda: [])
        items = [preset("team/Alpha"), preset("Beta")]

        view.set_search("alpha")
        assert names(view.apply(items)) == ["team/Alpha"]

        view.set_search("team")
        assert view.apply(items) == []

    def test_favorites_filter_reads_provider(self):
        view = ViewController(lambda: ["Beta"], filter_mode="favorites")

        assert names(view.apply([folder("Work"), preset("Alpha"), preset("Beta")])) == ["Beta"]

    def test_toggle_view_mode(self):
        view = ViewController(lambda: [])
        changes = []
        view.view_mode.changed.connect(lambda new, old: changes.append((new, old)))

        assert view.toggle_view_mode() == "list"
        assert view.toggle_view_mode() == "grid"
        assert changes == [("list", "grid"), ("grid", "list")]

    @pytest.mark.parametrize(
        "setter, value",
        [("set_sort_mode", "random"), ("set_filter_mode", "recent"), ("set_view_mode", "tiles")],
    )
    def test_unknown_modes_raise(self, setter, value):
        view = ViewController(lambda: [])

        with pytest.raises(ValueError):
            getattr(view, setter)(value)

    def test_option_labels_cover_every_mode(self):
        assert set(SORT_OPTIONS) == {"name-asc", "name-desc", "date-asc", "date-desc"}
        assert set(FILTER_OPTIONS) == {"all", "favorites", "uncategorized", "has-image"}
