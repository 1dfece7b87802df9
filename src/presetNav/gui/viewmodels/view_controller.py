"""Search, filter and sort applied to a folder listing."""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence

from presetNav.config import (
    DEFAULT_FILTER_MODE,
    DEFAULT_SORT_MODE,
    DEFAULT_VIEW_MODE,
    EPOCH_SENTINEL,
    FILTER_MODES,
    SORT_MODES,
    VIEW_MODES,
)
from presetNav.domain.models import OrganizerItem
from presetNav.gui.viewmodels.signal import ObservableProperty
from presetNav.utils.collation import collation_key
from presetNav.utils.timeutils import parse_timestamp

SORT_OPTIONS: dict[str, str] = {
    "name-asc": "Name (A-Z)",
    "name-desc": "Name (Z-A)",
    "date-desc": "Date Modified (Newest)",
    "date-asc": "Date Modified (Oldest)",
}

FILTER_OPTIONS: dict[str, str] = {
    "all": "All Items",
    "favorites": "Favorites",
    "uncategorized": "Uncategorized",
    "has-image": "With Images",
}


def normalize_search(text: str | None) -> str:
    return (text or "").strip().casefold()


def matches_search(item: OrganizerItem, term: str) -> bool:
    """Case-insensitive substring match on the shown name.

    An empty *term* matches everything.  A path prefix in a host preset name
    is not searched because it is never displayed.
    """

    return not term or term in item.display_name.casefold()


def passes_filter(item: OrganizerItem, mode: str, favorites: Iterable[str]) -> bool:
    if mode == "favorites":
        # Folders never appear in the favorites view.
        return item.is_preset and item.name in favorites
    if item.is_folder:
        # The asset filters hide folders, like favorites.
        return mode == "all"
    if mode == "uncategorized":
        return not item.folder_id
    if mode == "has-image":
        return bool(item.image_url)
    return True


def _date_key(item: OrganizerItem):
    return parse_timestamp(item.last_modified or item.created_at or EPOCH_SENTINEL)


def sort_items(items: Sequence[OrganizerItem], mode: str) -> List[OrganizerItem]:
    """Order *items* with every folder ahead of every preset.

    Each group is sorted on its own, so the folders-first rule holds for the
    descending modes too.  Python's sort is stable, so equal keys keep the
    listing order.
    """

    if mode not in SORT_MODES:
        raise ValueError(f"Unknown sort mode: {mode!r}")
    folders = [item for item in items if item.is_folder]
    presets = [item for item in items if not item.is_folder]
    if mode.startswith("name"):
        key = lambda item: collation_key(item.name)  # noqa: E731
    else:
        key = _date_key
    reverse = mode.endswith("desc")
    return sorted(folders, key=key, reverse=reverse) + sorted(presets, key=key, reverse=reverse)


class ViewController:
    """Hold the active search/filter/sort/view state and apply it."""

    def __init__(
        self,
        favorites_provider: Callable[[], Iterable[str]],
        *,
        sort_mode: str = DEFAULT_SORT_MODE,
        filter_mode: str = DEFAULT_FILTER_MODE,
        view_mode: str = DEFAULT_VIEW_MODE,
    ) -> None:
        self._favorites_provider = favorites_provider
        self.search_text = ObservableProperty("")
        self.sort_mode = ObservableProperty(self._check(sort_mode, SORT_MODES, "sort"))
        self.filter_mode = ObservableProperty(self._check(filter_mode, FILTER_MODES, "filter"))
        self.view_mode = ObservableProperty(self._check(view_mode, VIEW_MODES, "view"))

    @staticmethod
    def _check(mode: str, allowed: Sequence[str], label: str) -> str:
        if mode not in allowed:
            raise ValueError(f"Unknown {label} mode: {mode!r}")
        return mode

    @property
    def search_term(self) -> str:
        return normalize_search(self.search_text.value)

    def set_search(self, text: str | None) -> None:
        self.search_text.value = text or ""

    def set_sort_mode(self, mode: str) -> None:
        self.sort_mode.value = self._check(mode, SORT_MODES, "sort")

    def set_filter_mode(self, mode: str) -> None:
        self.filter_mode.value = self._check(mode, FILTER_MODES, "filter")

    def set_view_mode(self, mode: str) -> None:
        self.view_mode.value = self._check(mode, VIEW_MODES, "view")

    def toggle_view_mode(self) -> str:
        self.view_mode.value = "list" if self.view_mode.value == "grid" else "grid"
        return self.view_mode.value

    def apply(self, items: Iterable[OrganizerItem]) -> List[OrganizerItem]:
        """Search, then filter, then sort *items*."""

        term = self.search_term
        mode = self.filter_mode.value
        favorites = set(self._favorites_provider()) if mode == "favorites" else set()
        visible = [
            item
            for item in items
            if matches_search(item, term) and passes_filter(item, mode, favorites)
        ]
        return sort_items(visible, self.sort_mode.value)


__all__ = [
    "FILTER_OPTIONS",
    "SORT_OPTIONS",
    "ViewController",
    "matches_search",
    "normalize_search",
    "passes_filter",
    "sort_items",
]
