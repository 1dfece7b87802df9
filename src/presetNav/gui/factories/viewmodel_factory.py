"""ViewModelFactory: wires navigator view models from the user settings.

Every navigator and quick-access bar created by one factory shares the same
metadata store, favorites registry and event bus, so folders created or
favorites toggled in one are seen by all the others.
"""

from __future__ import annotations

from typing import Optional

from presetNav.application.interfaces import DialogService, FilePicker, PresetHost
from presetNav.events.bus import EventBus
from presetNav.gui.viewmodels.favorites_bar import FavoritesQuickAccess
from presetNav.gui.viewmodels.navigator_viewmodel import PresetNavigatorViewModel
from presetNav.library.favorites import FavoritesRegistry
from presetNav.library.metadata_store import MetadataStore
from presetNav.settings.manager import SettingsManager
from presetNav.storage.kv_store import JsonFileKeyValueStore, KeyValueStore


class ViewModelFactory:
    """Centrally creates navigator view models for the enabled API types."""

    def __init__(
        self,
        settings: SettingsManager,
        host: PresetHost,
        event_bus: EventBus,
        dialogs: DialogService,
        files: Optional[FilePicker] = None,
        storage: Optional[KeyValueStore] = None,
    ) -> None:
        self._settings = settings
        self._host = host
        self._events = event_bus
        self._dialogs = dialogs
        self._files = files
        self._storage = storage or JsonFileKeyValueStore(settings.storage_file())
        self._favorites = FavoritesRegistry(self._storage)
        self._store = MetadataStore(self._storage)

    def enabled_apis(self) -> list[str]:
        return list(self._settings.get("enabled_apis", []))

    def create_navigator_vm(self, api_type: str) -> PresetNavigatorViewModel:
        if api_type not in self.enabled_apis():
            raise ValueError(f"API type {api_type!r} is not enabled")
        viewmodel = PresetNavigatorViewModel(
            api_type,
            self._host,
            self._dialogs,
            store=self._store,
            favorites=self._favorites,
            event_bus=self._events,
            files=self._files,
            sort_mode=self._settings.get("ui.sort"),
            filter_mode=self._settings.get("ui.filter"),
            view_mode=self._settings.get("ui.view_mode"),
        )
        # Remember the last used modes for the next navigator.
        viewmodel.view.sort_mode.changed.connect(lambda new, _old: self._settings.set("ui.sort", new))
        viewmodel.view.filter_mode.changed.connect(lambda new, _old: self._settings.set("ui.filter", new))
        viewmodel.view.view_mode.changed.connect(lambda new, _old: self._settings.set("ui.view_mode", new))
        return viewmodel

    def create_quick_access_vm(self, api_type: str) -> FavoritesQuickAccess:
        bar = FavoritesQuickAccess(api_type, self._host, self._favorites, self._events, self._dialogs)
        bar.refresh()
        return bar


__all__ = ["ViewModelFactory"]
