"""One-click favorite buttons shown next to a host preset control."""

from __future__ import annotations

import logging
from typing import List, Optional

from presetNav.application.interfaces import DialogService, PresetHost
from presetNav.application.write_back import apply_preset
from presetNav.domain.models import PresetOption
from presetNav.errors import HostControlNotFoundError
from presetNav.events.bus import EventBus
from presetNav.events.navigator_events import FavoritesUpdatedEvent, PresetImportedEvent
from presetNav.gui.viewmodels.base import BaseViewModel
from presetNav.gui.viewmodels.signal import ObservableProperty
from presetNav.library.asset_index import is_listable
from presetNav.library.favorites import FavoritesRegistry


class FavoritesQuickAccess(BaseViewModel):
    """Favorites of one API type resolved against its live host list."""

    def __init__(
        self,
        api_type: str,
        host: PresetHost,
        favorites: FavoritesRegistry,
        event_bus: EventBus,
        dialogs: Optional[DialogService] = None,
    ) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self._api_type = api_type
        self._host = host
        self._favorites = favorites
        self._events = event_bus
        self._dialogs = dialogs

        self.buttons: ObservableProperty[List[PresetOption]] = ObservableProperty([])

        self.subscribe_event(event_bus, FavoritesUpdatedEvent, self._on_favorites_updated)
        self.subscribe_event(event_bus, PresetImportedEvent, self._on_presets_imported)

    @property
    def api_type(self) -> str:
        return self._api_type

    @property
    def visible(self) -> bool:
        return bool(self.buttons.value)

    def refresh(self) -> List[PresetOption]:
        options = [option for option in self._host.list_options(self._api_type) if is_listable(option)]
        self.buttons.value = self._favorites.resolve(options)
        return self.buttons.value

    def apply(self, name: str) -> bool:
        option = next((button for button in self.buttons.value if button.name == name), None)
        if option is None:
            self._logger.debug("No favorite button named %r for %s", name, self._api_type)
            return False
        try:
            apply_preset(self._host, self._api_type, option, self._events)
        except HostControlNotFoundError as exc:
            self._logger.error("%s", exc)
            if self._dialogs is not None:
                self._dialogs.alert(str(exc), "error")
            return False
        return True

    # -- EventBus handlers --------------------------------------------------

    def _on_favorites_updated(self, event: FavoritesUpdatedEvent) -> None:
        # One favorites list serves every API type, so a toggle made from any
        # navigator can change which buttons resolve here.
        self.refresh()

    def _on_presets_imported(self, event: PresetImportedEvent) -> None:
        if event.api_type == self._api_type:
            self.refresh()


__all__ = ["FavoritesQuickAccess"]
