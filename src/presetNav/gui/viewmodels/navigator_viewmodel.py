"""Pure Python preset navigator (MVVM) with no Qt dependency.

Joins the live host preset list with the metadata sidecar into a synthetic
folder tree and exposes everything a view needs to draw it: the rendered
items, breadcrumbs, the favorites sidebar, the load button and the empty
state.  Gestures come back in as plain method calls; every structural change
goes through the :class:`MutationDispatcher`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from presetNav.application.commands import (
    CommandResult,
    CommandStatus,
    CreateFolder,
    DeleteBulk,
    DeleteFolder,
    MoveItemsByFolderName,
    PickFolderColor,
    PickPresetImage,
    PurgeOrphanedMetadata,
    RemoveFromFolder,
    RenameFolder,
    ToggleFavorite,
)
from presetNav.application.dispatcher import MutationDispatcher
from presetNav.application.interfaces import DialogService, FilePicker, PresetHost
from presetNav.application.write_back import apply_preset
from presetNav.config import (
    DEFAULT_FILTER_MODE,
    DEFAULT_SORT_MODE,
    DEFAULT_VIEW_MODE,
    ROOT_FOLDER_ID,
    ROOT_FOLDER_NAME,
)
from presetNav.domain.models import OrganizerItem, PresetOption
from presetNav.errors import HostControlNotFoundError
from presetNav.errors.handler import ErrorHandler
from presetNav.events.bus import EventBus
from presetNav.events.navigator_events import FavoritesUpdatedEvent, MetadataCommittedEvent
from presetNav.gui.viewmodels.base import BaseViewModel
from presetNav.gui.viewmodels.drag_drop import DragDropCoordinator
from presetNav.gui.viewmodels.selection import (
    ClickModifier,
    LoadButtonState,
    SelectionController,
)
from presetNav.gui.viewmodels.signal import ObservableProperty, Signal
from presetNav.gui.viewmodels.view_controller import ViewController
from presetNav.io.preset_import import PresetImporter
from presetNav.library.asset_index import AssetIndex
from presetNav.library.favorites import FavoritesRegistry
from presetNav.library.metadata_store import MetadataStore

Crumb = Tuple[str, str]
HOME: Crumb = (ROOT_FOLDER_ID, ROOT_FOLDER_NAME)

EMPTY_FOLDER_MESSAGE = "This folder is empty."
NO_CONTENT_MESSAGE = "Could not load preset content."


@dataclass(frozen=True)
class ContextAction:
    """One entry of an item's context menu."""

    action: str
    label: str
    identity: Optional[str] = None


class PresetNavigatorViewModel(BaseViewModel):
    """Browse, organize and load the presets of one API type."""

    def __init__(
        self,
        api_type: str,
        host: PresetHost,
        dialogs: DialogService,
        *,
        store: MetadataStore,
        favorites: FavoritesRegistry,
        event_bus: EventBus,
        files: Optional[FilePicker] = None,
        error_handler: Optional[ErrorHandler] = None,
        sort_mode: str = DEFAULT_SORT_MODE,
        filter_mode: str = DEFAULT_FILTER_MODE,
        view_mode: str = DEFAULT_VIEW_MODE,
    ) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self._api_type = api_type
        self._host = host
        self._dialogs = dialogs
        self._store = store
        self._favorites = favorites
        self._events = event_bus

        self.index = AssetIndex(host, api_type, store)
        self.view = ViewController(
            favorites.list,
            sort_mode=sort_mode,
            filter_mode=filter_mode,
            view_mode=view_mode,
        )
        self.selection = SelectionController()
        self.drag = DragDropCoordinator()
        self.dispatcher = MutationDispatcher(
            api_type=api_type,
            store=store,
            favorites=favorites,
            index=self.index,
            dialogs=dialogs,
            event_bus=event_bus,
            files=files,
            error_handler=error_handler,
        )
        self.importer = PresetImporter(host, api_type, dialogs, files, event_bus)

        # Observable properties
        self.is_open = ObservableProperty(False)
        self.items: ObservableProperty[List[OrganizerItem]] = ObservableProperty([])
        self.favorites_list: ObservableProperty[List[PresetOption]] = ObservableProperty([])
        self.breadcrumbs: ObservableProperty[Tuple[Crumb, ...]] = ObservableProperty((HOME,))
        self.load_button = ObservableProperty(LoadButtonState(False, "Load Selected Preset"))
        self.empty_message: ObservableProperty[Optional[str]] = ObservableProperty(None)

        # Signals
        self.rendered = Signal()  # emits (items)
        self.close_requested = Signal()

        self.dispatcher.changed.connect(self._on_command_applied)
        self.selection.changed.connect(self._update_load_button)
        for prop in (self.view.search_text, self.view.sort_mode, self.view.filter_mode, self.view.view_mode):
            prop.changed.connect(self._on_view_changed)

    @property
    def api_type(self) -> str:
        return self._api_type

    @property
    def current_folder_id(self) -> str:
        return self.breadcrumbs.value[-1][0]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> None:
        """Load the sidecar, read the host list and render the root folder."""

        self._store.load()
        self.index.refresh()
        self.index.stamp_missing_metadata()
        self.breadcrumbs.value = (HOME,)
        self.selection.clear_bulk()
        self.is_open.value = True
        if not self._subscriptions:
            self.subscribe_event(self._events, FavoritesUpdatedEvent, self._on_favorites_updated)
            self.subscribe_event(self._events, MetadataCommittedEvent, self._on_metadata_committed)
        # Resetting the search re-renders only when it actually changes.
        self.view.set_search("")
        self.render()

    def close(self) -> None:
        self.selection.clear()
        self.drag.reset()
        self.breadcrumbs.value = (HOME,)
        self.items.value = []
        self.is_open.value = False
        self.unsubscribe_all()

    def refresh(self) -> None:
        """Re-read the host list, e.g. after an import, and re-render."""

        self.index.refresh()
        self.render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> List[OrganizerItem]:
        if not self.is_open.value:
            return []
        self._sync_breadcrumbs()
        items = self.view.apply(self.index.list_children(self.current_folder_id))
        self.items.value = items
        self.favorites_list.value = self._favorites.resolve(self.index.options)

        term = self.view.search_text.value.strip()
        if items:
            self.empty_message.value = None
        elif term:
            self.empty_message.value = f'No results for "{term}"'
        else:
            self.empty_message.value = EMPTY_FOLDER_MESSAGE
        self._update_load_button()
        self.rendered.emit(items)
        return items

    def _sync_breadcrumbs(self) -> None:
        # Follow renames and drop crumbs whose folder has gone away.
        folders = self._store.state.folders
        crumbs: list[Crumb] = [HOME]
        for folder_id, _name in self.breadcrumbs.value[1:]:
            folder = folders.get(folder_id)
            if folder is None:
                break
            crumbs.append((folder.id, folder.name))
        self.breadcrumbs.value = tuple(crumbs)

    def _update_load_button(self) -> None:
        self.load_button.value = self.selection.load_button_state()

    def is_favorite(self, name: str) -> bool:
        return self._favorites.contains(name)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def navigate_into(self, folder_id: str) -> bool:
        folder = self._store.state.folders.get(folder_id)
        if folder is None:
            self._logger.warning("Cannot open unknown folder %s", folder_id)
            return False
        self.breadcrumbs.value = self.breadcrumbs.value + ((folder.id, folder.name),)
        self.render()
        return True

    def navigate_to(self, index: int) -> None:
        """Jump back to the breadcrumb at *index*; later crumbs are dropped."""

        crumbs = self.breadcrumbs.value
        if not 0 <= index < len(crumbs):
            raise IndexError(f"No breadcrumb at position {index}")
        self.breadcrumbs.value = crumbs[: index + 1]
        self.render()

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------
    def set_search(self, text: Optional[str]) -> None:
        self.view.set_search(text)

    def clear_search(self) -> None:
        self.view.set_search("")

    def set_sort(self, mode: str) -> None:
        self.view.set_sort_mode(mode)

    def set_filter(self, mode: str) -> None:
        self.view.set_filter_mode(mode)

    def toggle_view_mode(self) -> str:
        return self.view.toggle_view_mode()

    def _on_view_changed(self, _new, _old) -> None:
        self.render()

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def item(self, identity: Optional[str]) -> Optional[OrganizerItem]:
        if identity is None:
            return None
        return next((item for item in self.items.value if item.id == identity), None)

    def click(self, identity: str, modifier: ClickModifier = ClickModifier.NONE) -> None:
        item = self.item(identity)
        if item is None:
            return
        folder_id = self.selection.click(item, self.items.value, modifier)
        if folder_id is not None:
            self.navigate_into(folder_id)

    def double_click(self, identity: str) -> bool:
        item = self.item(identity)
        if item is None or not item.is_preset:
            return False
        self.selection.select(item)
        return self.load_selected()

    def drag_start(self, identity: Optional[str]) -> bool:
        return self.drag.start(self.item(identity))

    def drag_hover(self, identity: Optional[str]) -> bool:
        return self.drag.hover(self.item(identity))

    def drag_leave(self, identity: Optional[str]) -> None:
        self.drag.leave(self.item(identity))

    def drag_drop(self) -> Optional[CommandResult]:
        command = self.drag.drop()
        if command is None:
            return None
        return self.dispatcher.dispatch(command)

    def favorite_click(self, name: str) -> None:
        option = self.index.find_option(name)
        if option is not None:
            self.selection.select_preset(option.name, option.value)

    def favorite_double_click(self, name: str) -> bool:
        self.favorite_click(name)
        return self.load_selected()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def create_folder(self, name: Optional[str] = None) -> CommandResult:
        return self.dispatcher.dispatch(CreateFolder(name=name, parent_id=self.current_folder_id))

    def toggle_favorite(self, name: str) -> CommandResult:
        return self.dispatcher.dispatch(ToggleFavorite(name))

    def purge_orphaned_metadata(self) -> CommandResult:
        return self.dispatcher.dispatch(PurgeOrphanedMetadata())

    def import_preset(self) -> Optional[str]:
        name = self.importer.run()
        if name is not None:
            self.refresh()
        return name

    def context_actions(self, identity: str) -> List[ContextAction]:
        """Return the context menu entries for the item *identity*."""

        bulk = self.selection.bulk.value
        if len(bulk) > 1 and identity in bulk:
            count = len(bulk)
            return [
                ContextAction("bulk_move", f"Move {count} items..."),
                ContextAction("bulk_delete", f"Delete {count} items"),
            ]
        item = self.item(identity)
        if item is None:
            return []
        if item.is_folder:
            return [
                ContextAction("rename_folder", "Rename", identity),
                ContextAction("set_folder_color", "Set Color", identity),
                ContextAction("delete_folder", "Delete", identity),
            ]
        if self.is_favorite(identity):
            favorite = ContextAction("unfavorite", "Remove from Favorites", identity)
        else:
            favorite = ContextAction("favorite", "Add to Favorites", identity)
        return [
            favorite,
            ContextAction("set_image", "Set Image", identity),
            ContextAction("add_to_folder", "Move to Folder...", identity),
            ContextAction("remove_from_folder", "Remove from Folder", identity),
        ]

    def run_action(self, action: str, identity: Optional[str] = None) -> CommandResult:
        """Dispatch the command behind a context menu entry."""

        if action == "bulk_move":
            return self.dispatcher.dispatch(MoveItemsByFolderName(self.selection.bulk_ids()))
        if action == "bulk_delete":
            result = self.dispatcher.dispatch(DeleteBulk(self.selection.bulk_ids()))
            if result.applied:
                self.selection.clear_bulk()
            return result
        if identity is None:
            raise ValueError(f"Action {action!r} needs an item")
        if action in ("favorite", "unfavorite"):
            return self.toggle_favorite(identity)
        if action == "rename_folder":
            return self.dispatcher.dispatch(RenameFolder(identity))
        if action == "set_folder_color":
            return self.dispatcher.dispatch(PickFolderColor(identity))
        if action == "delete_folder":
            return self.dispatcher.dispatch(DeleteFolder(identity))
        if action == "set_image":
            return self.dispatcher.dispatch(PickPresetImage(identity))
        if action == "add_to_folder":
            return self.dispatcher.dispatch(MoveItemsByFolderName([identity]))
        if action == "remove_from_folder":
            return self.dispatcher.dispatch(RemoveFromFolder(identity))
        raise ValueError(f"Unknown action: {action!r}")

    def _on_command_applied(self, result: CommandResult) -> None:
        if result.status is CommandStatus.APPLIED and result.affected:
            gone = [
                identity
                for identity in result.affected
                if identity not in self._store.state.folders and not self.index.contains(identity)
            ]
            if gone:
                self.selection.forget(gone)
        self.render()

    # ------------------------------------------------------------------
    # Load / quick look
    # ------------------------------------------------------------------
    def load_selected(self) -> bool:
        """Hand the selected preset to the host and close the navigator."""

        selected = self.selection.single.value
        if selected.is_empty:
            return False
        option = PresetOption(name=selected.name or "", value=selected.value or "")
        try:
            apply_preset(self._host, self._api_type, option, self._events)
        except HostControlNotFoundError as exc:
            self._logger.error("%s", exc)
            self._dialogs.alert(str(exc), "error")
            return False
        self.close_requested.emit()
        self.close()
        return True

    def quick_look(self) -> bool:
        """Show the selected preset's body as indented JSON."""

        name = self.selection.single.value.name
        if not name:
            return False
        option = self.index.find_option(name)
        if option is None:
            return False
        content = self._host.get_preset_content(option.value)
        if content is None:
            text = NO_CONTENT_MESSAGE
        else:
            text = json.dumps(content, indent=2, ensure_ascii=False)
        self._dialogs.display(f"Quick Look: {option.name}", text)
        return True

    # -- EventBus handlers --------------------------------------------------

    def _on_favorites_updated(self, event: FavoritesUpdatedEvent) -> None:
        if self.is_open.value:
            self.render()

    def _on_metadata_committed(self, event: MetadataCommittedEvent) -> None:
        """Pick up a sidecar written by another navigator before our next commit."""

        if event.origin == self.dispatcher.origin or not self.is_open.value:
            return
        self._store.load()
        self.render()


__all__ = ["ContextAction", "PresetNavigatorViewModel"]
