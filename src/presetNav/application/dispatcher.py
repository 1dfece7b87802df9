"""Single entry point for every structural change to the navigator state."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Type
from uuid import uuid4

from ..config import DEFAULT_FOLDER_NAME, IMAGE_ACCEPT, ROOT_FOLDER_ID
from ..domain.models import Folder, PresetMetadata, RecordKind
from ..errors import (
    CommandInProgressError,
    DomainError,
    FolderCycleError,
    FolderNotFoundError,
    PresetNavError,
    PresetNotFoundError,
)
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..events.navigator_events import FavoritesUpdatedEvent, MetadataCommittedEvent
from ..gui.viewmodels.signal import ObservableProperty, Signal
from ..io.image_attachment import read_image_as_data_url
from ..library.asset_index import AssetIndex
from ..library.favorites import FavoritesRegistry
from ..library.metadata_store import MetadataStore
from ..utils.logging import get_logger
from .commands import (
    Command,
    CommandResult,
    CommandStatus,
    CreateFolder,
    DeleteBulk,
    DeleteFolder,
    MoveItem,
    MoveItemsByFolderName,
    PickFolderColor,
    PickPresetImage,
    PurgeOrphanedMetadata,
    RemoveFromFolder,
    RenameFolder,
    SetFolderColor,
    SetPresetImage,
    ToggleFavorite,
)
from .interfaces import DialogService, FilePicker

LOGGER = get_logger(__name__)


class MutationDispatcher:
    """Validate, apply, commit, and announce structural commands.

    Each :meth:`dispatch` runs one command to completion against the
    in-memory sidecar, writes it back once (bulk commands included), and then
    emits :attr:`changed` so views re-render.  The dispatcher is single-flight:
    a command arriving while another is still waiting on a dialog is rejected.
    """

    def __init__(
        self,
        *,
        api_type: str,
        store: MetadataStore,
        favorites: FavoritesRegistry,
        index: AssetIndex,
        dialogs: DialogService,
        event_bus: EventBus,
        files: Optional[FilePicker] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self._api_type = api_type
        self.origin = uuid4().hex
        self._store = store
        self._favorites = favorites
        self._index = index
        self._dialogs = dialogs
        self._files = files
        self._events = event_bus
        self._errors = error_handler or ErrorHandler(LOGGER, event_bus)
        if error_handler is None:
            self._errors.register_ui_callback(lambda message, _severity: dialogs.alert(message, "error"))

        self.busy = ObservableProperty(False)
        self.changed = Signal()

        self._handlers: Dict[Type[Command], Callable[[Command], CommandResult]] = {
            CreateFolder: self._create_folder,
            RenameFolder: self._rename_folder,
            DeleteFolder: self._delete_folder,
            SetFolderColor: self._set_folder_color,
            PickFolderColor: self._pick_folder_color,
            MoveItem: self._move_item,
            MoveItemsByFolderName: self._move_items_by_folder_name,
            RemoveFromFolder: self._remove_from_folder,
            DeleteBulk: self._delete_bulk,
            SetPresetImage: self._set_preset_image,
            PickPresetImage: self._pick_preset_image,
            ToggleFavorite: self._toggle_favorite,
            PurgeOrphanedMetadata: self._purge_orphaned_metadata,
        }

    @property
    def state(self):
        return self._store.state

    def dispatch(self, command: Command) -> CommandResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {command!r}")
        if self.busy.value:
            busy = CommandInProgressError(f"{command.name} rejected: another action is still in progress.")
            LOGGER.warning("%s", busy)
            return CommandResult(CommandStatus.REJECTED, str(busy))

        self.busy.value = True
        try:
            result = handler(command)
            if result.applied:
                self._store.commit()
        except FolderCycleError as exc:
            result = self._refuse(command, CommandStatus.REJECTED, str(exc))
        except DomainError as exc:
            result = self._refuse(command, CommandStatus.NOT_FOUND, str(exc))
        except PresetNavError as exc:
            result = self._fail(command, exc, ErrorSeverity.ERROR)
        except Exception as exc:  # keep host alive whatever a collaborator does
            result = self._fail(command, exc, ErrorSeverity.CRITICAL)
        finally:
            self.busy.value = False

        LOGGER.debug("%s -> %s", command.name, result.status.value)
        if result.applied:
            self._events.publish(
                MetadataCommittedEvent(
                    api_type=self._api_type,
                    command=command.name,
                    origin=self.origin,
                    source="dispatcher",
                )
            )
            self.changed.emit(result)
        return result

    # ------------------------------------------------------------------
    # Failure paths
    # ------------------------------------------------------------------
    def _refuse(self, command: Command, status: CommandStatus, message: str) -> CommandResult:
        # Domain checks run before any mutation, so nothing needs rolling back.
        LOGGER.info("%s refused: %s", command.name, message)
        self._dialogs.alert(message, "error")
        return CommandResult(status, message)

    def _fail(self, command: Command, exc: Exception, severity: ErrorSeverity) -> CommandResult:
        self._errors.handle(exc, severity, {"command": command.name, "api_type": self._api_type})
        # Discard whatever the command left half-applied in memory.
        self._store.load()
        return CommandResult(CommandStatus.FAILED, str(exc))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def _folder(self, folder_id: str) -> Folder:
        folder = self.state.folders.get(folder_id)
        if folder is None:
            raise FolderNotFoundError(f'Folder "{folder_id}" not found.')
        return folder

    def _require_target(self, folder_id: str) -> None:
        if folder_id != ROOT_FOLDER_ID and folder_id not in self.state.folders:
            raise FolderNotFoundError(f'Folder "{folder_id}" not found.')

    def _is_known_preset(self, name: str) -> bool:
        return name in self.state.presets or self._index.contains(name)

    # ------------------------------------------------------------------
    # Folder commands
    # ------------------------------------------------------------------
    def _create_folder(self, command: CreateFolder) -> CommandResult:
        self._require_target(command.parent_id)
        name = command.name
        if name is None:
            name = self._dialogs.prompt("New Folder Name:", DEFAULT_FOLDER_NAME)
        name = (name or "").strip()
        if not name:
            return CommandResult.cancelled()
        folder = Folder.create(name, command.parent_id, self._store.now())
        self.state.folders[folder.id] = folder
        self._store.mark_dirty()
        LOGGER.info("Created folder %r (%s) under %s", name, folder.id, command.parent_id)
        return CommandResult.ok([folder.id], value=folder.id)

    def _rename_folder(self, command: RenameFolder) -> CommandResult:
        folder = self._folder(command.folder_id)
        new_name = command.new_name
        if new_name is None:
            new_name = self._dialogs.prompt("Enter new folder name:", folder.name)
        new_name = (new_name or "").strip()
        if not new_name or new_name == folder.name:
            return CommandResult.cancelled()
        folder.name = new_name
        self._store.touch(folder.id, RecordKind.FOLDER)
        return CommandResult.ok([folder.id])

    def _delete_folder(self, command: DeleteFolder) -> CommandResult:
        folder = self._folder(command.folder_id)
        if not command.confirmed and not self._dialogs.confirm(
            f'Delete "{folder.name}"? Presets inside will become unassigned.'
        ):
            return CommandResult.cancelled()
        self._remove_folder(folder.id)
        return CommandResult.ok([folder.id])

    def _remove_folder(self, folder_id: str) -> None:
        """Delete *folder_id*, releasing its presets and lifting its subfolders."""

        state = self.state
        folder = state.folders.pop(folder_id)
        new_parent = folder.parent_id
        if new_parent == folder_id or (new_parent != ROOT_FOLDER_ID and new_parent not in state.folders):
            new_parent = ROOT_FOLDER_ID
        for meta in state.presets.values():
            if meta.folder_id == folder_id:
                meta.folder_id = None
        for child in state.folders.values():
            if child.parent_id == folder_id:
                child.parent_id = new_parent
        self._store.mark_dirty()

    def _set_folder_color(self, command: SetFolderColor) -> CommandResult:
        folder = self._folder(command.folder_id)
        folder.color = command.color or None
        self._store.touch(folder.id, RecordKind.FOLDER)
        return CommandResult.ok([folder.id])

    def _pick_folder_color(self, command: PickFolderColor) -> CommandResult:
        folder = self._folder(command.folder_id)
        color = self._dialogs.pick_color(folder.color, f'Set Color for "{folder.name}"')
        if color is None:
            return CommandResult.cancelled()
        return self._set_folder_color(SetFolderColor(folder.id, color or None))

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def _move(self, identity: str, target_folder_id: str) -> None:
        state = self.state
        if identity in state.folders:
            if state.is_descendant(target_folder_id, identity):
                raise FolderCycleError(
                    f'Cannot move "{state.folders[identity].name}" into itself or one of its subfolders.'
                )
            state.folders[identity].parent_id = target_folder_id
            self._store.touch(identity, RecordKind.FOLDER)
            return
        if not self._is_known_preset(identity):
            raise PresetNotFoundError(f'Preset "{identity}" not found.')
        meta = state.presets.get(identity)
        if meta is None:
            meta = state.presets[identity] = PresetMetadata.stamped(self._store.now())
        meta.folder_id = None if target_folder_id == ROOT_FOLDER_ID else target_folder_id
        self._store.touch(identity, RecordKind.PRESET)

    def _move_item(self, command: MoveItem) -> CommandResult:
        self._require_target(command.target_folder_id)
        self._move(command.identity, command.target_folder_id)
        return CommandResult.ok([command.identity])

    def _move_items_by_folder_name(self, command: MoveItemsByFolderName) -> CommandResult:
        folders = list(self.state.folders.values())
        typed = command.typed_name
        if typed is None:
            if not folders:
                self._dialogs.alert("No folders created yet. Create a folder first.", "info")
                return CommandResult.cancelled()
            names = ", ".join(folder.name for folder in folders)
            typed = self._dialogs.prompt(f"Enter folder name to move to:\n({names})")
        if not typed:
            return CommandResult.cancelled()

        wanted = typed.casefold()
        target = next((folder for folder in folders if folder.name.casefold() == wanted), None)
        if target is None:
            raise FolderNotFoundError(f'Folder "{typed}" not found.')

        moved: list[str] = []
        for identity in command.identities:
            try:
                self._move(identity, target.id)
            except DomainError as exc:
                LOGGER.info("Skipping %r during move to %r: %s", identity, target.name, exc)
                continue
            moved.append(identity)
        return CommandResult.ok(moved, value=target.id)

    def _remove_from_folder(self, command: RemoveFromFolder) -> CommandResult:
        meta = self.state.presets.get(command.preset_name)
        if meta is None or not meta.folder_id:
            return CommandResult.cancelled()
        meta.folder_id = None
        self._store.touch(command.preset_name, RecordKind.PRESET)
        return CommandResult.ok([command.preset_name])

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def _delete_bulk(self, command: DeleteBulk) -> CommandResult:
        if not command.identities:
            return CommandResult.cancelled()
        if not command.confirmed and not self._dialogs.confirm(
            f"Delete {len(command.identities)} selected items? This cannot be undone."
        ):
            return CommandResult.cancelled()

        state = self.state
        removed: list[str] = []
        for identity in command.identities:
            hit = False
            if identity in state.folders:
                self._remove_folder(identity)
                hit = True
            if identity in state.presets:
                # Only the local record goes; the host keeps the preset.
                del state.presets[identity]
                self._store.mark_dirty()
                hit = True
            if hit:
                removed.append(identity)
            else:
                LOGGER.debug("Bulk delete skipped unknown identity %r", identity)
        return CommandResult.ok(removed)

    def _purge_orphaned_metadata(self, command: PurgeOrphanedMetadata) -> CommandResult:
        self._index.refresh()
        orphans = self._index.orphaned_names()
        if not orphans:
            return CommandResult.ok([])
        if not command.confirmed and not self._dialogs.confirm(
            f"Remove saved folders and images for {len(orphans)} presets that no longer exist?"
        ):
            return CommandResult.cancelled()
        for name in orphans:
            del self.state.presets[name]
        self._store.mark_dirty()
        return CommandResult.ok(orphans)

    # ------------------------------------------------------------------
    # Preset decorations
    # ------------------------------------------------------------------
    def _set_preset_image(self, command: SetPresetImage) -> CommandResult:
        meta = self.state.presets.get(command.preset_name)
        if meta is None:
            meta = self.state.presets[command.preset_name] = PresetMetadata.stamped(self._store.now())
        meta.image_url = command.image_url
        self._store.touch(command.preset_name, RecordKind.PRESET)
        return CommandResult.ok([command.preset_name])

    def _pick_preset_image(self, command: PickPresetImage) -> CommandResult:
        if self._files is None:
            self._dialogs.alert("Image selection is not available.", "error")
            return CommandResult(CommandStatus.FAILED, "Image selection is not available.")
        path = self._files.pick(IMAGE_ACCEPT)
        if path is None:
            return CommandResult.cancelled()
        data_url = read_image_as_data_url(path)
        return self._set_preset_image(SetPresetImage(command.preset_name, data_url))

    def _toggle_favorite(self, command: ToggleFavorite) -> CommandResult:
        member = self._favorites.toggle(command.preset_name)
        self._events.publish(
            FavoritesUpdatedEvent(
                api_type=self._api_type,
                preset_name=command.preset_name,
                is_favorite=member,
                source="dispatcher",
            )
        )
        return CommandResult.ok([command.preset_name], value=member)


__all__ = ["MutationDispatcher"]
