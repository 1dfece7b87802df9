"""Join the live host preset list with the sidecar."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..application.interfaces import PresetHost
from ..config import HEADER_MARKER, ROOT_FOLDER_ID, SEPARATOR_VALUE
from ..domain.models import OrganizerItem, PresetMetadata, PresetOption
from ..utils.logging import get_logger
from .metadata_store import MetadataStore

LOGGER = get_logger(__name__)


def is_listable(option: PresetOption) -> bool:
    """Reject empty rows and the host's separator/header entries."""

    if not option.name or not option.value:
        return False
    if option.value == SEPARATOR_VALUE:
        return False
    return HEADER_MARKER not in option.name


class AssetIndex:
    """Answer "what belongs in folder X" for one API type.

    The index is a read-only view over the host list; the only thing it ever
    writes is the lazily created metadata record for a preset seen for the
    first time, and that write is committed before a listing is returned so a
    later call never re-stamps ``createdAt``.
    """

    def __init__(self, host: PresetHost, api_type: str, store: MetadataStore) -> None:
        self._host = host
        self._api_type = api_type
        self._store = store
        self._options: List[PresetOption] = []
        self._by_name: Dict[str, PresetOption] = {}

    @property
    def api_type(self) -> str:
        return self._api_type

    @property
    def options(self) -> List[PresetOption]:
        return list(self._options)

    def refresh(self) -> List[PresetOption]:
        """Re-read the host list for this API type."""

        options: List[PresetOption] = []
        by_name: Dict[str, PresetOption] = {}
        for option in self._host.list_options(self._api_type):
            if not is_listable(option) or option.name in by_name:
                continue
            by_name[option.name] = option
            options.append(option)
        self._options = options
        self._by_name = by_name
        LOGGER.debug("Indexed %d presets for %s", len(options), self._api_type)
        return self.options

    def find_option(self, name: str) -> Optional[PresetOption]:
        return self._by_name.get(name)

    def contains(self, name: str) -> bool:
        return name in self._by_name

    def stamp_missing_metadata(self) -> int:
        """Create and commit metadata for every preset that has none yet."""

        created = self._stamp_missing()
        if created:
            self._store.commit()
        return created

    def list_children(self, folder_id: str) -> List[OrganizerItem]:
        """Return the folders and presets directly inside *folder_id*."""

        created = self._stamp_missing()
        state = self._store.state
        items: List[OrganizerItem] = []
        seen: set[str] = set()

        for folder in state.folders.values():
            if folder.parent_id == folder_id and folder.id not in seen:
                seen.add(folder.id)
                items.append(OrganizerItem.from_folder(folder))

        for option in self._options:
            meta = state.presets[option.name]
            in_folder = meta.folder_id == folder_id
            at_root = not meta.folder_id and folder_id == ROOT_FOLDER_ID
            if (in_folder or at_root) and option.name not in seen:
                seen.add(option.name)
                items.append(OrganizerItem.from_preset(option, meta))

        if created:
            self._store.commit()
        return items

    def orphaned_names(self) -> List[str]:
        """Names with metadata whose preset is no longer in the host list."""

        return [name for name in self._store.state.presets if name not in self._by_name]

    def _stamp_missing(self) -> int:
        state = self._store.state
        created = 0
        timestamp = self._store.now()
        for option in self._options:
            if option.name not in state.presets:
                state.presets[option.name] = PresetMetadata.stamped(timestamp)
                created += 1
        if created:
            self._store.mark_dirty()
        return created


__all__ = ["AssetIndex", "is_listable"]
