"""Favorited preset names, stored apart from the folder sidecar."""

from __future__ import annotations

import json
from typing import Iterable, List

from ..config import FAVORITES_STORAGE_KEY
from ..domain.models import PresetOption
from ..errors import StorageCorruptedError
from ..schemas import validate_favorites
from ..storage.kv_store import KeyValueStore
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


class FavoritesRegistry:
    """Ordered set of favorite preset names.

    The registry knows nothing about folders.  Names that are not currently in
    the host list are kept; they simply do not resolve until the preset comes
    back.  Every read goes to storage so several navigators stay in step.
    """

    def __init__(self, storage: KeyValueStore, *, key: str = FAVORITES_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def list(self) -> List[str]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
            validate_favorites(payload)
        except (json.JSONDecodeError, StorageCorruptedError) as exc:
            LOGGER.error("Failed to load favorite presets, starting empty: %s", exc)
            return []
        names: List[str] = []
        for name in payload:
            if name not in names:
                names.append(name)
        return names

    def contains(self, name: str) -> bool:
        return name in self.list()

    def toggle(self, name: str) -> bool:
        """Add *name* if absent, remove it otherwise; return the new membership."""

        names = self.list()
        if name in names:
            names.remove(name)
            member = False
        else:
            names.append(name)
            member = True
        self._write(names)
        LOGGER.debug("Favorite %r is now %s", name, "set" if member else "cleared")
        return member

    def resolve(self, options: Iterable[PresetOption]) -> List[PresetOption]:
        """Return favorites present in *options*, in favorites order."""

        by_name = {}
        for option in options:
            by_name.setdefault(option.name, option)
        return [by_name[name] for name in self.list() if name in by_name]

    def _write(self, names: List[str]) -> None:
        self._storage.set_item(self._key, json.dumps(names))


__all__ = ["FavoritesRegistry"]
