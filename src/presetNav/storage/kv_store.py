"""Durable string key/value storage backing the navigator state.

Values are opaque strings; callers serialise their own records.  This keeps
the corruption handling (bad JSON, wrong shape) with the component that owns
the record instead of in the storage layer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..errors import StorageError
from ..utils.jsonio import read_json, write_json

_logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal string store with ``localStorage`` semantics."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None``."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Forget *key*; missing keys are ignored."""


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store used by tests and embedded hosts."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """Keep every key in one JSON object on disk.

    The file is re-read on every access so that several navigator instances
    in one process (or a CLI run next to a GUI) observe each other's writes.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            payload = read_json(self._path)
        except StorageError as exc:
            _logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            _logger.warning("Storage file %s does not hold an object; ignoring it", self._path)
            return {}
        return {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def _write(self, items: Dict[str, str]) -> None:
        write_json(self._path, items)


__all__ = ["JsonFileKeyValueStore", "KeyValueStore", "MemoryKeyValueStore"]
