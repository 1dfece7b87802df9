"""Durable sidecar holding the synthetic folder tree and per-preset metadata."""

from __future__ import annotations

import json
from typing import Optional

from ..config import METADATA_STORAGE_KEY
from ..domain.models import MetadataState, RecordKind
from ..errors import StorageCorruptedError
from ..schemas import validate_sidecar
from ..storage.kv_store import KeyValueStore
from ..utils.logging import get_logger
from ..utils.timeutils import Clock, now_iso

LOGGER = get_logger(__name__)


class MetadataStore:
    """Load and persist the sidecar; no business rules live here.

    The store owns the single in-memory :class:`MetadataState` of a navigator
    session.  Commands mutate :attr:`state`, call :meth:`mark_dirty`, and the
    dispatcher calls :meth:`commit` once per logical command, which writes the
    whole record back.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        key: str = METADATA_STORAGE_KEY,
        clock: Optional[Clock] = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._state = MetadataState()
        self._dirty = False

    @property
    def state(self) -> MetadataState:
        return self._state

    @property
    def dirty(self) -> bool:
        return self._dirty

    def now(self) -> str:
        return now_iso(self._clock)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> MetadataState:
        """Read the sidecar, falling back to empty maps on any corruption."""

        raw = self._storage.get_item(self._key)
        self._dirty = False
        if not raw:
            self._state = MetadataState()
            return self._state
        try:
            payload = json.loads(raw)
            validate_sidecar(payload)
            self._state = MetadataState.from_dict(payload)
        except (json.JSONDecodeError, StorageCorruptedError, KeyError, TypeError, AttributeError) as exc:
            LOGGER.error("Failed to load navigator metadata, starting empty: %s", exc)
            self._state = MetadataState()
        return self._state

    def save(self, state: Optional[MetadataState] = None) -> None:
        """Overwrite the stored sidecar with *state* (or the current state)."""

        if state is not None:
            self._state = state
        self._storage.set_item(self._key, json.dumps(self._state.to_dict()))
        self._dirty = False

    def mark_dirty(self) -> None:
        self._dirty = True

    def commit(self) -> bool:
        """Persist pending changes; returns ``True`` when a write happened."""

        if not self._dirty:
            return False
        self.save()
        LOGGER.debug(
            "Committed navigator metadata (%d folders, %d presets)",
            len(self._state.folders),
            len(self._state.presets),
        )
        return True

    # ------------------------------------------------------------------
    # Record helpers
    # ------------------------------------------------------------------
    def touch(self, identity: str, kind: RecordKind | str) -> bool:
        """Set ``lastModified`` of a folder or preset record to now."""

        kind = RecordKind(kind)
        if kind is RecordKind.FOLDER:
            record = self._state.folders.get(identity)
        else:
            record = self._state.presets.get(identity)
        if record is None:
            return False
        record.last_modified = self.now()
        self._dirty = True
        return True


__all__ = ["MetadataStore"]
