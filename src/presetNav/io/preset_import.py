"""Import a preset file picked by the user into the host's preset list."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Tuple

from ..application.interfaces import DialogService, FilePicker, PresetHost
from ..config import IMPORT_ACCEPT
from ..errors import PresetImportError, PresetNavError
from ..events.bus import EventBus
from ..events.navigator_events import PresetImportedEvent
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_preset_file(path: Path) -> Tuple[str, dict]:
    """Return ``(name, body)`` for the preset stored at *path*.

    The name is the file name without its last suffix.  The only sanity check
    is a numeric ``temp`` or ``temperature`` field; everything else in the body
    is passed through untouched.
    """

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PresetImportError(f"Cannot read {path.name}: {exc}") from exc
    try:
        body = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PresetImportError(f"{path.name} is not valid JSON: {exc.msg}") from exc
    if not isinstance(body, dict):
        raise PresetImportError("Invalid preset file.")
    if not (_is_number(body.get("temp")) or _is_number(body.get("temperature"))):
        raise PresetImportError("Invalid preset file.")
    return path.stem, body


class PresetImporter:
    """Pick, validate, and hand one preset file over to the host."""

    def __init__(
        self,
        host: PresetHost,
        api_type: str,
        dialogs: DialogService,
        files: Optional[FilePicker],
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._host = host
        self._api_type = api_type
        self._dialogs = dialogs
        self._files = files
        self._events = event_bus

    def run(self) -> Optional[str]:
        """Run the import flow; returns the stored preset name on success."""

        if self._files is None:
            self._dialogs.alert("File selection is not available.", "error")
            return None
        path = self._files.pick(IMPORT_ACCEPT)
        if path is None:
            return None
        return self.import_path(path)

    def import_path(self, path: Path) -> Optional[str]:
        try:
            name, body = parse_preset_file(path)
            if self._host.preset_exists(name) and not self._dialogs.confirm(
                f'Preset "{name}" already exists. Overwrite?'
            ):
                LOGGER.info("Import of %r cancelled; preset already exists", name)
                return None
            new_name, new_key = self._host.save_preset(name, body)
            if not new_name or not new_key:
                raise PresetImportError("Host response missing details.")
            self._host.register_option(self._api_type, new_name, new_key)
        except (PresetNavError, OSError) as exc:
            LOGGER.error("Preset import error for %s: %s", path, exc)
            self._dialogs.alert(f"Import error: {exc}", "error")
            return None

        LOGGER.info("Imported preset %r as %r for %s", name, new_key, self._api_type)
        self._dialogs.alert(f'Preset "{name}" imported.', "success")
        if self._events is not None:
            self._events.publish(
                PresetImportedEvent(api_type=self._api_type, preset_names=[new_name], source="import")
            )
        return new_name


__all__ = ["PresetImporter", "parse_preset_file"]
