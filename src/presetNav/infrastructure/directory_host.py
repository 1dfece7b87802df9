"""A preset host backed by a directory of ``.json`` preset files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..application.interfaces import PresetControl, PresetHost
from ..domain.models import PresetOption
from ..errors import StorageError
from ..utils.jsonio import read_json, write_json
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

ACTIVE_FILE_NAME = ".active_presets.json"


class DirectoryPresetControl(PresetControl):
    """Records the chosen preset of one API type in the directory's active file."""

    def __init__(self, host: "DirectoryPresetHost", api_type: str) -> None:
        self._host = host
        self._api_type = api_type
        self.value: Optional[str] = None

    def set_value(self, value: str) -> None:
        self.value = value

    def emit_changed(self) -> None:
        if self.value is None:
            return
        self._host.activate(self._api_type, self.value)


class DirectoryPresetHost(PresetHost):
    """Every ``<name>.json`` file directly inside *root* is one preset.

    The option name is the file stem and the value is the file name.  Hidden
    files are ignored.  The same directory serves every API type.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _preset_files(self) -> List[Path]:
        if not self._root.is_dir():
            return []
        return sorted(
            (path for path in self._root.glob("*.json") if path.is_file() and not path.name.startswith(".")),
            key=lambda path: path.name,
        )

    def list_options(self, api_type: str) -> List[PresetOption]:
        return [PresetOption(name=path.stem, value=path.name) for path in self._preset_files()]

    def find_control(self, api_type: str) -> Optional[PresetControl]:
        if not self._root.is_dir():
            return None
        return DirectoryPresetControl(self, api_type)

    def preset_exists(self, name: str) -> bool:
        return (self._root / f"{name}.json").is_file()

    def save_preset(self, name: str, body: dict) -> Tuple[str, str]:
        path = self._root / f"{name}.json"
        write_json(path, body)
        LOGGER.info("Saved preset %r to %s", name, path)
        return name, path.name

    def register_option(self, api_type: str, name: str, key: str) -> None:
        # The directory listing is the option list; a saved file shows up on
        # the next refresh without further bookkeeping.
        LOGGER.debug("Preset %r (%s) available for %s", name, key, api_type)

    def get_preset_content(self, value: str) -> Optional[Any]:
        path = self._root / value
        if not path.is_file():
            return None
        try:
            return read_json(path)
        except StorageError as exc:
            LOGGER.warning("Cannot read preset %s: %s", path, exc)
            return None

    # ------------------------------------------------------------------
    # Active presets
    # ------------------------------------------------------------------
    def active_presets(self) -> Dict[str, str]:
        path = self._root / ACTIVE_FILE_NAME
        if not path.exists():
            return {}
        try:
            payload = read_json(path)
        except StorageError as exc:
            LOGGER.warning("Ignoring unreadable active preset file %s: %s", path, exc)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(k): v for k, v in payload.items() if isinstance(v, str)}

    def activate(self, api_type: str, value: str) -> None:
        active = self.active_presets()
        active[api_type] = value
        write_json(self._root / ACTIVE_FILE_NAME, active)
        LOGGER.info("Activated %s for %s", value, api_type)


__all__ = ["DirectoryPresetControl", "DirectoryPresetHost"]
