from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ..domain.models import PresetOption


class PresetControl(ABC):
    """The host widget that holds the active preset for one API type."""

    @abstractmethod
    def set_value(self, value: str) -> None:
        """Make *value* the control's current value."""
        pass

    @abstractmethod
    def emit_changed(self) -> None:
        """Fire the host's native "value changed" notification."""
        pass


class PresetHost(ABC):
    """Everything the navigator needs from the application that owns presets.

    Passed in explicitly instead of reaching for host globals, so that the
    navigator can run against a real UI, a directory of files, or a fake.
    """

    @abstractmethod
    def list_options(self, api_type: str) -> List[PresetOption]:
        """Return the raw preset rows for *api_type*, separators included."""
        pass

    @abstractmethod
    def find_control(self, api_type: str) -> Optional[PresetControl]:
        """Return the live preset control for *api_type*, if one exists."""
        pass

    @abstractmethod
    def preset_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def save_preset(self, name: str, body: dict) -> Tuple[str, str]:
        """Persist an imported preset; returns the stored ``(name, key)``."""
        pass

    @abstractmethod
    def register_option(self, api_type: str, name: str, key: str) -> None:
        """Make a freshly saved preset selectable in the host control."""
        pass

    @abstractmethod
    def get_preset_content(self, value: str) -> Optional[Any]:
        """Return the preset body for quick look, or ``None``."""
        pass


class DialogService(ABC):
    """Modal request/response primitives.

    Cancelling is never an error: ``confirm`` returns ``False``, ``prompt`` and
    ``pick_color`` return ``None``.
    """

    @abstractmethod
    def confirm(self, message: str) -> bool:
        pass

    @abstractmethod
    def prompt(self, message: str, default: str = "") -> Optional[str]:
        pass

    @abstractmethod
    def alert(self, message: str, level: str = "info") -> None:
        """Show *message*; *level* is ``info``, ``success`` or ``error``."""
        pass

    @abstractmethod
    def pick_color(self, current: Optional[str], title: str) -> Optional[str]:
        """Return a color, ``""`` to clear it, or ``None`` when cancelled."""
        pass

    @abstractmethod
    def display(self, title: str, content: str) -> None:
        pass


class FilePicker(ABC):
    @abstractmethod
    def pick(self, accept: str) -> Optional[Path]:
        """Let the user choose one file matching *accept*; ``None`` if cancelled."""
        pass
