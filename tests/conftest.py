from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from presetNav.application.interfaces import (  # noqa: E402
    DialogService,
    FilePicker,
    PresetControl,
    PresetHost,
)
from presetNav.domain.models import PresetOption  # noqa: E402
from presetNav.events.bus import EventBus  # noqa: E402
from presetNav.library.favorites import FavoritesRegistry  # noqa: E402
from presetNav.library.metadata_store import MetadataStore  # noqa: E402
from presetNav.storage.kv_store import MemoryKeyValueStore  # noqa: E402


class TickingClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class FakeControl(PresetControl):
    def __init__(self) -> None:
        self.value: Optional[str] = None
        self.changes: List[str] = []

    def set_value(self, value: str) -> None:
        self.value = value

    def emit_changed(self) -> None:
        self.changes.append(self.value or "")


class FakeHost(PresetHost):
    def __init__(self, options: List[Tuple[str, str]] | None = None, *, with_control: bool = True) -> None:
        self.options = [PresetOption(name, value) for name, value in (options or [])]
        self.control: Optional[FakeControl] = FakeControl() if with_control else None
        self.contents: Dict[str, Any] = {}
        self.saved: Dict[str, dict] = {}
        self.registered: List[Tuple[str, str, str]] = []

    def list_options(self, api_type: str) -> List[PresetOption]:
        return list(self.options)

    def find_control(self, api_type: str) -> Optional[PresetControl]:
        return self.control

    def preset_exists(self, name: str) -> bool:
        return any(option.name == name for option in self.options)

    def save_preset(self, name: str, body: dict) -> Tuple[str, str]:
        self.saved[name] = body
        return name, f"key-{name}"

    def register_option(self, api_type: str, name: str, key: str) -> None:
        self.registered.append((api_type, name, key))
        if not self.preset_exists(name):
            self.options.append(PresetOption(name, key))

    def get_preset_content(self, value: str) -> Optional[Any]:
        return self.contents.get(value)


class FakeDialogs(DialogService):
    """Scripted answers; records every message shown."""

    def __init__(self) -> None:
        self.confirm_answer = True
        self.prompt_answers: List[Optional[str]] = []
        self.color_answer: Optional[str] = None
        self.confirms: List[str] = []
        self.prompts: List[Tuple[str, str]] = []
        self.alerts: List[Tuple[str, str]] = []
        self.displays: List[Tuple[str, str]] = []
        self.on_confirm = None

    def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        if self.on_confirm is not None:
            self.on_confirm()
        return self.confirm_answer

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        self.prompts.append((message, default))
        return self.prompt_answers.pop(0) if self.prompt_answers else None

    def alert(self, message: str, level: str = "info") -> None:
        self.alerts.append((message, level))

    def pick_color(self, current: Optional[str], title: str) -> Optional[str]:
        return self.color_answer

    def display(self, title: str, content: str) -> None:
        self.displays.append((title, content))


class FakeFilePicker(FilePicker):
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        self.accepts: List[str] = []

    def pick(self, accept: str) -> Optional[Path]:
        self.accepts.append(accept)
        return self.path


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(storage: MemoryKeyValueStore, clock: TickingClock) -> MetadataStore:
    metadata = MetadataStore(storage, clock=clock)
    metadata.load()
    return metadata


@pytest.fixture()
def favorites(storage: MemoryKeyValueStore) -> FavoritesRegistry:
    return FavoritesRegistry(storage)


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def host() -> FakeHost:
    return FakeHost([("Alpha", "a1"), ("Beta", "b1")])


@pytest.fixture()
def dialogs() -> FakeDialogs:
    return FakeDialogs()
