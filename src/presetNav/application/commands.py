"""Typed structural commands understood by the mutation dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from ..config import ROOT_FOLDER_ID


@dataclass(frozen=True)
class Command:
    @property
    def name(self) -> str:
        return type(self).__name__


def _freeze(command: Command, attr: str) -> None:
    object.__setattr__(command, attr, tuple(getattr(command, attr)))


@dataclass(frozen=True)
class CreateFolder(Command):
    """``name=None`` asks the user for one."""

    name: Optional[str] = None
    parent_id: str = ROOT_FOLDER_ID


@dataclass(frozen=True)
class RenameFolder(Command):
    folder_id: str
    new_name: Optional[str] = None


@dataclass(frozen=True)
class DeleteFolder(Command):
    folder_id: str
    confirmed: bool = False


@dataclass(frozen=True)
class SetFolderColor(Command):
    """``color=None`` clears the color."""

    folder_id: str
    color: Optional[str] = None


@dataclass(frozen=True)
class PickFolderColor(Command):
    folder_id: str


@dataclass(frozen=True)
class MoveItem(Command):
    identity: str
    target_folder_id: str


@dataclass(frozen=True)
class MoveItemsByFolderName(Command):
    identities: Sequence[str]
    typed_name: Optional[str] = None

    def __post_init__(self) -> None:
        _freeze(self, "identities")


@dataclass(frozen=True)
class RemoveFromFolder(Command):
    preset_name: str


@dataclass(frozen=True)
class DeleteBulk(Command):
    identities: Sequence[str]
    confirmed: bool = False

    def __post_init__(self) -> None:
        _freeze(self, "identities")


@dataclass(frozen=True)
class SetPresetImage(Command):
    preset_name: str
    image_url: str


@dataclass(frozen=True)
class PickPresetImage(Command):
    preset_name: str


@dataclass(frozen=True)
class ToggleFavorite(Command):
    preset_name: str


@dataclass(frozen=True)
class PurgeOrphanedMetadata(Command):
    confirmed: bool = False


class CommandStatus(str, Enum):
    APPLIED = "applied"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class CommandResult:
    status: CommandStatus
    message: str = ""
    affected: Tuple[str, ...] = field(default_factory=tuple)
    value: Any = None

    @property
    def applied(self) -> bool:
        return self.status is CommandStatus.APPLIED

    @classmethod
    def ok(cls, affected: Sequence[str] = (), value: Any = None) -> "CommandResult":
        return cls(CommandStatus.APPLIED, affected=tuple(affected), value=value)

    @classmethod
    def cancelled(cls) -> "CommandResult":
        return cls(CommandStatus.CANCELLED)


__all__ = [
    "Command",
    "CommandResult",
    "CommandStatus",
    "CreateFolder",
    "DeleteBulk",
    "DeleteFolder",
    "MoveItem",
    "MoveItemsByFolderName",
    "PickFolderColor",
    "PickPresetImage",
    "PurgeOrphanedMetadata",
    "RemoveFromFolder",
    "RenameFolder",
    "SetFolderColor",
    "SetPresetImage",
    "ToggleFavorite",
]
