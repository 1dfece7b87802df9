"""Records held in the navigator sidecar and the items rendered from them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..config import ROOT_FOLDER_ID


class ItemType(str, Enum):
    FOLDER = "folder"
    PRESET = "preset"


class RecordKind(str, Enum):
    """Which map of the sidecar a record lives in."""

    FOLDER = "folder"
    PRESET = "preset"


@dataclass(frozen=True)
class PresetOption:
    """One row of the host's preset list.

    ``name`` is the identity used everywhere in the navigator; ``value`` is the
    host's own key and is only ever handed back to the host.
    """

    name: str
    value: str


@dataclass
class Folder:
    id: str
    name: str
    parent_id: str = ROOT_FOLDER_ID
    created_at: Optional[str] = None
    last_modified: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def create(cls, name: str, parent_id: str, timestamp: str) -> "Folder":
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            parent_id=parent_id,
            created_at=timestamp,
            last_modified=timestamp,
        )

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Folder":
        return cls(
            id=payload["id"],
            name=payload["name"],
            parent_id=payload.get("parentId") or ROOT_FOLDER_ID,
            created_at=payload.get("createdAt"),
            last_modified=payload.get("lastModified"),
            color=payload.get("color") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "parentId": self.parent_id,
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        if self.last_modified is not None:
            data["lastModified"] = self.last_modified
        if self.color:
            data["color"] = self.color
        return data


@dataclass
class PresetMetadata:
    created_at: Optional[str] = None
    last_modified: Optional[str] = None
    folder_id: Optional[str] = None
    image_url: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def stamped(cls, timestamp: str) -> "PresetMetadata":
        return cls(created_at=timestamp, last_modified=timestamp)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PresetMetadata":
        return cls(
            created_at=payload.get("createdAt"),
            last_modified=payload.get("lastModified"),
            folder_id=payload.get("folderId") or None,
            image_url=payload.get("imageUrl") or None,
            color=payload.get("color") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        if self.last_modified is not None:
            data["lastModified"] = self.last_modified
        if self.folder_id:
            data["folderId"] = self.folder_id
        if self.image_url:
            data["imageUrl"] = self.image_url
        if self.color:
            data["color"] = self.color
        return data


@dataclass
class MetadataState:
    """In-memory copy of the sidecar: the folder tree plus per-preset records."""

    folders: Dict[str, Folder] = field(default_factory=dict)
    presets: Dict[str, PresetMetadata] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MetadataState":
        folders = {
            key: Folder.from_dict(value)
            for key, value in (payload.get("folders") or {}).items()
        }
        presets = {
            key: PresetMetadata.from_dict(value)
            for key, value in (payload.get("presets") or {}).items()
        }
        return cls(folders=folders, presets=presets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "folders": {key: folder.to_dict() for key, folder in self.folders.items()},
            "presets": {key: meta.to_dict() for key, meta in self.presets.items()},
        }

    def is_descendant(self, folder_id: str, ancestor_id: str) -> bool:
        """Return ``True`` when *folder_id* is *ancestor_id* or lies below it."""

        seen: set[str] = set()
        current: Optional[str] = folder_id
        while current and current != ROOT_FOLDER_ID and current not in seen:
            if current == ancestor_id:
                return True
            seen.add(current)
            folder = self.folders.get(current)
            current = folder.parent_id if folder else None
        return False


@dataclass(frozen=True)
class OrganizerItem:
    """A folder or a preset as it appears in a rendered listing."""

    type: ItemType
    id: str
    name: str
    value: Optional[str] = None
    parent_id: Optional[str] = None
    folder_id: Optional[str] = None
    image_url: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[str] = None
    last_modified: Optional[str] = None

    @classmethod
    def from_folder(cls, folder: Folder) -> "OrganizerItem":
        return cls(
            type=ItemType.FOLDER,
            id=folder.id,
            name=folder.name,
            parent_id=folder.parent_id,
            color=folder.color,
            created_at=folder.created_at,
            last_modified=folder.last_modified,
        )

    @classmethod
    def from_preset(cls, option: PresetOption, meta: PresetMetadata) -> "OrganizerItem":
        return cls(
            type=ItemType.PRESET,
            id=option.name,
            name=option.name,
            value=option.value,
            folder_id=meta.folder_id,
            image_url=meta.image_url,
            color=meta.color,
            created_at=meta.created_at,
            last_modified=meta.last_modified,
        )

    @property
    def is_folder(self) -> bool:
        return self.type is ItemType.FOLDER

    @property
    def is_preset(self) -> bool:
        return self.type is ItemType.PRESET

    @property
    def display_name(self) -> str:
        # Host preset names may carry a path prefix; only the leaf is shown.
        return self.name.split("/")[-1]


__all__ = [
    "Folder",
    "ItemType",
    "MetadataState",
    "OrganizerItem",
    "PresetMetadata",
    "PresetOption",
    "RecordKind",
]
