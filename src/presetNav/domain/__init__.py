from .models import (
    Folder,
    ItemType,
    MetadataState,
    OrganizerItem,
    PresetMetadata,
    PresetOption,
    RecordKind,
)

__all__ = [
    "Folder",
    "ItemType",
    "MetadataState",
    "OrganizerItem",
    "PresetMetadata",
    "PresetOption",
    "RecordKind",
]
