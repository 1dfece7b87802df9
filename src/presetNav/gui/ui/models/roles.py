"""Role definitions shared by the navigator models."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

from PySide6.QtCore import Qt


class Roles(IntEnum):
    """Custom roles exposed to QML or widgets."""

    ITEM_ID = Qt.UserRole + 1
    ITEM_TYPE = Qt.UserRole + 2
    IS_FOLDER = Qt.UserRole + 3
    VALUE = Qt.UserRole + 4
    IMAGE_URL = Qt.UserRole + 5
    COLOR = Qt.UserRole + 6
    LAST_MODIFIED = Qt.UserRole + 7
    IS_SELECTED = Qt.UserRole + 8
    IS_BULK_SELECTED = Qt.UserRole + 9
    IS_DROP_TARGET = Qt.UserRole + 10
    IS_FAVORITE = Qt.UserRole + 11
    FULL_NAME = Qt.UserRole + 12


def role_names(base: Dict[int, bytes] | None = None) -> Dict[int, bytes]:
    """Return a mapping of Qt role numbers to byte names."""

    mapping: Dict[int, bytes] = {} if base is None else dict(base)
    mapping.update(
        {
            Roles.ITEM_ID: b"itemId",
            Roles.ITEM_TYPE: b"itemType",
            Roles.IS_FOLDER: b"isFolder",
            Roles.VALUE: b"value",
            Roles.IMAGE_URL: b"imageUrl",
            Roles.COLOR: b"color",
            Roles.LAST_MODIFIED: b"lastModified",
            Roles.IS_SELECTED: b"isSelected",
            Roles.IS_BULK_SELECTED: b"isBulkSelected",
            Roles.IS_DROP_TARGET: b"isDropTarget",
            Roles.IS_FAVORITE: b"isFavorite",
            Roles.FULL_NAME: b"fullName",
        }
    )
    return mapping
