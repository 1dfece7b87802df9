"""JSON schemas for the records presetNav persists."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import StorageCorruptedError

_TIMESTAMP = {"type": ["string", "null"]}
_OPTIONAL_TEXT = {"type": ["string", "null"]}

SIDECAR_SCHEMA: dict[str, Any] = {
    "$id": "presetNav/navigator-metadata.schema.json",
    "type": "object",
    "properties": {
        "folders": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["id", "name", "parentId"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": "string"},
                    "parentId": {"type": "string", "minLength": 1},
                    "createdAt": _TIMESTAMP,
                    "lastModified": _TIMESTAMP,
                    "color": _OPTIONAL_TEXT,
                },
                "additionalProperties": True,
            },
        },
        "presets": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "createdAt": _TIMESTAMP,
                    "lastModified": _TIMESTAMP,
                    "folderId": _OPTIONAL_TEXT,
                    "imageUrl": _OPTIONAL_TEXT,
                    "color": _OPTIONAL_TEXT,
                },
                "additionalProperties": True,
            },
        },
    },
    "additionalProperties": True,
}

FAVORITES_SCHEMA: dict[str, Any] = {
    "$id": "presetNav/favorite-presets.schema.json",
    "type": "array",
    "items": {"type": "string"},
}

_sidecar_validator = Draft202012Validator(SIDECAR_SCHEMA)
_favorites_validator = Draft202012Validator(FAVORITES_SCHEMA)


def validate_sidecar(data: Any) -> None:
    """Raise :class:`StorageCorruptedError` when *data* is not a valid sidecar."""

    try:
        _sidecar_validator.validate(data)
    except ValidationError as exc:
        raise StorageCorruptedError(f"Navigator metadata is malformed: {exc.message}") from exc


def validate_favorites(data: Any) -> None:
    try:
        _favorites_validator.validate(data)
    except ValidationError as exc:
        raise StorageCorruptedError(f"Favorites list is malformed: {exc.message}") from exc


__all__ = ["FAVORITES_SCHEMA", "SIDECAR_SCHEMA", "validate_favorites", "validate_sidecar"]
