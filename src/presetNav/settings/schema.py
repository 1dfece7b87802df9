"""Schema helpers for the navigator settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_FILTER_MODE,
    DEFAULT_SORT_MODE,
    DEFAULT_VIEW_MODE,
    FILTER_MODES,
    SORT_MODES,
    SUPPORTED_APIS,
    VIEW_MODES,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "presetNav/settings.schema.json",
    "type": "object",
    "required": ["schema", "ui", "enabled_apis"],
    "properties": {
        "schema": {"const": "presetNav/settings@1"},
        "storage_path": {"type": ["string", "null"]},
        "ui": {
            "type": "object",
            "properties": {
                "view_mode": {"type": "string", "enum": list(VIEW_MODES)},
                "sort": {"type": "string", "enum": list(SORT_MODES)},
                "filter": {"type": "string", "enum": list(FILTER_MODES)},
            },
            "additionalProperties": True,
        },
        "enabled_apis": {
            "type": "array",
            "items": {"type": "string"},
            "uniqueItems": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "presetNav/settings@1",
    "storage_path": None,
    "ui": {
        "view_mode": DEFAULT_VIEW_MODE,
        "sort": DEFAULT_SORT_MODE,
        "filter": DEFAULT_FILTER_MODE,
    },
    "enabled_apis": list(SUPPORTED_APIS),
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def _normalise_apis(entries: list[Any]) -> list[str]:
    apis: list[str] = []
    for entry in entries:
        if isinstance(entry, str) and entry and entry not in apis:
            apis.append(entry)
    return apis


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "ui" and isinstance(value, dict):
                target = merged.setdefault("ui", {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            if key == "enabled_apis" and isinstance(value, list):
                merged[key] = _normalise_apis(value)
                continue
            if key == "storage_path" and value not in {None, ""}:
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
