"""Default configuration values for presetNav."""

from __future__ import annotations

from typing import Final

# The root folder is implicit: it is never stored in the sidecar.  Both a
# folder whose ``parentId`` equals this value and a preset without a
# ``folderId`` live at the top level of the navigator.
ROOT_FOLDER_ID: Final[str] = "root"
ROOT_FOLDER_NAME: Final[str] = "Home"

# Keys under which the durable state is stored in the key/value storage.  The
# metadata sidecar and the favorites list have independent lifecycles, so they
# are never written together.
METADATA_STORAGE_KEY: Final[str] = "presetNav.navigatorMetadata"
FAVORITES_STORAGE_KEY: Final[str] = "presetNav.favoritePresets"

# Host rows matching these sentinels are separators or headers rather than
# real presets and never reach the navigator.
SEPARATOR_VALUE: Final[str] = "---"
HEADER_MARKER: Final[str] = "=="

# Sort modes fall back to this timestamp when a record carries neither
# ``lastModified`` nor ``createdAt``.
EPOCH_SENTINEL: Final[str] = "1970-01-01"

DEFAULT_FOLDER_NAME: Final[str] = "New Folder"
DEFAULT_SORT_MODE: Final[str] = "name-asc"
DEFAULT_FILTER_MODE: Final[str] = "all"
DEFAULT_VIEW_MODE: Final[str] = "grid"

SORT_MODES: Final[tuple[str, ...]] = ("name-asc", "name-desc", "date-asc", "date-desc")
FILTER_MODES: Final[tuple[str, ...]] = ("all", "favorites", "uncategorized", "has-image")
VIEW_MODES: Final[tuple[str, ...]] = ("grid", "list")

# API types whose preset dropdowns get a navigator attached.
SUPPORTED_APIS: Final[tuple[str, ...]] = (
    "openai",
    "novel",
    "kobold",
    "textgenerationwebui",
    "anthropic",
    "claude",
    "google",
    "scale",
    "cohere",
    "mistral",
    "aix",
    "openrouter",
)

# File pickers filter on these; nothing else validates the picked file type.
IMPORT_ACCEPT: Final[str] = ".json,.settings"
IMAGE_ACCEPT: Final[str] = "image/*"

STORAGE_FILE_NAME: Final[str] = "storage.json"
