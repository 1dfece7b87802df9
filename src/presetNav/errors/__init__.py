"""Custom exception hierarchy for presetNav."""

from __future__ import annotations


class PresetNavError(Exception):
    """Base class for all custom errors raised by presetNav."""


# --- 3-layer hierarchy ---

class DomainError(PresetNavError):
    """Base class for domain-level errors."""


class InfrastructureError(PresetNavError):
    """Base class for infrastructure-level errors."""


class ApplicationError(PresetNavError):
    """Base class for application-level errors."""


# --- Domain errors ---

class FolderNotFoundError(DomainError):
    """Raised when a folder id or typed folder name cannot be resolved."""


class PresetNotFoundError(DomainError):
    """Raised when the requested preset is not in the host list."""


class FolderCycleError(DomainError):
    """Raised when a folder would become its own ancestor."""


# --- Infrastructure errors ---

class StorageError(InfrastructureError):
    """Raised when the durable key/value storage cannot be read or written."""


class StorageCorruptedError(StorageError):
    """Raised when stored navigator data cannot be parsed."""


# --- Application errors ---

class HostControlNotFoundError(ApplicationError):
    """Raised when the host exposes no preset control for an API type."""


class CommandInProgressError(ApplicationError):
    """Raised when a command is dispatched while another one is pending."""


class PresetImportError(ApplicationError):
    """Raised when a preset file cannot be imported."""


# --- Settings ---

class SettingsError(PresetNavError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "ApplicationError",
    "CommandInProgressError",
    "DomainError",
    "FolderCycleError",
    "FolderNotFoundError",
    "HostControlNotFoundError",
    "InfrastructureError",
    "PresetImportError",
    "PresetNavError",
    "PresetNotFoundError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "StorageCorruptedError",
    "StorageError",
]
