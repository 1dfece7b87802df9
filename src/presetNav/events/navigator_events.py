from dataclasses import dataclass, field

from .domain_events import DomainEvent


@dataclass(frozen=True)
class FavoritesUpdatedEvent(DomainEvent):
    api_type: str = ""
    preset_name: str = ""
    is_favorite: bool = False


@dataclass(frozen=True)
class MetadataCommittedEvent(DomainEvent):
    api_type: str = ""
    command: str = ""
    # Identifies the dispatcher that wrote the sidecar.
    origin: str = ""


@dataclass(frozen=True)
class PresetAppliedEvent(DomainEvent):
    api_type: str = ""
    preset_name: str = ""
    value: str = ""


@dataclass(frozen=True)
class PresetImportedEvent(DomainEvent):
    api_type: str = ""
    preset_names: list[str] = field(default_factory=list)
