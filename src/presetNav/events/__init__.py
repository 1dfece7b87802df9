from .bus import EventBus, Subscription
from .domain_events import DomainEvent
from .navigator_events import (
    FavoritesUpdatedEvent,
    MetadataCommittedEvent,
    PresetAppliedEvent,
    PresetImportedEvent,
)

__all__ = [
    "DomainEvent",
    "EventBus",
    "FavoritesUpdatedEvent",
    "MetadataCommittedEvent",
    "PresetAppliedEvent",
    "PresetImportedEvent",
    "Subscription",
]
