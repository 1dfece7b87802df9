from __future__ import annotations

from presetNav.events.bus import EventBus
from presetNav.events.navigator_events import FavoritesUpdatedEvent, PresetAppliedEvent


def test_publish_delivers_to_exact_type_only():
    bus = EventBus()
    favorites = []
    applied = []
    bus.subscribe(FavoritesUpdatedEvent, favorites.append)
    bus.subscribe(PresetAppliedEvent, applied.append)

    delivered = bus.publish(FavoritesUpdatedEvent(preset_name="Alpha", is_favorite=True))

    assert delivered == 1
    assert favorites[0].preset_name == "Alpha"
    assert applied == []


def test_failing_handler_does_not_stop_delivery():
    bus = EventBus()
    seen = []

    def broken(_event):
        raise RuntimeError("boom")

    bus.subscribe(FavoritesUpdatedEvent, broken)
    bus.subscribe(FavoritesUpdatedEvent, seen.append)

    assert bus.publish(FavoritesUpdatedEvent()) == 1
    assert len(seen) == 1


def test_unsubscribe_and_cancel():
    bus = EventBus()
    seen = []
    first = bus.subscribe(FavoritesUpdatedEvent, seen.append)
    second = bus.subscribe(FavoritesUpdatedEvent, seen.append)

    bus.unsubscribe(first)
    second.cancel()

    assert bus.publish(FavoritesUpdatedEvent()) == 0
    assert bus.subscriber_count(FavoritesUpdatedEvent) == 0


def test_event_name():
    assert PresetAppliedEvent().name == "PresetAppliedEvent"
