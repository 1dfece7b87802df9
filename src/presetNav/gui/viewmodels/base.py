"""Shared lifecycle for navigator view models."""

from __future__ import annotations

from typing import Callable, Type

from presetNav.events.bus import EventBus, Subscription


class BaseViewModel:
    """Track bus subscriptions so :meth:`dispose` can drop them all."""

    def __init__(self) -> None:
        self._subscriptions: list[tuple[EventBus, Subscription]] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append((event_bus, sub))
        return sub

    def unsubscribe_all(self) -> None:
        for bus, sub in self._subscriptions:
            bus.unsubscribe(sub)
        self._subscriptions.clear()

    def dispose(self) -> None:
        self.unsubscribe_all()
        self._disposed = True
