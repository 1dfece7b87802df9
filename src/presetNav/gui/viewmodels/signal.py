"""Qt-free signals for the navigator view models.

``Signal`` is a plain observer list; ``ObservableProperty`` wraps a value and
reports changes through its ``changed`` signal.  Both keep the view models
importable and testable without a Qt installation.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Signal:
    """Ordered list of callbacks invoked by :meth:`emit`.

    A handler that raises is logged and skipped; the others still run.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Register *handler* once; returns it so this works as a decorator."""

        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable[..., Any]) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                _logger.error("Signal handler %r failed: %s", handler, exc)

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class ObservableProperty(Generic[T]):
    """Value holder emitting ``changed(new, old)`` when the value differs."""

    def __init__(self, initial_value: T) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if self._value == new_value:
            return
        old_value = self._value
        self._value = new_value
        self.changed.emit(new_value, old_value)
