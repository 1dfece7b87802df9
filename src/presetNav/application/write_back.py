"""The one path through which the navigator touches host-owned state."""

from __future__ import annotations

from typing import Optional

from ..domain.models import PresetOption
from ..errors import HostControlNotFoundError
from ..events.bus import EventBus
from ..events.navigator_events import PresetAppliedEvent
from ..utils.logging import get_logger
from .interfaces import PresetHost

LOGGER = get_logger(__name__)


def apply_preset(
    host: PresetHost,
    api_type: str,
    option: PresetOption,
    event_bus: Optional[EventBus] = None,
) -> None:
    """Point the host control for *api_type* at *option* and notify the host.

    The host performs the actual load when it sees its own change
    notification; nothing here waits for that to finish.
    """

    control = host.find_control(api_type)
    if control is None:
        raise HostControlNotFoundError(f'Could not find the preset dropdown for "{api_type}".')
    control.set_value(option.value)
    control.emit_changed()
    LOGGER.info("Applied preset %r to %s", option.name, api_type)
    if event_bus is not None:
        event_bus.publish(
            PresetAppliedEvent(api_type=api_type, preset_name=option.name, value=option.value, source="write_back")
        )


__all__ = ["apply_preset"]
