"""Single, toggle and range selection over the rendered listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Sequence

from presetNav.domain.models import OrganizerItem
from presetNav.gui.viewmodels.signal import ObservableProperty, Signal


class ClickModifier(str, Enum):
    NONE = "none"
    TOGGLE = "toggle"  # ctrl / cmd
    RANGE = "range"  # shift


@dataclass(frozen=True)
class SelectedPreset:
    name: Optional[str] = None
    value: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class LoadButtonState:
    enabled: bool
    label: str


NO_SELECTION = SelectedPreset()


class SelectionController:
    """Selection state for one navigator.

    The single selection and the bulk set are tracked independently.  The
    anchor is the identity of the last item clicked without the range
    modifier; range clicks are resolved against whatever order is rendered at
    the time of the click.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.single = ObservableProperty(NO_SELECTION)
        self.bulk: ObservableProperty[FrozenSet[str]] = ObservableProperty(frozenset())
        self.anchor: Optional[str] = None
        self.changed = Signal()

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def click(
        self,
        item: OrganizerItem,
        rendered: Sequence[OrganizerItem],
        modifier: ClickModifier = ClickModifier.NONE,
    ) -> Optional[str]:
        """Apply a click on *item*.

        Returns the folder id to navigate into for a plain click on a folder,
        ``None`` otherwise.
        """

        if modifier is ClickModifier.RANGE and self.anchor is not None:
            self.extend_to(item, rendered)
            return None
        if modifier is ClickModifier.TOGGLE:
            self.toggle(item)
            return None

        self._set_bulk(frozenset())
        if item.is_folder:
            return item.id
        self.select(item)
        return None

    def toggle(self, item: OrganizerItem) -> None:
        bulk = set(self.bulk.value)
        if item.id in bulk:
            bulk.remove(item.id)
        else:
            bulk.add(item.id)
        self.anchor = item.id
        self._set_bulk(frozenset(bulk))

    def extend_to(self, item: OrganizerItem, rendered: Sequence[OrganizerItem]) -> bool:
        """Add the inclusive span between the anchor and *item* to the bulk set."""

        order = [entry.id for entry in rendered]
        if self.anchor not in order or item.id not in order:
            self._logger.debug("Range click ignored; anchor %r is not rendered", self.anchor)
            return False
        start, end = sorted((order.index(self.anchor), order.index(item.id)))
        self._set_bulk(self.bulk.value | frozenset(order[start : end + 1]))
        return True

    def select(self, item: OrganizerItem) -> None:
        """Make *item* the single selection and the range anchor."""

        if not item.is_preset:
            return
        self.anchor = item.id
        self.select_preset(item.name, item.value)

    def select_preset(self, name: str, value: Optional[str]) -> None:
        self.single.value = SelectedPreset(name=name, value=value)
        self.changed.emit()

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def is_bulk_selected(self, identity: str) -> bool:
        return identity in self.bulk.value

    def bulk_ids(self) -> list[str]:
        return sorted(self.bulk.value)

    def clear_bulk(self) -> None:
        self._set_bulk(frozenset())

    def forget(self, identities: Sequence[str]) -> None:
        """Drop identities that no longer exist after a mutation."""

        gone = set(identities)
        if self.single.value.name in gone:
            self.single.value = NO_SELECTION
        if self.anchor in gone:
            self.anchor = None
        self._set_bulk(frozenset(self.bulk.value - gone))

    def clear(self) -> None:
        self.single.value = NO_SELECTION
        self.anchor = None
        self._set_bulk(frozenset())

    def load_button_state(self) -> LoadButtonState:
        count = len(self.bulk.value)
        if count > 1:
            return LoadButtonState(False, f"{count} items selected")
        if not self.single.value.is_empty:
            return LoadButtonState(True, "Load Selected Preset")
        return LoadButtonState(False, "Load Selected Preset")

    def _set_bulk(self, bulk: FrozenSet[str]) -> None:
        self.bulk.value = bulk
        self.changed.emit()


__all__ = [
    "ClickModifier",
    "LoadButtonState",
    "NO_SELECTION",
    "SelectedPreset",
    "SelectionController",
]
