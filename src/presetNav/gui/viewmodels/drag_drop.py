"""Turn a drag gesture over the listing into a move command."""

from __future__ import annotations

import logging
from typing import Optional

from presetNav.application.commands import MoveItem
from presetNav.domain.models import OrganizerItem
from presetNav.gui.viewmodels.signal import ObservableProperty


class DragDropCoordinator:
    """Track the drag payload and the highlighted drop target.

    Only folders are drop targets.  The coordinator does not inspect the tree:
    dropping a folder onto itself or a descendant still yields a command and
    the dispatcher rejects it.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.payload: Optional[str] = None
        self.drop_target = ObservableProperty(None)

    @property
    def dragging(self) -> bool:
        return self.payload is not None

    def start(self, item: Optional[OrganizerItem]) -> bool:
        """Capture *item* as the payload; a drag outside any item is rejected."""

        if item is None:
            self._logger.debug("Drag rejected: not started over an item")
            self.reset()
            return False
        self.payload = item.id
        self.drop_target.value = None
        return True

    def hover(self, item: Optional[OrganizerItem]) -> bool:
        """Highlight *item* if it is a folder; return whether it accepts drops."""

        if not self.dragging:
            return False
        if item is not None and item.is_folder:
            self.drop_target.value = item.id
            return True
        self.drop_target.value = None
        return False

    def leave(self, item: Optional[OrganizerItem]) -> None:
        if item is not None and self.drop_target.value == item.id:
            self.drop_target.value = None

    def drop(self) -> Optional[MoveItem]:
        """Finish the gesture; returns the move to dispatch, if any."""

        payload, target = self.payload, self.drop_target.value
        self.reset()
        if payload is None or target is None:
            return None
        return MoveItem(identity=payload, target_folder_id=target)

    def reset(self) -> None:
        self.payload = None
        self.drop_target.value = None


__all__ = ["DragDropCoordinator"]
