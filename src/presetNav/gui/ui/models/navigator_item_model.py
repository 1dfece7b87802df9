"""Qt list model presenting the rendered items of a navigator view model."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, Signal

from ....domain.models import OrganizerItem
from ...viewmodels.navigator_viewmodel import PresetNavigatorViewModel
from .roles import Roles, role_names


class NavigatorItemModel(QAbstractListModel):
    """Mirror ``PresetNavigatorViewModel.items`` for widgets or QML.

    The model holds no state of its own beyond a snapshot of the rendered
    list; every gesture still goes to the view model.
    """

    # Qt Signals use camelCase by convention (noqa: N815)
    emptyMessageChanged = Signal(str)  # noqa: N815

    def __init__(self, viewmodel: PresetNavigatorViewModel, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._viewmodel = viewmodel
        self._items: list[OrganizerItem] = list(viewmodel.items.value)

        viewmodel.items.changed.connect(self._on_items_changed)
        viewmodel.selection.changed.connect(self._on_decoration_changed)
        viewmodel.drag.drop_target.changed.connect(self._on_decoration_changed)
        viewmodel.favorites_list.changed.connect(self._on_decoration_changed)
        viewmodel.empty_message.changed.connect(self._on_empty_message_changed)

    def roleNames(self) -> dict[int, bytes]:  # noqa: N802  # Qt override
        return role_names(super().roleNames())

    def rowCount(self, parent: QModelIndex | None = None) -> int:  # noqa: N802  # Qt override
        if parent is not None and parent.isValid():
            return 0
        return len(self._items)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        row = index.row()
        if not index.isValid() or row < 0 or row >= len(self._items):
            return None
        item = self._items[row]

        if role == Qt.ItemDataRole.DisplayRole:
            return item.display_name
        if role == Qt.ItemDataRole.ToolTipRole:
            modified = item.last_modified or "N/A"
            return f"{item.name}\nModified: {modified}"
        if role == Roles.ITEM_ID:
            return item.id
        if role == Roles.ITEM_TYPE:
            return item.type.value
        if role == Roles.IS_FOLDER:
            return item.is_folder
        if role == Roles.VALUE:
            return item.value
        if role == Roles.IMAGE_URL:
            return item.image_url
        if role == Roles.COLOR:
            return item.color
        if role == Roles.LAST_MODIFIED:
            return item.last_modified
        if role == Roles.FULL_NAME:
            return item.name
        if role == Roles.IS_SELECTED:
            return item.is_preset and self._viewmodel.selection.single.value.name == item.id
        if role == Roles.IS_BULK_SELECTED:
            return self._viewmodel.selection.is_bulk_selected(item.id)
        if role == Roles.IS_DROP_TARGET:
            return self._viewmodel.drag.drop_target.value == item.id
        if role == Roles.IS_FAVORITE:
            return item.is_preset and any(
                option.name == item.name for option in self._viewmodel.favorites_list.value
            )
        return None

    def item_at(self, row: int) -> OrganizerItem | None:
        if 0 <= row < len(self._items):
            return self._items[row]
        return None

    # ------------------------------------------------------------------
    # View model callbacks
    # ------------------------------------------------------------------
    def _on_items_changed(self, items: list[OrganizerItem], _old: Any = None) -> None:
        self.beginResetModel()
        self._items = list(items)
        self.endResetModel()

    def _on_decoration_changed(self, *_args: Any) -> None:
        if not self._items:
            return
        top = self.index(0, 0)
        bottom = self.index(len(self._items) - 1, 0)
        self.dataChanged.emit(
            top,
            bottom,
            [Roles.IS_SELECTED, Roles.IS_BULK_SELECTED, Roles.IS_DROP_TARGET, Roles.IS_FAVORITE],
        )

    def _on_empty_message_changed(self, message: str | None, _old: Any = None) -> None:
        self.emptyMessageChanged.emit(message or "")


__all__ = ["NavigatorItemModel"]
