"""Qt implementations of the navigator's dialog and file picking services."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import (
    QApplication,
    QColorDialog,
    QDialog,
    QFileDialog,
    QInputDialog,
    QMessageBox,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from ...application.interfaces import DialogService, FilePicker

_TITLE = "Preset Navigator"

_IMAGE_SUFFIXES = "*.png *.jpg *.jpeg *.gif *.webp *.bmp"


def name_filter(accept: str) -> str:
    """Translate an ``accept`` string (``.json,.settings``, ``image/*``) to a Qt filter."""

    if accept.strip() == "image/*":
        return f"Images ({_IMAGE_SUFFIXES})"
    patterns = [f"*{part.strip()}" for part in accept.split(",") if part.strip().startswith(".")]
    if not patterns:
        return "All files (*)"
    return f"Presets ({' '.join(patterns)})"


def _apply_theme(box: QMessageBox, parent: Optional[QWidget]) -> None:
    palette = parent.palette() if parent else QApplication.palette()
    bg_color = palette.color(QPalette.ColorRole.Window).name()
    text_color = palette.color(QPalette.ColorRole.WindowText).name()
    box.setStyleSheet(
        f"QMessageBox {{ background-color: {bg_color}; color: {text_color}; }}"
        f"QLabel {{ color: {text_color}; }}"
    )


class QtDialogService(DialogService):
    """Blocking Qt dialogs parented to *parent*."""

    _ICONS = {
        "info": QMessageBox.Icon.Information,
        "success": QMessageBox.Icon.Information,
        "error": QMessageBox.Icon.Critical,
    }

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        self._parent = parent

    def confirm(self, message: str) -> bool:
        box = QMessageBox(QMessageBox.Icon.Question, _TITLE, message, QMessageBox.StandardButton.NoButton, self._parent)
        yes_btn = box.addButton("Yes", QMessageBox.ButtonRole.YesRole)
        box.addButton("No", QMessageBox.ButtonRole.NoRole)
        _apply_theme(box, self._parent)
        box.exec()
        clicked = box.clickedButton()
        return clicked == yes_btn if clicked is not None else False

    def prompt(self, message: str, default: str = "") -> Optional[str]:
        text, accepted = QInputDialog.getText(self._parent, _TITLE, message, text=default)
        if not accepted:
            return None
        return text

    def alert(self, message: str, level: str = "info") -> None:
        icon = self._ICONS.get(level, QMessageBox.Icon.Information)
        box = QMessageBox(icon, _TITLE, message, QMessageBox.StandardButton.Ok, self._parent)
        _apply_theme(box, self._parent)
        box.exec()

    def pick_color(self, current: Optional[str], title: str) -> Optional[str]:
        initial = QColor(current) if current else QColor("#ffffff")
        color = QColorDialog.getColor(initial, self._parent, title)
        # Cancelling yields an invalid color.
        if not color.isValid():
            return None
        return color.name()

    def display(self, title: str, content: str) -> None:
        dialog = QDialog(self._parent)
        dialog.setWindowTitle(title)
        view = QPlainTextEdit(dialog)
        view.setReadOnly(True)
        view.setPlainText(content)
        layout = QVBoxLayout(dialog)
        layout.addWidget(view)
        dialog.resize(640, 480)
        dialog.exec()


class QtFilePicker(FilePicker):
    def __init__(self, parent: Optional[QWidget] = None, start: Optional[Path] = None) -> None:
        self._parent = parent
        self._start = start

    def pick(self, accept: str) -> Optional[Path]:
        directory = str(self._start) if self._start is not None else ""
        path, _selected = QFileDialog.getOpenFileName(self._parent, _TITLE, directory, name_filter(accept))
        if not path:
            return None
        return Path(path)


__all__ = ["QtDialogService", "QtFilePicker", "name_filter"]
