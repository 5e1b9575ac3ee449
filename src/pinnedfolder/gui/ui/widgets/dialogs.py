"""Reusable dialog helpers for the panel."""

from __future__ import annotations

import os
import posixpath
from datetime import datetime
from typing import Optional

from PySide6.QtGui import QPalette
from PySide6.QtWidgets import QApplication, QMessageBox, QWidget

APP_TITLE = "Pinned Folder"


def _apply_theme(box: QMessageBox, parent: Optional[QWidget]) -> None:
    """Apply the active theme colors to the message box."""

    palette = parent.palette() if parent else QApplication.palette()
    bg_color = palette.color(QPalette.ColorRole.Window).name()
    text_color = palette.color(QPalette.ColorRole.WindowText).name()
    box.setStyleSheet(
        f"QMessageBox {{ background-color: {bg_color}; color: {text_color}; }}"
        f"QLabel {{ color: {text_color}; }}"
    )


def show_error(parent: Optional[QWidget], message: str, *, title: str = APP_TITLE) -> None:
    """Display a blocking error message."""

    box = QMessageBox(QMessageBox.Icon.Critical, title, message, QMessageBox.StandardButton.Ok, parent)
    _apply_theme(box, parent)
    box.exec()


def show_warning(parent: Optional[QWidget], message: str, *, title: str = APP_TITLE) -> None:
    box = QMessageBox(QMessageBox.Icon.Warning, title, message, QMessageBox.StandardButton.Ok, parent)
    _apply_theme(box, parent)
    box.exec()


def format_size(size: int) -> str:
    value = float(size)
    for unit in ("bytes", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "bytes" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} bytes"


def describe_entry(path: str) -> str:
    """Plain-text summary shown by :func:`show_entry_properties`."""

    lines = [f"Name: {posixpath.basename(path) or path}", f"Location: {posixpath.dirname(path) or path}"]
    try:
        info = os.stat(path)
    except OSError as exc:
        lines.append(f"Unavailable: {exc.strerror or exc}")
        return "\n".join(lines)
    if os.path.isdir(path):
        lines.append("Kind: Folder")
    else:
        lines.append("Kind: File")
        lines.append(f"Size: {format_size(info.st_size)}")
    modified = datetime.fromtimestamp(info.st_mtime).strftime("%Y-%m-%d %H:%M")
    lines.append(f"Modified: {modified}")
    return "\n".join(lines)


def show_entry_properties(parent: Optional[QWidget], path: str) -> QMessageBox:
    """Open a non-modal properties box for *path* and return it."""

    box = QMessageBox(
        QMessageBox.Icon.Information,
        f"{posixpath.basename(path) or path} Properties",
        describe_entry(path),
        QMessageBox.StandardButton.Ok,
        parent,
    )
    _apply_theme(box, parent)
    box.setModal(False)
    box.show()
    return box
