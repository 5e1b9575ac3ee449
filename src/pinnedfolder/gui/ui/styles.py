"""Reusable style generators and the shared list style."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtGui import QColor, QFont, QIcon, QPalette
from PySide6.QtWidgets import QApplication, QStyle


def modern_scrollbar_style(
    base_color: QColor,
    *,
    track_alpha: int = 30,
    handle_alpha: int = 40,
    handle_hover_alpha: int = 100,
    radius: int = 4,
    handle_radius: int = 3,
) -> str:
    """Generate a CSS string for a thin, translucent scrollbar.

    Parameters
    ----------
    base_color:
        Reference color (usually the text color); alpha is replaced by the
        values below.
    track_alpha:
        Alpha (0-255) of the track background.
    handle_alpha:
        Alpha (0-255) of the handle.
    handle_hover_alpha:
        Alpha (0-255) of the hovered handle.
    radius:
        Border radius of the track.
    handle_radius:
        Border radius of the handle.
    """

    if base_color.alpha() < 255:
        base_color = QColor(base_color)
        base_color.setAlpha(255)

    def _hex(alpha: int) -> str:
        color = QColor(base_color)
        color.setAlpha(alpha)
        return color.name(QColor.NameFormat.HexArgb)

    return (
        "QScrollBar:vertical {\n"
        f"    background-color: {_hex(track_alpha)};\n"
        "    margin: 0px;\n"
        "    border: none;\n"
        f"    border-radius: {radius}px;\n"
        "    width: 7px;\n"
        "}\n"
        "QScrollBar::handle:vertical {\n"
        f"    background-color: {_hex(handle_alpha)};\n"
        f"    border-radius: {handle_radius}px;\n"
        "    margin: 1px;\n"
        "    min-height: 30px;\n"
        "}\n"
        "QScrollBar::handle:vertical:hover {\n"
        f"    background-color: {_hex(handle_hover_alpha)};\n"
        "}\n"
        "QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {\n"
        "    height: 0px;\n"
        "    border: none;\n"
        "    background: none;\n"
        "}\n"
        "QScrollBar::add-page:vertical, QScrollBar::sub-page:vertical {\n"
        "    background: none;\n"
        "}\n"
    )


@dataclass(frozen=True)
class ListStyles:
    """Icons, colors and fonts shared by every folder list in the process."""

    folder_icon: QIcon
    empty_folder_icon: QIcon
    file_icon: QIcon
    text_color: QColor
    selected_background: QColor
    selected_text: QColor
    inactive_selected_background: QColor
    font: QFont
    scrollbar_stylesheet: str


_LIST_STYLES: Optional[ListStyles] = None


def _build_list_styles() -> ListStyles:
    app = QApplication.instance()
    if app is None:
        raise RuntimeError("A QApplication must exist before list styles are used")
    style = QApplication.style()
    palette = QApplication.palette()
    text_color = palette.color(QPalette.ColorRole.Text)
    inactive = QColor(palette.color(QPalette.ColorGroup.Inactive, QPalette.ColorRole.Highlight))
    inactive.setAlpha(110)
    return ListStyles(
        folder_icon=style.standardIcon(QStyle.StandardPixmap.SP_DirIcon),
        empty_folder_icon=style.standardIcon(QStyle.StandardPixmap.SP_DirClosedIcon),
        file_icon=style.standardIcon(QStyle.StandardPixmap.SP_FileIcon),
        text_color=text_color,
        selected_background=palette.color(QPalette.ColorRole.Highlight),
        selected_text=palette.color(QPalette.ColorRole.HighlightedText),
        inactive_selected_background=inactive,
        font=QApplication.font(),
        scrollbar_stylesheet=modern_scrollbar_style(text_color),
    )


def list_styles() -> ListStyles:
    """Return the process-wide list style, creating it on first use.

    Styles are purely presentational and live until the process exits.
    """

    global _LIST_STYLES
    if _LIST_STYLES is None:
        _LIST_STYLES = _build_list_styles()
    return _LIST_STYLES
